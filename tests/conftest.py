"""Shared fixtures: artifact files built on the fly under tmp_path."""

from __future__ import annotations

import html
import json

import pytest


PYTEST_HTML_BLOB = {
    "environment": {"Python": "3.11.7", "Platform": "Linux-6.5.0-x86_64"},
    "tests": {
        "tests/test_sample.py::test_add": [
            {"result": "Passed", "duration": "00:00:01", "log": "No log output captured."},
        ],
        "tests/test_sample.py::test_subtract": [
            {"result": "Passed", "duration": "250 ms"},
        ],
        "tests/test_sample.py::test_multiply": [
            {"result": "Passed", "duration": 0.5},
        ],
        "tests/test_sample.py::test_flaky": [
            {"result": "Failed", "duration": "00:00:02", "log": "first attempt"},
            {"result": "Passed", "duration": "00:00:01", "extras": []},
        ],
        "tests/test_sample.py::test_expected_failure": [
            {
                "result": "Failed",
                "duration": "00:00:00",
                "log": "def test_expected_failure():\n>       assert False\nE       AssertionError: Expected failure",
                "extras": [{"name": "screenshot", "format_type": "image"}],
            },
        ],
        "tests/test_sample.py::test_divide_by_zero": [
            {"result": "Failed", "duration": "00:01:30", "log": "ZeroDivisionError: division by zero"},
        ],
        "tests/test_sample.py::test_skipped": [
            {"result": "Skipped", "duration": "00:00:00", "log": "skip reason: not on CI"},
        ],
    },
}


def build_pytest_html_document(blob: dict | None) -> str:
    container = ""
    if blob is not None:
        container = f'<div id="data-container" data-jsonblob="{html.escape(json.dumps(blob))}"></div>'
    return (
        "<!DOCTYPE html><html><head><title>report.html</title></head><body>"
        "<h1>report.html</h1>"
        '<p>Report generated on 15-Jan-2024 at 10:30:00 by <a href="https://pypi.python.org/pypi/pytest-html">pytest-html</a> v4.1.1</p>'
        f"{container}</body></html>"
    )


PLAYWRIGHT_REPORT = {
    "config": {"rootDir": "/home/runner/work/app/tests", "version": "1.40.0"},
    "suites": [{"title": "e2e.spec.ts", "specs": [{"title": "has title", "ok": True}]}],
    "stats": {"expected": 1, "unexpected": 0},
}


def playwright_html_document(body: str) -> str:
    return (
        "<!DOCTYPE html><html><head><title>Playwright Test Report</title>"
        '<meta name="generator" content="@playwright/test"></head>'
        f"<body><div id='root'></div>{body}</body></html>"
    )


@pytest.fixture
def write_file(tmp_path):
    """Write text to tmp_path/name and return the path."""
    def _write(name: str, content: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture(name="pytest_report_file")
def _pytest_report_file(write_file):
    return write_file("report.html", build_pytest_html_document(PYTEST_HTML_BLOB))


@pytest.fixture
def playwright_html_file(write_file):
    body = f'<script id="data">window.playwrightReport = {json.dumps(PLAYWRIGHT_REPORT)};</script>'
    return write_file("playwright-report/index.html", playwright_html_document(body))


@pytest.fixture
def make_pytest_html(write_file):
    """Write a pytest-html report embedding ``blob`` (None: no data container)."""
    def _make(name: str, blob: dict | None):
        return write_file(name, build_pytest_html_document(blob))
    return _make


@pytest.fixture
def make_playwright_html(write_file):
    """Write a Playwright HTML report with ``body`` inside <body>."""
    def _make(name: str, body: str):
        return write_file(name, playwright_html_document(body))
    return _make
