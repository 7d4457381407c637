"""
pytest-html → canonical test report.

pytest-html 3.x+ renders the whole run as JSON inside the
``data-jsonblob`` attribute of ``#data-container``; older table-only
reports carry no such blob and are not converted.
"""

from __future__ import annotations

import logging
import os
import re
import time

from artifact_detective.normalizers.base import load_html, parse_json_object
from artifact_detective.types import PytestReport, PytestTest

logger = logging.getLogger(__name__)

# (substring of the reported result, canonical outcome), first match wins
OUTCOME_MAP: tuple[tuple[str, str], ...] = (
    ("pass", "passed"),
    ("fail", "failed"),
    ("skip", "skipped"),
    ("error", "error"),
)

FAILING_OUTCOMES = frozenset({"failed", "error"})

_MILLISECONDS = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*ms\s*$")


def parse_duration(value) -> float:
    """Seconds from a number, an ``HH:MM:SS`` string, or pytest-html's ``"N ms"``."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        parts = value.split(":")
        if len(parts) == 3:
            try:
                hours, minutes, seconds = (float(x) for x in parts)
            except ValueError:
                return 0.0
            return hours * 3600 + minutes * 60 + seconds
        m = _MILLISECONDS.match(value)
        if m:
            return float(m.group(1)) / 1000
    return 0.0


def normalize_outcome(raw) -> str:
    result = str(raw or "").lower()
    for needle, outcome in OUTCOME_MAP:
        if needle in result:
            return outcome
    return result


def _convert_test(nodeid: str, result: dict) -> PytestTest:
    test = PytestTest(
        nodeid=nodeid,
        outcome=normalize_outcome(result.get("result") or result.get("outcome")),
        duration=parse_duration(result.get("duration")),
    )
    if result.get("log"):
        test.log = result["log"]
    extras = result.get("extras")
    if isinstance(extras, list) and extras:
        test.extras = extras
    for phase in ("setup", "call", "teardown"):
        if result.get(phase):
            setattr(test, phase, result[phase])
    return test


def convert_embedded_data(data: dict) -> PytestReport:
    """Build the canonical report from pytest-html's embedded JSON."""
    report = PytestReport(
        created=data.get("created") or time.time(),
        root=data.get("root") or "",
        environment=data.get("environment") or {},
    )

    tests = data.get("tests")
    if not isinstance(tests, dict):
        return report

    # Each node id maps to one result per attempt; the last one is final.
    for nodeid, attempts in tests.items():
        if not isinstance(attempts, list) or not attempts or not isinstance(attempts[-1], dict):
            continue
        report.tests.append(_convert_test(nodeid, attempts[-1]))

    report.duration = sum(t.duration for t in report.tests)
    report.exit_code = 1 if any(t.outcome in FAILING_OUTCOMES for t in report.tests) else 0
    return report


def extract_pytest_json(html_file_path: str | os.PathLike) -> PytestReport | None:
    """
    Pull the test report out of a pytest-html file.

    Returns:
        PytestReport, or None when the HTML holds no pytest-html data
        (another tool's report, or a pre-3.x pytest-html).

    Raises:
        ExtractionError: the file could not be read.
    """
    soup = load_html(html_file_path, "pytest")
    container = soup.select_one("#data-container")
    blob = container.get("data-jsonblob") if container is not None else None

    data = parse_json_object(blob)
    if data is None:
        logger.debug("No pytest-html data blob in %s", html_file_path)
        return None
    return convert_embedded_data(data)
