"""Validators for Python tool output (pytest JSON, ruff, mypy, flake8, pylint, black, isort)."""

from __future__ import annotations

import json
import re

from artifact_detective.types import ValidationResult

PY_PATH = r"[a-zA-Z0-9_\-/.]+\.py"

_RUFF_LINE = re.compile(rf"^{PY_PATH}:\d+:\d+:\s+[A-Z]+\d+", re.M)
_RUFF_SPAN = re.compile(rf"-->\s+{PY_PATH}:\d+:\d+")
_RUFF_SUMMARY = re.compile(r"^(All checks passed!|Found \d+ errors?)", re.M)

_MYPY_LINE = re.compile(rf"^{PY_PATH}:\d+:(\d+:)?\s*(error|warning|note):", re.M)
_MYPY_SUMMARY = re.compile(r"^(Success: no issues found|Found \d+ errors? in \d+ files?)", re.M)

_FLAKE8_LINE = re.compile(rf"^{PY_PATH}:\d+:\d+:\s+[A-Z]+\d+", re.M)

_PYLINT_LINE = re.compile(rf"^{PY_PATH}:\d+:\d+:\s+[CRWEFI]\d{{4}}", re.M)
_PYLINT_SUMMARY = re.compile(r"Your code has been rated at|^\*{13} Module ", re.M)

_BLACK = re.compile(
    r"would reformat|\d+ files? would be (reformatted|left unchanged)|\d+ files? reformatted|All done!",
    re.I,
)

_ISORT = re.compile(r"Imports are incorrectly sorted|^Fixing \S+\.py|^Skipped \d+ files", re.M)


def validate_pytest_json(content: str) -> ValidationResult:
    """Check pytest-json-report output."""
    try:
        data = json.loads(content)
    except (ValueError, RecursionError) as exc:
        return ValidationResult(False, f"Invalid JSON: {exc}")
    if not isinstance(data, dict):
        return ValidationResult(False, "Top-level JSON value is not an object")

    tests = data.get("tests")
    if not isinstance(tests, list):
        return ValidationResult(False, "Missing tests array")
    for i, test in enumerate(tests):
        if not isinstance(test, dict):
            return ValidationResult(False, f"tests[{i}] is not an object")
        if not isinstance(test.get("nodeid"), str) or not isinstance(test.get("outcome"), str):
            return ValidationResult(False, f"tests[{i}] missing nodeid or outcome")

    return ValidationResult(True)


def validate_ruff_output(content: str) -> ValidationResult:
    if _RUFF_LINE.search(content) or _RUFF_SPAN.search(content) or _RUFF_SUMMARY.search(content):
        return ValidationResult(True)
    return ValidationResult(False, "Does not match ruff output format")


def validate_mypy_output(content: str) -> ValidationResult:
    if _MYPY_LINE.search(content) or _MYPY_SUMMARY.search(content):
        return ValidationResult(True)
    return ValidationResult(False, "Does not match mypy output format")


def validate_flake8_output(content: str) -> ValidationResult:
    if _FLAKE8_LINE.search(content):
        return ValidationResult(True)
    return ValidationResult(False, "Does not match flake8 output format")


def validate_pylint_output(content: str) -> ValidationResult:
    if _PYLINT_LINE.search(content) or _PYLINT_SUMMARY.search(content):
        return ValidationResult(True)
    return ValidationResult(False, "Does not match pylint output format")


def validate_black_output(content: str) -> ValidationResult:
    if _BLACK.search(content):
        return ValidationResult(True)
    return ValidationResult(False, "Does not match black output format")


def validate_isort_output(content: str) -> ValidationResult:
    if _ISORT.search(content):
        return ValidationResult(True)
    return ValidationResult(False, "Does not match isort output format")
