"""Validators for JavaScript/TypeScript tool output (Jest, Playwright, ESLint, Prettier, tsc)."""

from __future__ import annotations

import json
import re

from artifact_detective.types import ValidationResult

_ESLINT_MESSAGE = re.compile(r"^\s*\d+:\d+\s+(error|warning)\s+", re.M)
_ESLINT_SUMMARY = re.compile(r"\d+\s+problems?\b")

_PRETTIER_WARN = re.compile(r"^\[warn\]\s+\S+", re.M)
_PRETTIER_SUMMARY = re.compile(
    r"Code style issues (found|were found)|All matched files use Prettier code style"
)

_TSC_ERROR = re.compile(r"error\s+TS\d+:")


def _load_object(content: str) -> tuple[dict | None, str | None]:
    try:
        data = json.loads(content)
    except (ValueError, RecursionError) as exc:
        return None, f"Invalid JSON: {exc}"
    if not isinstance(data, dict):
        return None, "Top-level JSON value is not an object"
    return data, None


def validate_jest_json(content: str) -> ValidationResult:
    """Check ``jest --json`` output."""
    data, error = _load_object(content)
    if data is None:
        return ValidationResult(False, error)

    results = data.get("testResults")
    if not isinstance(results, list):
        return ValidationResult(False, "Missing testResults array")
    for i, suite in enumerate(results):
        if not isinstance(suite, dict):
            return ValidationResult(False, f"testResults[{i}] is not an object")
        if "assertionResults" in suite and not isinstance(suite["assertionResults"], list):
            return ValidationResult(False, f"testResults[{i}].assertionResults is not an array")

    for key in ("numTotalTests", "numPassedTests", "numFailedTests"):
        if key in data and not isinstance(data[key], int):
            return ValidationResult(False, f"{key} is not a number")

    return ValidationResult(True)


def validate_playwright_json(content: str) -> ValidationResult:
    """Check Playwright's JSON reporter output."""
    data, error = _load_object(content)
    if data is None:
        return ValidationResult(False, error)

    if not isinstance(data.get("config"), dict):
        return ValidationResult(False, "Missing config object")
    suites = data.get("suites")
    if not isinstance(suites, list):
        return ValidationResult(False, "Missing suites array")
    if any(not isinstance(s, dict) for s in suites):
        return ValidationResult(False, "suites contains a non-object entry")
    if "stats" in data and not isinstance(data["stats"], dict):
        return ValidationResult(False, "stats is not an object")
    if "errors" in data and not isinstance(data["errors"], list):
        return ValidationResult(False, "errors is not an array")

    return ValidationResult(True)


def validate_eslint_output(content: str) -> ValidationResult:
    if _ESLINT_MESSAGE.search(content) or _ESLINT_SUMMARY.search(content):
        return ValidationResult(True)
    return ValidationResult(False, "Does not match ESLint output format")


def validate_prettier_output(content: str) -> ValidationResult:
    if _PRETTIER_WARN.search(content) or _PRETTIER_SUMMARY.search(content):
        return ValidationResult(True)
    return ValidationResult(False, "Does not match Prettier output format")


def validate_tsc_output(content: str) -> ValidationResult:
    if _TSC_ERROR.search(content):
        return ValidationResult(True)
    return ValidationResult(False, "Does not match TypeScript compiler output format")
