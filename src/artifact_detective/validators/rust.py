"""Validators for cargo/clippy/rustfmt output."""

from __future__ import annotations

import json
import re

from artifact_detective.types import ValidationResult

CLIPPY_REASONS = ("compiler-message", "compiler-artifact", "build-finished")

_CLIPPY_LEVEL = re.compile(r"(warning|error):", re.I)
_RUST_SPAN = re.compile(r"-->\s+\S+\.rs:\d+:\d+")
_WARNINGS_EMITTED = re.compile(r"\d+\s+warnings?\s+emitted", re.I)

_RUSTFMT_DIFF = re.compile(r"Diff\s+in\s+\S+\.rs", re.I)
_RUST_FILE = re.compile(r"\S+\.rs", re.I)

_CARGO_RUNNING = re.compile(r"running\s+\d+\s+tests?", re.I)
_CARGO_RESULT = re.compile(r"test result:\s+(ok|FAILED)\.", re.I)
_CARGO_TEST_LINE = re.compile(r"test\s+\S+\s+\.\.\.\s+(ok|FAILED|ignored)", re.I)


def validate_clippy_json(content: str) -> ValidationResult:
    """Check cargo's ``--message-format=json`` stream.

    Lines that don't start with ``{`` are cargo status noise and skipped,
    as are JSON lines with no ``reason``. A ``reason`` outside the known
    set fails the whole stream.
    """
    found = False
    for line in content.strip().splitlines():
        stripped = line.strip()
        if not stripped.startswith("{"):
            continue
        try:
            obj = json.loads(stripped)
        except (ValueError, RecursionError):
            continue
        if not isinstance(obj, dict) or not obj.get("reason"):
            continue

        reason = obj["reason"]
        if reason not in CLIPPY_REASONS:
            return ValidationResult(False, f"Invalid reason value: {reason}")

        if reason == "compiler-message":
            message = obj.get("message")
            if (
                not isinstance(message, dict)
                or not message.get("level")
                or message.get("spans") is None
            ):
                return ValidationResult(False, "Compiler message missing required fields")

        found = True

    if not found:
        return ValidationResult(False, "No valid clippy JSON messages found")
    return ValidationResult(True)


def validate_clippy_text(content: str) -> ValidationResult:
    if (_CLIPPY_LEVEL.search(content) and _RUST_SPAN.search(content)) or _WARNINGS_EMITTED.search(content):
        return ValidationResult(True)
    # No output at all means clippy found nothing to report.
    if not content.strip():
        return ValidationResult(True)
    return ValidationResult(False, "Does not match clippy text output format")


def validate_rustfmt_output(content: str) -> ValidationResult:
    """``cargo fmt --check`` prints diffs or file names; silence is a pass."""
    if not content.strip():
        return ValidationResult(True)
    if _RUSTFMT_DIFF.search(content) or _RUST_FILE.search(content):
        return ValidationResult(True)
    return ValidationResult(False, "Does not match rustfmt output format")


def validate_cargo_test_output(content: str) -> ValidationResult:
    has_running = bool(_CARGO_RUNNING.search(content))
    has_result = bool(_CARGO_RESULT.search(content))
    # Individual result lines are enough on their own (truncated logs).
    if (has_running and has_result) or _CARGO_TEST_LINE.search(content):
        return ValidationResult(True)
    return ValidationResult(False, "Does not match cargo test output format")
