"""
Value types shared by the detector, extractors, normalizers and
validators.

ArtifactType is a closed tag: per-type behavior lives in tables keyed by
it (see registry.py), never in subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ArtifactType(str, Enum):
    PLAYWRIGHT_JSON = "playwright-json"
    PLAYWRIGHT_HTML = "playwright-html"
    JEST_JSON = "jest-json"
    JEST_HTML = "jest-html"
    PYTEST_JSON = "pytest-json"
    PYTEST_HTML = "pytest-html"
    JUNIT_XML = "junit-xml"
    ESLINT_TXT = "eslint-txt"
    PRETTIER_TXT = "prettier-txt"
    TSC_TXT = "tsc-txt"
    RUFF_TXT = "ruff-txt"
    MYPY_TXT = "mypy-txt"
    FLAKE8_TXT = "flake8-txt"
    PYLINT_TXT = "pylint-txt"
    BLACK_TXT = "black-txt"
    ISORT_TXT = "isort-txt"
    CARGO_TEST_TXT = "cargo-test-txt"
    CLIPPY_JSON = "clippy-json"
    CLIPPY_TXT = "clippy-txt"
    RUSTFMT_TXT = "rustfmt-txt"
    BINARY = "binary"
    UNKNOWN = "unknown"


class OriginalFormat(str, Enum):
    JSON = "json"
    XML = "xml"
    HTML = "html"
    TXT = "txt"
    BINARY = "binary"


_FORMAT_SUFFIXES = {
    "-json": OriginalFormat.JSON,
    "-xml": OriginalFormat.XML,
    "-html": OriginalFormat.HTML,
    "-txt": OriginalFormat.TXT,
}


def artifact_format(artifact_type: ArtifactType) -> OriginalFormat:
    """Return the serialization family an artifact type belongs to."""
    for suffix, fmt in _FORMAT_SUFFIXES.items():
        if artifact_type.value.endswith(suffix):
            return fmt
    return OriginalFormat.BINARY


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"valid": self.valid}
        if self.error is not None:
            d["error"] = self.error
        return d


@dataclass(frozen=True)
class DetectionResult:
    """Classification of a single artifact file."""
    detected_type: ArtifactType
    original_format: OriginalFormat
    is_binary: bool
    validation: ValidationResult | None = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "detected_type": self.detected_type.value,
            "original_format": self.original_format.value,
            "is_binary": self.is_binary,
        }
        if self.validation is not None:
            d["validation"] = self.validation.to_dict()
        return d


@dataclass(frozen=True)
class LinterMatch:
    """A tool's output located inside a log. Line numbers are 1-based, inclusive."""
    linter_type: str
    start_line: int
    end_line: int
    content: str


@dataclass
class PytestTest:
    nodeid: str
    outcome: str
    duration: float
    log: str | None = None
    extras: list | None = None
    setup: dict | None = None
    call: dict | None = None
    teardown: dict | None = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "nodeid": self.nodeid,
            "outcome": self.outcome,
            "duration": self.duration,
        }
        for key in ("log", "extras", "setup", "call", "teardown"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        return d


@dataclass
class PytestReport:
    """Canonical test-report shape shared by all test-report normalizers."""
    created: float
    duration: float = 0.0
    exit_code: int = 0
    root: str = ""
    environment: dict = field(default_factory=dict)
    tests: list[PytestTest] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "created": self.created,
            "duration": self.duration,
            "exitCode": self.exit_code,
            "root": self.root,
            "environment": self.environment,
            "tests": [t.to_dict() for t in self.tests],
        }


@dataclass
class Diagnostic:
    """One finding reported by a linter or compiler."""
    file: str
    line: int
    column: int | None
    severity: str
    code: str | None
    message: str

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "severity": self.severity,
            "code": self.code,
            "message": self.message,
        }
