"""
Normalizers: turn a detected artifact into canonical JSON.

HTML test reports are converted through their embedded data; linter text
is parsed into diagnostics.
"""

from __future__ import annotations

import os

from artifact_detective.normalizers.linters import DIAGNOSTIC_PARSERS, normalize_linter_output
from artifact_detective.normalizers.playwright_html import extract_playwright_json
from artifact_detective.normalizers.pytest_html import extract_pytest_json
from artifact_detective.types import ArtifactType, DetectionResult, OriginalFormat

HTML_CONVERTERS = {
    ArtifactType.PYTEST_HTML: lambda path: _as_dict(extract_pytest_json(path)),
    ArtifactType.PLAYWRIGHT_HTML: extract_playwright_json,
}


def _as_dict(report) -> dict | None:
    return report.to_dict() if report is not None else None


def is_json(detection: DetectionResult) -> bool:
    return detection.original_format == OriginalFormat.JSON


def can_convert_to_json(detection: DetectionResult) -> bool:
    return detection.detected_type in HTML_CONVERTERS


def convert_to_json(detection: DetectionResult, file_path: str | os.PathLike) -> dict | None:
    """Convert an HTML report to JSON via the normalizer for its detected type.

    Returns None when the type has no converter or the file holds no data.
    Raises ExtractionError when the file can't be read.
    """
    converter = HTML_CONVERTERS.get(detection.detected_type)
    if converter is None:
        return None
    return converter(file_path)


__all__ = [
    "DIAGNOSTIC_PARSERS",
    "HTML_CONVERTERS",
    "can_convert_to_json",
    "convert_to_json",
    "extract_playwright_json",
    "extract_pytest_json",
    "is_json",
    "normalize_linter_output",
]
