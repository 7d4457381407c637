"""
Artifact type detection.

Takes a file path → extension checks → bounded content sample →
per-format signature rules → DetectionResult.

Classification is advisory: nothing in here raises on bad input. An
unreadable file or unparseable content resolves to ``unknown`` with the
format still taken from the file name.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path

from artifact_detective.registry import ARTIFACT_TYPE_REGISTRY, validate as validate_content
from artifact_detective.sampler import read_file_sample
from artifact_detective.types import (
    ArtifactType,
    DetectionResult,
    OriginalFormat,
    ValidationResult,
)
from artifact_detective.validators import CLIPPY_REASONS

logger = logging.getLogger(__name__)


BINARY_EXTENSIONS = frozenset({
    # images
    ".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".bmp", ".ico",
    # media
    ".mp4", ".webm", ".mov", ".avi",
    # archives
    ".zip", ".tar", ".gz", ".tgz", ".bz2", ".xz", ".7z",
    # executables and libraries
    ".exe", ".dll", ".so", ".dylib", ".wasm",
})

# Checked in order; first suffix match wins.
FORMAT_EXTENSIONS: tuple[tuple[str, OriginalFormat], ...] = (
    (".json", OriginalFormat.JSON),
    (".xml", OriginalFormat.XML),
    (".html", OriginalFormat.HTML),
    (".htm", OriginalFormat.HTML),
    (".txt", OriginalFormat.TXT),
    (".log", OriginalFormat.TXT),
)


# ---------------------------------------------------------------------------
# Content signatures
# ---------------------------------------------------------------------------

# (markers, type), checked top to bottom. Order matters: a pytest-html
# report can mention playwright.dev in captured output, and so on down.
HTML_SIGNATURES: tuple[tuple[tuple[str, ...], ArtifactType], ...] = (
    (("pytest-html", "pypi.python.org/pypi/pytest-html"), ArtifactType.PYTEST_HTML),
    (("playwright test report", "playwright-report", "playwright.dev", "@playwright/test"),
     ArtifactType.PLAYWRIGHT_HTML),
    (("jest-html",), ArtifactType.JEST_HTML),
)

# Substring fallback for JSON whose structure didn't settle it.
JSON_KEYWORDS: tuple[tuple[str, ArtifactType], ...] = (
    ("playwright", ArtifactType.PLAYWRIGHT_JSON),
    ("jest", ArtifactType.JEST_JSON),
    ("pytest", ArtifactType.PYTEST_JSON),
)

FLAKE8_LINE = re.compile(r"\.py:\d+:\d+:")


def is_binary_file(file_name: str) -> bool:
    return file_name.lower().endswith(tuple(BINARY_EXTENSIONS))


def original_format_for(file_name: str) -> OriginalFormat:
    name = file_name.lower()
    for ext, fmt in FORMAT_EXTENSIONS:
        if name.endswith(ext):
            return fmt
    return OriginalFormat.BINARY


def detect_html_type(content: str) -> ArtifactType:
    lower = content.lower()
    for markers, artifact_type in HTML_SIGNATURES:
        if any(m in lower for m in markers):
            return artifact_type
    if "jest" in lower and "test results" in lower:
        return ArtifactType.JEST_HTML
    return ArtifactType.UNKNOWN


def _is_clippy_stream(content: str) -> bool:
    """Look for cargo's NDJSON messages line by line.

    Runs before a whole-document parse: an NDJSON stream is not a single
    JSON document and would fail (or mislead) the structural checks.
    """
    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped.startswith("{"):
            continue
        try:
            obj = json.loads(stripped)
        except (ValueError, RecursionError):
            continue
        if isinstance(obj, dict) and obj.get("reason") in CLIPPY_REASONS:
            return True
    return False


def _json_structure_type(data) -> ArtifactType | None:
    if not isinstance(data, dict):
        return None
    config = data.get("config")
    if isinstance(config, dict) and isinstance(data.get("suites"), list):
        if "rootDir" in config or "version" in config:
            return ArtifactType.PLAYWRIGHT_JSON
    if isinstance(data.get("testResults"), list):
        return ArtifactType.JEST_JSON
    if isinstance(data.get("tests"), list):
        return ArtifactType.PYTEST_JSON
    return None


def detect_json_type(content: str) -> ArtifactType:
    if _is_clippy_stream(content):
        return ArtifactType.CLIPPY_JSON

    try:
        detected = _json_structure_type(json.loads(content))
    except (ValueError, RecursionError) as exc:
        logger.debug("Whole-document JSON parse failed (%s), trying keywords", exc)
        detected = None
    if detected is not None:
        return detected

    lower = content.lower()
    for keyword, artifact_type in JSON_KEYWORDS:
        if keyword in lower:
            return artifact_type
    return ArtifactType.UNKNOWN


def detect_xml_type(content: str) -> ArtifactType:
    lower = content.lower()
    if "<testsuite" in lower:  # also covers <testsuites
        return ArtifactType.JUNIT_XML
    return ArtifactType.UNKNOWN


def detect_txt_type(content: str) -> ArtifactType:
    # Other linters' text is too generic to tell apart from arbitrary logs;
    # those types are assigned by configuration and confirmed by validators.
    if FLAKE8_LINE.search(content):
        return ArtifactType.FLAKE8_TXT
    return ArtifactType.UNKNOWN


_CONTENT_DETECTORS = {
    OriginalFormat.HTML: detect_html_type,
    OriginalFormat.JSON: detect_json_type,
    OriginalFormat.XML: detect_xml_type,
    OriginalFormat.TXT: detect_txt_type,
}


def detect_by_content(content: str, original_format: OriginalFormat) -> ArtifactType:
    """Pick the artifact type for ``content`` already known to be ``original_format``."""
    detector = _CONTENT_DETECTORS.get(original_format)
    if detector is None:
        return ArtifactType.UNKNOWN

    detected = detector(content)
    if not ARTIFACT_TYPE_REGISTRY[detected].supports_auto_detection and detected != ArtifactType.UNKNOWN:
        logger.debug("Discarding %s: not auto-detectable", detected.value)
        return ArtifactType.UNKNOWN
    return detected


def validate_file(file_path: str | os.PathLike, artifact_type: ArtifactType) -> ValidationResult | None:
    """Validate a whole file as ``artifact_type``; None when the type has no validator."""
    if ARTIFACT_TYPE_REGISTRY[artifact_type].validator is None:
        return None
    try:
        content = Path(file_path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        return ValidationResult(False, f"Could not read file: {exc}")
    result = validate_content(artifact_type, content)
    logger.debug("Validation of %s as %s: %s", file_path, artifact_type.value,
                 "valid" if result.valid else result.error)
    return result


def detect(file_path: str | os.PathLike, validate: bool = False) -> DetectionResult:
    """
    Classify an artifact file.

    Args:
        file_path: Path to the artifact. It need not exist; the format is
            still derived from the name.
        validate: Also run the detected type's validator over the full
            file and attach the result.

    Returns:
        DetectionResult. Binary and unrecognized extensions are reported
        without reading the file.
    """
    name = os.fspath(file_path).lower()

    if is_binary_file(name):
        return DetectionResult(ArtifactType.BINARY, OriginalFormat.BINARY, True)

    original_format = original_format_for(name)
    if original_format == OriginalFormat.BINARY:
        return DetectionResult(ArtifactType.UNKNOWN, OriginalFormat.BINARY, True)

    try:
        content = read_file_sample(file_path)
    except OSError as exc:
        logger.debug("Could not read %s: %s", file_path, exc)
        return DetectionResult(ArtifactType.UNKNOWN, original_format, False)

    detected = detect_by_content(content, original_format)
    validation = validate_file(file_path, detected) if validate else None
    return DetectionResult(detected, original_format, False, validation)
