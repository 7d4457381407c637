"""
Unified extraction: CI log → one tool's output, validated and optionally
normalized to JSON.

Takes raw job log → provider preprocessing → slice (configured markers
or built-in extractor) → registry validator → ExtractResult.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass

from artifact_detective.config import ExtractorConfig
from artifact_detective.extractors import find_linter_output, slice_between
from artifact_detective.normalizers import normalize_linter_output
from artifact_detective.preprocessor import get_preprocessor
from artifact_detective.registry import ArtifactTypeCapabilities, get_capabilities, validate
from artifact_detective.types import ArtifactType, ValidationResult

logger = logging.getLogger(__name__)


@dataclass
class ExtractResult:
    artifact_type: ArtifactType
    content: str
    capabilities: ArtifactTypeCapabilities
    validation: ValidationResult | None = None
    normalized: bool = False

    def to_dict(self) -> dict:
        d = {
            "artifact_type": self.artifact_type.value,
            "content": self.content,
            "capabilities": self.capabilities.to_dict(),
            "normalized": self.normalized,
        }
        if self.validation is not None:
            d["validation"] = self.validation.to_dict()
        return d


def _slice_with_markers(log_content: str, config: ExtractorConfig) -> str | None:
    end = re.compile(config.end_marker) if config.end_marker else None
    captured = slice_between(
        log_content.split("\n"),
        re.compile(config.start_marker),
        end,
        include_end=config.include_end_marker,
    )
    return "\n".join(line for _, line in captured) if captured else None


def extract(
    artifact_type: ArtifactType | str,
    log_content: str,
    config: ExtractorConfig | None = None,
    normalize: bool = False,
    provider: str = "github",
) -> ExtractResult | None:
    """
    Pull one tool's output out of a CI job log.

    Args:
        artifact_type: Type to extract (``eslint-txt``, ``clippy-json``...).
        log_content: Raw job log text.
        config: Custom start/end markers. Without a start marker the
            built-in extractor for the type is used.
        normalize: Replace the content with JSON diagnostics when the type
            has a parser.
        provider: CI provider whose log noise to strip ("github", "plain").

    Returns:
        ExtractResult, or None for an unknown type or when the log holds
        no output for it.
    """
    capabilities = get_capabilities(artifact_type)
    if capabilities is None:
        logger.debug("Cannot extract unknown artifact type %s", artifact_type)
        return None
    artifact_type = ArtifactType(artifact_type)

    cleaned = get_preprocessor(provider).clean(log_content)

    if config is not None and config.start_marker:
        content = _slice_with_markers(cleaned, config)
    else:
        match = find_linter_output(artifact_type, cleaned)
        content = match.content if match else None

    if not content:
        logger.debug("No %s output found", artifact_type.value)
        return None

    validation = validate(artifact_type, content) if capabilities.validator else None
    if validation is not None and not validation.valid:
        logger.debug("Extracted %s failed validation: %s", artifact_type.value, validation.error)

    result = ExtractResult(artifact_type, content, capabilities, validation)
    if normalize:
        diagnostics = normalize_linter_output(artifact_type, content)
        if diagnostics is not None:
            result.content = json.dumps(diagnostics, indent=2)
            result.normalized = True
    return result
