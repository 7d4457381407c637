"""
Project configuration: custom filename→type mappings and the artifact
types to pull out of CI logs.

Read from the first of CONFIG_FILENAMES found in the working directory.
Keys may be written snake_case or camelCase.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from artifact_detective.errors import ConfigError
from artifact_detective.registry import configurable_artifact_types
from artifact_detective.types import ArtifactType

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (
    ".artifact-detective.json",
    ".artifact-detective.yml",
    ".artifact-detective.yaml",
)


def _check_regex(value: str | None) -> str | None:
    if value is None:
        return value
    try:
        re.compile(value)
    except re.error as exc:
        raise ValueError(f"Must be a valid regex pattern: {exc}") from exc
    return value


def _check_artifact_type(value: str) -> ArtifactType:
    allowed = configurable_artifact_types()
    try:
        artifact_type = ArtifactType(value)
    except ValueError:
        artifact_type = None
    if artifact_type not in allowed:
        raise ValueError(f"Must be one of: {', '.join(t.value for t in allowed)}")
    return artifact_type


class _ConfigModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ArtifactTypeMapping(_ConfigModel):
    """Assigns ``type`` to artifact files whose name matches ``pattern``."""

    pattern: str
    type: ArtifactType
    reason: str | None = None

    @field_validator("pattern")
    @classmethod
    def valid_pattern(cls, v: str) -> str:
        return _check_regex(v)

    @field_validator("type", mode="before")
    @classmethod
    def known_type(cls, v):
        return _check_artifact_type(getattr(v, "value", v))


class ExtractorConfig(_ConfigModel):
    """Regex markers bracketing a tool's output in a log."""

    start_marker: str | None = None
    end_marker: str | None = None
    include_end_marker: bool = True

    @field_validator("start_marker", "end_marker")
    @classmethod
    def valid_marker(cls, v: str | None) -> str | None:
        return _check_regex(v)


class ArtifactExtractionConfig(_ConfigModel):
    type: ArtifactType
    to_json: bool = False
    extractor_config: ExtractorConfig | None = None
    match_job_name: str | None = None
    required: bool = False
    reason: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def known_type(cls, v):
        return _check_artifact_type(getattr(v, "value", v))

    @field_validator("match_job_name")
    @classmethod
    def valid_job_pattern(cls, v: str | None) -> str | None:
        return _check_regex(v)

    def matches_job(self, job_name: str) -> bool:
        return self.match_job_name is None or re.search(self.match_job_name, job_name) is not None


class DetectiveConfig(_ConfigModel):
    custom_artifact_types: list[ArtifactTypeMapping] = Field(default_factory=list)
    extract_artifact_types_from_logs: list[ArtifactExtractionConfig] = Field(default_factory=list)


def find_config_file(cwd: str | os.PathLike | None = None) -> Path | None:
    base = Path(cwd) if cwd is not None else Path.cwd()
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_config(cwd: str | os.PathLike | None = None) -> DetectiveConfig:
    """
    Load the configuration file from ``cwd`` (default: the current directory).

    Returns the defaults when no configuration file exists.

    Raises:
        ConfigError: the file can't be read, parsed, or fails validation.
    """
    path = find_config_file(cwd)
    if path is None:
        logger.debug("No configuration file found, using defaults")
        return DetectiveConfig()

    try:
        text = path.read_text(encoding="utf-8")
        raw = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (OSError, ValueError, RecursionError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc

    try:
        config = DetectiveConfig.model_validate(raw or {})
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {path.name}:\n{exc}") from exc

    logger.debug("Loaded configuration from %s", path)
    return config


def apply_custom_artifact_type(
    file_path: str | os.PathLike,
    detected_type: ArtifactType,
    mappings: list[ArtifactTypeMapping],
) -> ArtifactType:
    """Return the first mapped type whose pattern matches the file name.

    Only ``unknown`` detections are overridden; anything the classifier
    recognised is kept.
    """
    if detected_type != ArtifactType.UNKNOWN:
        return detected_type
    name = Path(file_path).name
    for mapping in mappings:
        if re.search(mapping.pattern, name):
            logger.debug("%s mapped to %s by %r", name, mapping.type.value, mapping.pattern)
            return mapping.type
    return detected_type
