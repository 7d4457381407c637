"""
Collect tool outputs from a run's job logs.

Each job log is tried against the configured extraction entries in
order; the first one that yields output wins for that job. Without
configuration, the linter is guessed from the job name and log head.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from artifact_detective.config import ArtifactExtractionConfig
from artifact_detective.extract import ExtractResult, extract
from artifact_detective.extractors import detect_linter_type
from artifact_detective.types import ArtifactType

logger = logging.getLogger(__name__)


@dataclass
class CollectedOutput:
    job_name: str
    result: ExtractResult

    @property
    def file_name(self) -> str:
        ext = "json" if self.result.normalized else self.result.capabilities.file_extension
        return f"{sanitize_job_name(self.job_name)}-{self.result.artifact_type.value}.{ext}"

    def to_dict(self) -> dict:
        return {"job_name": self.job_name, "file_name": self.file_name, **self.result.to_dict()}


def sanitize_job_name(name: str) -> str:
    name = re.sub(r"[^a-zA-Z0-9_-]", "-", name)
    return re.sub(r"-+", "-", name).strip("-")


def _guess_type(job_name: str, log_content: str) -> ArtifactType | None:
    family = detect_linter_type(job_name, log_content)
    if family is None:
        return None
    try:
        return ArtifactType(f"{family}-txt")
    except ValueError:
        return None


def collect_from_logs(
    job_logs: list[tuple[str, str]],
    configs: list[ArtifactExtractionConfig] | None = None,
    provider: str = "github",
) -> list[CollectedOutput]:
    """Extract at most one tool output per job log."""
    collected: list[CollectedOutput] = []

    for job_name, content in job_logs:
        result = None
        if configs:
            for entry in configs:
                if not entry.matches_job(job_name):
                    continue
                result = extract(entry.type, content, config=entry.extractor_config,
                                 normalize=entry.to_json, provider=provider)
                if result:
                    break
        else:
            guessed = _guess_type(job_name, content)
            if guessed is not None:
                result = extract(guessed, content, provider=provider)

        if result is None:
            logger.debug("No tool output found in job %s", job_name)
            continue
        if result.validation is not None and not result.validation.valid:
            logger.warning("%s output in job %s failed validation: %s",
                           result.artifact_type.value, job_name, result.validation.error)
        collected.append(CollectedOutput(job_name, result))

    return collected


def missing_required(
    collected: list[CollectedOutput],
    configs: list[ArtifactExtractionConfig],
) -> list[ArtifactExtractionConfig]:
    """Required entries whose type was found in no job."""
    found = {c.result.artifact_type for c in collected}
    return [entry for entry in configs if entry.required and entry.type not in found]
