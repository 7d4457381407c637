"""
Human-readable output formatting for detection, validation and
extraction results.
"""

from __future__ import annotations

from collections.abc import Mapping

from artifact_detective.collector import CollectedOutput
from artifact_detective.registry import ArtifactTypeCapabilities
from artifact_detective.types import ArtifactType, DetectionResult, ValidationResult


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def format_validation(result: ValidationResult) -> str:
    if result.valid:
        return "✓ valid"
    return f"✗ invalid: {result.error}"


def format_detection(path: str, result: DetectionResult) -> str:
    line = f"{path}: {result.detected_type.value} ({result.original_format.value})"
    if result.validation is not None:
        line += f"  {format_validation(result.validation)}"
    return line


def format_registry(registry: Mapping[ArtifactType, ArtifactTypeCapabilities]) -> str:
    """Render the capability registry as a table."""
    width = max(len(t.value) for t in registry)
    lines: list[str] = []
    lines.append(f"{'TYPE':<{width}}  AUTO  VALIDATOR  DESCRIPTION")
    lines.append("─" * (width + 40))
    for artifact_type, caps in registry.items():
        lines.append(
            f"{artifact_type.value:<{width}}  {_yes_no(caps.supports_auto_detection):<4}  "
            f"{_yes_no(caps.validator is not None):<9}  {caps.short_description}"
        )
    return "\n".join(lines)


def format_collected(outputs: list[CollectedOutput]) -> str:
    """Format tool outputs pulled from a run's job logs."""
    lines: list[str] = []
    lines.append("=" * 60)
    lines.append("  TOOL OUTPUT FROM JOB LOGS")
    lines.append("=" * 60)
    if not outputs:
        lines.append("  No tool output found.")
    for i, out in enumerate(outputs, 1):
        result = out.result
        lines.append(f"  {i}. [{result.artifact_type.value}] {out.job_name}")
        if result.capabilities.short_description:
            lines.append(f"     {result.capabilities.short_description}")
        if result.validation is not None:
            lines.append(f"     Validation: {format_validation(result.validation)}")
        lines.append(f"     {len(result.content.splitlines())} line(s)")
        lines.append("")
    lines.append("=" * 60)
    return "\n".join(lines)
