"""CLI command: artifact-detective detect — classify artifact files."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import click

from artifact_detective.config import apply_custom_artifact_type
from artifact_detective.detector import detect, validate_file
from artifact_detective.formatter import format_detection
from artifact_detective.types import DetectionResult


def _iter_files(paths: tuple[str, ...]) -> list[Path]:
    files: list[Path] = []
    for p in map(Path, paths):
        if p.is_dir():
            files.extend(sorted(f for f in p.rglob("*") if f.is_file()))
        else:
            files.append(p)
    return files


def _classify(path: Path, mappings, validate: bool) -> DetectionResult:
    detection = detect(path, validate=validate)
    mapped = apply_custom_artifact_type(path, detection.detected_type, mappings)
    if mapped == detection.detected_type:
        return detection
    return dataclasses.replace(
        detection,
        detected_type=mapped,
        validation=validate_file(path, mapped) if validate else None,
    )


@click.command("detect")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--validate", "validate", is_flag=True, help="Validate each file against its detected type.")
@click.option("--json-output", "as_json", is_flag=True, help="Output as JSON.")
def detect_cmd(paths: tuple[str, ...], validate: bool, as_json: bool) -> None:
    """Classify artifact files. Directories are walked recursively.

    Files the classifier can't place are matched against the
    customArtifactTypes patterns of .artifact-detective.{json,yml,yaml}.

    \b
    Examples:
        artifact-detective detect report.html
        artifact-detective detect artifacts/ --validate
        artifact-detective detect results.json --json-output
    """
    from artifact_detective.cli import load_config_or_fail

    mappings = load_config_or_fail().custom_artifact_types
    results = [(str(f), _classify(f, mappings, validate)) for f in _iter_files(paths)]

    if as_json:
        click.echo(json.dumps(
            [{"path": path, **result.to_dict()} for path, result in results],
            indent=2,
        ))
        return

    for path, result in results:
        click.echo(format_detection(path, result))
