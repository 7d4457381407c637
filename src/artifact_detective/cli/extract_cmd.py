"""CLI command: artifact-detective extract — pull a tool's output out of a CI log."""

from __future__ import annotations

import json

import click
from pydantic import ValidationError

from artifact_detective.config import ExtractorConfig
from artifact_detective.extract import extract
from artifact_detective.extractors import detect_linter_type
from artifact_detective.formatter import format_validation
from artifact_detective.preprocessor import PREPROCESSORS
from artifact_detective.registry import get_capabilities


def _resolve_type(artifact_type: str | None, job_name: str, content: str) -> str:
    if artifact_type:
        if get_capabilities(artifact_type) is None:
            raise click.BadParameter(f"Unknown artifact type: {artifact_type}", param_hint="--type")
        return artifact_type
    family = detect_linter_type(job_name, content)
    if family is None:
        raise click.ClickException("Could not detect which tool produced this log. Pass --type.")
    return f"{family}-txt"


@click.command("extract")
@click.argument("log_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--type", "-t", "artifact_type", default=None,
              help="Artifact type to extract (e.g. eslint-txt). Guessed when omitted.")
@click.option("--job-name", "-j", default="", help="CI job name, used when guessing the type.")
@click.option("--normalize", is_flag=True, help="Convert the output to JSON diagnostics.")
@click.option("--start-marker", default=None, help="Regex for the line before the output.")
@click.option("--end-marker", default=None, help="Regex for the line closing the output.")
@click.option("--exclude-end-marker", is_flag=True, help="Leave the end-marker line out.")
@click.option("--provider", "-p", default="github", type=click.Choice(sorted(PREPROCESSORS)),
              help="CI provider whose log noise to strip.")
@click.option("--json-output", "as_json", is_flag=True, help="Output as JSON.")
def extract_cmd(
    log_file: str,
    artifact_type: str | None,
    job_name: str,
    normalize: bool,
    start_marker: str | None,
    end_marker: str | None,
    exclude_end_marker: bool,
    provider: str,
    as_json: bool,
) -> None:
    """Locate a linter's or test runner's output inside a CI job log.

    \b
    Examples:
        artifact-detective extract job.log --type eslint-txt
        artifact-detective extract job.log --job-name "lint (ruff)"
        artifact-detective extract job.log -t mypy-txt --normalize
        artifact-detective extract job.log -t cargo-test-txt --start-marker "Running tests"
    """
    with open(log_file, encoding="utf-8", errors="replace") as fh:
        content = fh.read()

    resolved = _resolve_type(artifact_type, job_name, content)

    config = None
    if start_marker or end_marker:
        try:
            config = ExtractorConfig(
                start_marker=start_marker,
                end_marker=end_marker,
                include_end_marker=not exclude_end_marker,
            )
        except ValidationError as exc:
            raise click.BadParameter(str(exc), param_hint="--start-marker/--end-marker") from exc

    result = extract(resolved, content, config=config, normalize=normalize, provider=provider)
    if result is None:
        raise click.ClickException(f"No {resolved} output found in {log_file}")

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(result.content)
    if result.validation is not None and not result.validation.valid:
        click.secho(f"Validation: {format_validation(result.validation)}", fg="yellow", err=True)
