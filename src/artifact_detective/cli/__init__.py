"""artifact-detective CLI - CI artifact classifier."""

import json
import logging
import os
import sys

import click


def get_token(token):
    """Resolve GitHub token from option or environment."""
    token = token or os.environ.get("GITHUB_TOKEN")
    if not token:
        raise click.ClickException(
            "GitHub token required. Pass --token or set GITHUB_TOKEN env var."
        )
    return token


def load_config_or_fail():
    """Load the project configuration, turning schema errors into CLI errors."""
    from artifact_detective.config import load_config
    from artifact_detective.errors import ConfigError

    try:
        return load_config()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose):
    """artifact-detective - classify, validate and normalize CI artifacts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command("types")
@click.option("--json-output", "as_json", is_flag=True, help="Output as JSON.")
def types_cmd(as_json):
    """List artifact types and what each supports."""
    from artifact_detective.formatter import format_registry
    from artifact_detective.registry import ARTIFACT_TYPE_REGISTRY

    if as_json:
        payload = {t.value: caps.to_dict() for t, caps in ARTIFACT_TYPE_REGISTRY.items()}
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(format_registry(ARTIFACT_TYPE_REGISTRY))


@cli.command("validate")
@click.argument("artifact_type")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json-output", "as_json", is_flag=True, help="Output as JSON.")
def validate_cmd(artifact_type, path, as_json):
    """Check that PATH is well-formed output of ARTIFACT_TYPE.

    Exits 1 when it is not.
    """
    from artifact_detective.formatter import format_validation
    from artifact_detective.registry import validate

    with open(path, encoding="utf-8", errors="replace") as fh:
        content = fh.read()
    result = validate(artifact_type, content)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.echo(f"{path}: {format_validation(result)}")

    if not result.valid:
        sys.exit(1)


@cli.command()
@click.argument("run_id")
@click.option("--repo", "-r", required=True, help="GitHub repo (owner/repo).")
@click.option("--token", "-t", default=None, help="GitHub token (or set GITHUB_TOKEN env var).")
@click.option("--output-dir", "-o", default=None, type=click.Path(file_okay=False),
              help="Write each extracted output to this directory.")
@click.option("--json-output", "as_json", is_flag=True, help="Output as JSON.")
def logs(run_id, repo, token, output_dir, as_json):
    """Extract tool outputs from a CI run's job logs."""
    from pathlib import Path

    from artifact_detective.collector import collect_from_logs, missing_required
    from artifact_detective.formatter import format_collected
    from artifact_detective.github import fetch_run_logs, job_logs

    token = get_token(token)
    config = load_config_or_fail()
    configs = config.extract_artifact_types_from_logs

    if not as_json:
        click.echo(f"Fetching logs for run {run_id} in {repo}...")
    log_files = fetch_run_logs(repo, run_id, token)
    outputs = collect_from_logs(job_logs(log_files), configs)

    if output_dir:
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        for item in outputs:
            (out / item.file_name).write_text(item.result.content, encoding="utf-8")

    if as_json:
        click.echo(json.dumps([item.to_dict() for item in outputs], indent=2))
    else:
        click.echo(format_collected(outputs))

    missing = missing_required(outputs, configs)
    if missing:
        for entry in missing:
            reason = f" ({entry.reason})" if entry.reason else ""
            click.secho(f"Required {entry.type.value} output not found{reason}", fg="red", err=True)
        sys.exit(1)


from artifact_detective.cli.convert_cmd import convert_cmd
from artifact_detective.cli.detect_cmd import detect_cmd
from artifact_detective.cli.extract_cmd import extract_cmd

cli.add_command(detect_cmd)
cli.add_command(extract_cmd)
cli.add_command(convert_cmd)
