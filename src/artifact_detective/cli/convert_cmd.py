"""CLI command: artifact-detective convert — HTML test report to JSON."""

from __future__ import annotations

import json

import click

from artifact_detective.detector import detect
from artifact_detective.errors import ExtractionError
from artifact_detective.normalizers import can_convert_to_json, convert_to_json


@click.command("convert")
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False),
              help="Write JSON here instead of stdout.")
def convert_cmd(html_file: str, output: str | None) -> None:
    """Convert a pytest-html or Playwright HTML report to JSON.

    \b
    Examples:
        artifact-detective convert report.html
        artifact-detective convert playwright-report/index.html -o report.json
    """
    detection = detect(html_file)
    if not can_convert_to_json(detection):
        raise click.ClickException(
            f"{html_file} is {detection.detected_type.value}; "
            "only pytest-html and playwright-html reports can be converted."
        )

    try:
        data = convert_to_json(detection, html_file)
    except ExtractionError as exc:
        raise click.ClickException(str(exc)) from exc
    if data is None:
        raise click.ClickException(f"No embedded report data found in {html_file}")

    text = json.dumps(data, indent=2)
    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(text + "\n")
        click.echo(f"Wrote {detection.detected_type.value} report to {output}")
    else:
        click.echo(text)
