"""Helpers shared by the HTML normalizers."""

from __future__ import annotations

import json
import os
from pathlib import Path

from bs4 import BeautifulSoup

from artifact_detective.errors import ExtractionError


def load_html(html_file_path: str | os.PathLike, tool: str) -> BeautifulSoup:
    """Parse an HTML report, raising ExtractionError if it can't be read.

    Only I/O problems raise; the caller named this file explicitly, so a
    missing file is an error rather than "not this tool".
    """
    try:
        html = Path(html_file_path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ExtractionError(f"Failed to extract JSON from {tool} HTML: {exc}") from exc
    return BeautifulSoup(html, "html.parser")


def parse_json_object(text: str | None) -> dict | None:
    """Parse ``text`` as JSON, returning it only if it is an object."""
    if not text:
        return None
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return data if isinstance(data, dict) else None
