"""
Playwright HTML reporter → Playwright JSON report.

The reporter has embedded its data in several places over the years.
Each locator below handles one of them; they are tried in order and the
first one yielding a JSON object wins.
"""

from __future__ import annotations

import base64
import binascii
import gzip
import io
import json
import logging
import os
import re
import zipfile
from typing import Callable

from bs4 import BeautifulSoup

from artifact_detective.normalizers.base import load_html, parse_json_object

logger = logging.getLogger(__name__)

_REPORT_ASSIGN = re.compile(r"window\.playwrightReport\s*=\s*(?={)")
_REPORT_BASE64 = re.compile(
    r"""window\.playwrightReportBase64\s*=\s*["']"""
    r"""(?:data:application/zip;base64,)?([A-Za-z0-9+/=\s]+)["']"""
)
_DATA_URL_PREFIX = re.compile(r"^data:[^,]*;base64,")

GZIP_MAGIC = b"\x1f\x8b"


def _script_text(tag) -> str:
    return tag.string or ""


def decode_packed_report(payload: str) -> dict | None:
    """Decode a base64 report payload holding gzip'd JSON or a zip with ``report.json``."""
    try:
        raw = base64.b64decode(_DATA_URL_PREFIX.sub("", payload.strip()))
    except (binascii.Error, ValueError):
        return None

    try:
        if raw[:2] == GZIP_MAGIC:
            return parse_json_object(gzip.decompress(raw).decode("utf-8", errors="replace"))
        buffer = io.BytesIO(raw)
        if not zipfile.is_zipfile(buffer):
            return None
        with zipfile.ZipFile(buffer) as zf:
            names = zf.namelist()
            member = "report.json" if "report.json" in names else next(
                (n for n in names if n.endswith(".json")), None
            )
            if member is None:
                return None
            return parse_json_object(zf.read(member).decode("utf-8", errors="replace"))
    except (OSError, EOFError, zipfile.BadZipFile) as exc:
        logger.debug("Could not unpack Playwright report payload: %s", exc)
        return None


def _from_data_script(soup: BeautifulSoup) -> dict | None:
    script = soup.select_one("script#data")
    if script is None:
        return None
    text = _script_text(script)
    m = _REPORT_ASSIGN.search(text)
    if m is None:
        return None
    try:
        report, _ = json.JSONDecoder().raw_decode(text, m.end())
    except (ValueError, RecursionError):
        return None
    return report if isinstance(report, dict) else None


def _from_gzipped_attribute(soup: BeautifulSoup) -> dict | None:
    element = soup.select_one('[data-testid="report-gzipped"]')
    payload = element.get("data-report") if element is not None else None
    if not payload:
        return None
    return parse_json_object(payload) or decode_packed_report(payload)


def _from_json_scripts(soup: BeautifulSoup) -> dict | None:
    for script in soup.select('script[type="application/json"]'):
        report = parse_json_object(_script_text(script))
        if report is not None:
            return report
    return None


def _from_base64_script(soup: BeautifulSoup) -> dict | None:
    for script in soup.find_all("script"):
        m = _REPORT_BASE64.search(_script_text(script))
        if m:
            report = decode_packed_report(m.group(1))
            if report is not None:
                return report
    return None


LOCATORS: tuple[Callable[[BeautifulSoup], dict | None], ...] = (
    _from_data_script,
    _from_gzipped_attribute,
    _from_json_scripts,
    _from_base64_script,
)


def extract_playwright_json(html_file_path: str | os.PathLike) -> dict | None:
    """
    Pull the embedded JSON report out of a Playwright HTML report.

    Returns:
        The report object as Playwright wrote it, or None when none of the
        known locations holds one.

    Raises:
        ExtractionError: the file could not be read.
    """
    soup = load_html(html_file_path, "Playwright")
    for locate in LOCATORS:
        report = locate(soup)
        if report is not None:
            logger.debug("Playwright report found via %s", locate.__name__)
            return report
    logger.debug("No embedded Playwright report in %s", html_file_path)
    return None
