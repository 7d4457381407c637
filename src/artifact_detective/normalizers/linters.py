"""
Linter text → diagnostics.

Each parser reads one tool's output format line by line and returns
Diagnostic records. Lines a parser does not recognise are skipped.

To support another tool, write a ``_parse_<tool>(lines)`` function and
register it in DIAGNOSTIC_PARSERS under its artifact type.
"""

from __future__ import annotations

import json
import re
from typing import Callable

from artifact_detective.types import ArtifactType, Diagnostic

# ---------------------------------------------------------------------------
# JavaScript / TypeScript
# ---------------------------------------------------------------------------

_ESLINT_FILE = re.compile(r"^(\S.*\.(?:[cm]?[jt]sx?|vue))\s*$")
_ESLINT_MESSAGE = re.compile(
    r"^\s+(\d+):(\d+)\s+(error|warning)\s+(.+?)(?:\s{2,}(@?[\w/-]+))?\s*$"
)


def _parse_eslint(lines: list[str]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    current_file = None
    for line in lines:
        m = _ESLINT_FILE.match(line)
        if m:
            current_file = m.group(1)
            continue
        m = _ESLINT_MESSAGE.match(line)
        if m and current_file:
            diagnostics.append(Diagnostic(
                file=current_file,
                line=int(m.group(1)),
                column=int(m.group(2)),
                severity=m.group(3),
                code=m.group(5),
                message=m.group(4).strip(),
            ))
    return diagnostics


_TSC_PAREN = re.compile(r"^(.+?)\((\d+),(\d+)\):\s+(error|warning)\s+(TS\d+):\s+(.*)$")
_TSC_PRETTY = re.compile(r"^(.+?):(\d+):(\d+)\s+-\s+(error|warning)\s+(TS\d+):\s+(.*)$")


def _parse_tsc(lines: list[str]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for line in lines:
        m = _TSC_PAREN.match(line) or _TSC_PRETTY.match(line)
        if m:
            diagnostics.append(Diagnostic(
                file=m.group(1).strip(),
                line=int(m.group(2)),
                column=int(m.group(3)),
                severity=m.group(4),
                code=m.group(5),
                message=m.group(6).strip(),
            ))
    return diagnostics


# ---------------------------------------------------------------------------
# Python
# ---------------------------------------------------------------------------

_MYPY_LINE = re.compile(
    r"^(.+?\.pyi?):(\d+):(?:(\d+):)?\s+(error|warning|note):\s+(.*?)(?:\s+\[([\w-]+)\])?\s*$"
)

# flake8, and ruff's concise format
_PY_CONCISE = re.compile(r"^(.+?\.pyi?):(\d+):(\d+):\s+([A-Z]+\d+)\s+(?:\[\*\]\s+)?(.*)$")
# ruff's full format: a code line, then a ``-->`` location line
_RUFF_HEADER = re.compile(r"^(?:(?:error|warning)\[([A-Z]+\d+)\]:|([A-Z]+\d+)(?:\s+\[\*\])?)\s+(.*)$")
_RUFF_LOCATION = re.compile(r"^\s*-->\s+(.+?):(\d+):(\d+)")

_PYLINT_LINE = re.compile(
    r"^(.+?\.py):(\d+):(\d+):\s+([CRWEFI]\d{4}):\s+(.*?)(?:\s+\(([\w-]+)\))?\s*$"
)
_PYLINT_SEVERITY = {"E": "error", "F": "error", "W": "warning"}


def _parse_mypy(lines: list[str]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for line in lines:
        m = _MYPY_LINE.match(line)
        if m:
            diagnostics.append(Diagnostic(
                file=m.group(1),
                line=int(m.group(2)),
                column=int(m.group(3)) if m.group(3) else None,
                severity=m.group(4),
                code=m.group(6),
                message=m.group(5),
            ))
    return diagnostics


def _code_severity(code: str) -> str:
    return "warning" if code.startswith("W") else "error"


def _parse_python_linter(lines: list[str]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    pending: tuple[str, str] | None = None
    for line in lines:
        m = _PY_CONCISE.match(line)
        if m:
            pending = None
            diagnostics.append(Diagnostic(
                file=m.group(1),
                line=int(m.group(2)),
                column=int(m.group(3)),
                severity=_code_severity(m.group(4)),
                code=m.group(4),
                message=m.group(5).strip(),
            ))
            continue
        m = _RUFF_HEADER.match(line)
        if m:
            pending = (m.group(1) or m.group(2), m.group(3).strip())
            continue
        m = _RUFF_LOCATION.match(line)
        if m and pending:
            code, message = pending
            pending = None
            diagnostics.append(Diagnostic(
                file=m.group(1),
                line=int(m.group(2)),
                column=int(m.group(3)),
                severity=_code_severity(code),
                code=code,
                message=message,
            ))
    return diagnostics


def _parse_pylint(lines: list[str]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for line in lines:
        m = _PYLINT_LINE.match(line)
        if m:
            code = m.group(4)
            diagnostics.append(Diagnostic(
                file=m.group(1),
                line=int(m.group(2)),
                column=int(m.group(3)),
                severity=_PYLINT_SEVERITY.get(code[0], "info"),
                code=code,
                message=m.group(5),
            ))
    return diagnostics


# ---------------------------------------------------------------------------
# Rust
# ---------------------------------------------------------------------------

def _parse_clippy_json(lines: list[str]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for line in lines:
        line = line.strip()
        if not line.startswith("{"):
            continue
        try:
            obj = json.loads(line)
        except (ValueError, RecursionError):
            continue
        if not isinstance(obj, dict) or obj.get("reason") != "compiler-message":
            continue
        message = obj.get("message")
        if not isinstance(message, dict):
            continue
        spans = message.get("spans")
        code = message.get("code")
        if not isinstance(spans, list) or not spans or not all(isinstance(s, dict) for s in spans):
            continue
        if code is not None and not isinstance(code, dict):
            continue
        span = next((s for s in spans if s.get("is_primary")), spans[0])
        code = code or {}
        diagnostics.append(Diagnostic(
            file=span.get("file_name", ""),
            line=span.get("line_start", 0),
            column=span.get("column_start"),
            severity=message.get("level", "warning"),
            code=code.get("code"),
            message=message.get("message", ""),
        ))
    return diagnostics


_CLIPPY_HEADER = re.compile(r"^(error|warning)(?:\[(\w+)\])?:\s+(.*)$")
_CLIPPY_LOCATION = re.compile(r"^\s*-->\s+(.+?):(\d+):(\d+)")
_CLIPPY_LINT_NOTE = re.compile(r"#\[(?:warn|deny|forbid)\(([\w:]+)\)\]")


def _parse_clippy_text(lines: list[str]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    pending: tuple[str, str | None, str] | None = None
    current: Diagnostic | None = None
    for line in lines:
        m = _CLIPPY_HEADER.match(line)
        if m:
            pending = (m.group(1), m.group(2), m.group(3).strip())
            current = None
            continue
        m = _CLIPPY_LOCATION.match(line)
        if m and pending:
            severity, code, message = pending
            pending = None
            current = Diagnostic(
                file=m.group(1),
                line=int(m.group(2)),
                column=int(m.group(3)),
                severity=severity,
                code=code,
                message=message,
            )
            diagnostics.append(current)
            continue
        # Clippy names the lint in a trailing note
        m = _CLIPPY_LINT_NOTE.search(line)
        if m and current is not None and current.code is None:
            current.code = m.group(1)
    return diagnostics


DIAGNOSTIC_PARSERS: dict[ArtifactType, Callable[[list[str]], list[Diagnostic]]] = {
    ArtifactType.ESLINT_TXT: _parse_eslint,
    ArtifactType.TSC_TXT: _parse_tsc,
    ArtifactType.MYPY_TXT: _parse_mypy,
    ArtifactType.RUFF_TXT: _parse_python_linter,
    ArtifactType.FLAKE8_TXT: _parse_python_linter,
    ArtifactType.PYLINT_TXT: _parse_pylint,
    ArtifactType.CLIPPY_JSON: _parse_clippy_json,
    ArtifactType.CLIPPY_TXT: _parse_clippy_text,
}


def normalize_linter_output(artifact_type: ArtifactType | str, content: str) -> list[dict] | None:
    """
    Parse linter output into a list of diagnostic dicts.

    Returns:
        One dict per finding (possibly empty), or None when the type has
        no parser.
    """
    try:
        parser = DIAGNOSTIC_PARSERS.get(ArtifactType(artifact_type))
    except ValueError:
        return None
    if parser is None:
        return None
    return [d.to_dict() for d in parser(content.splitlines())]
