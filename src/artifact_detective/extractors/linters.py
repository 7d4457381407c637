"""
Per-tool extraction of linter and compiler output from CI logs.

Takes a linter family (``eslint``) or artifact type (``eslint-txt``) plus
log text → the slice of the log that is that tool's output.
"""

from __future__ import annotations

import json
import logging
import re

from artifact_detective.extractors import patterns as p
from artifact_detective.extractors.slicer import LogSliceRule, is_raw_output, slice_log
from artifact_detective.types import ArtifactType, LinterMatch
from artifact_detective.validators import CLIPPY_REASONS

logger = logging.getLogger(__name__)


def _python_linter(name: str, line: re.Pattern = p.PY_LINT_LINE, raw: re.Pattern = p.PY_LINT_LINE,
                   end: re.Pattern = p.PY_LINT_SUMMARY) -> LogSliceRule:
    return LogSliceRule(start=re.compile(re.escape(name)), line=line, end=end, raw=raw,
                        continuation=True)


def _formatter(name: str, end: re.Pattern) -> LogSliceRule:
    return LogSliceRule(start=re.compile(re.escape(name)), line=p.FORMATTER_LINE, end=end)


SLICE_RULES: dict[str, LogSliceRule] = {
    "eslint": LogSliceRule(start=p.ESLINT_BANNER, end=p.ESLINT_SUMMARY, raw=p.ESLINT_MESSAGE),
    "prettier": LogSliceRule(start=p.PRETTIER_BANNER, line=p.PRETTIER_FILE, end=p.PRETTIER_SUMMARY),
    "ruff": _python_linter("ruff", line=p.RUFF_LINE, raw=p.RUFF_RAW),
    "flake8": _python_linter("flake8"),
    "pylint": _python_linter("pylint", line=p.PYLINT_LINE, raw=p.PYLINT_LINE, end=p.PYLINT_SUMMARY),
    "tsc": LogSliceRule(start=p.TSC_BANNER, line=p.TSC_LINE, end=p.TSC_SUMMARY, raw=p.TSC_RAW),
    "mypy": LogSliceRule(start=re.compile("mypy"), line=p.MYPY_LINE, end=p.MYPY_SUMMARY, raw=p.MYPY_RAW),
    "black": _formatter("black", p.BLACK_SUMMARY),
    "isort": _formatter("isort", p.ISORT_SUMMARY),
    "clippy": LogSliceRule(start=re.compile("clippy"), line=p.CLIPPY_LINE, end=p.CLIPPY_SUMMARY,
                           raw=p.CLIPPY_RAW),
}

# Tools whose artifacts are their raw output file; nothing to cut out.
PASSTHROUGH = frozenset({"cargo-test", "rustfmt"})


def linter_family(linter_type: ArtifactType | str) -> str:
    """``eslint-txt`` → ``eslint``; bare family names pass through."""
    name = getattr(linter_type, "value", linter_type)
    return re.sub(r"-(txt|json)$", "", name)


def detect_linter_type(job_name: str, log_content: str) -> str | None:
    """Guess the linter family from a job name and the head of its log."""
    combined = f"{job_name}\n{log_content[:p.DETECTION_WINDOW]}"
    for linter_type, regexes in p.LINTER_PATTERNS:
        if any(rx.search(combined) for rx in regexes):
            return linter_type
    return None


def _find_clippy_messages(linter_type: str, lines: list[str]) -> LinterMatch | None:
    kept: list[tuple[int, str]] = []
    for idx, line in enumerate(lines):
        stripped = line.strip()
        if not stripped.startswith("{"):
            continue
        try:
            obj = json.loads(stripped)
        except (ValueError, RecursionError):
            continue
        if isinstance(obj, dict) and obj.get("reason") in CLIPPY_REASONS:
            kept.append((idx, stripped))
    if not kept:
        return None
    return LinterMatch(linter_type, kept[0][0] + 1, kept[-1][0] + 1, "\n".join(l for _, l in kept))


def find_linter_output(linter_type: ArtifactType | str, log_content: str) -> LinterMatch | None:
    """Locate a tool's output in ``log_content``.

    Returns None when the tool is unknown or nothing of its output was
    found.
    """
    name = getattr(linter_type, "value", linter_type)
    lines = log_content.split("\n")

    if name == ArtifactType.CLIPPY_JSON.value:
        return _find_clippy_messages(name, lines)

    family = linter_family(name)
    if family in PASSTHROUGH:
        content = log_content.strip()
        return LinterMatch(name, 1, len(lines), content) if content else None

    rule = SLICE_RULES.get(family)
    if rule is None:
        logger.debug("No extraction rule for %s", name)
        return None

    if is_raw_output(lines, rule):
        return LinterMatch(name, 1, len(lines), log_content.strip())

    captured = slice_log(lines, rule)
    if not captured:
        logger.debug("No %s output found in log", family)
        return None
    return LinterMatch(
        linter_type=name,
        start_line=captured[0][0] + 1,
        end_line=captured[-1][0] + 1,
        content="\n".join(line for _, line in captured),
    )


def extract_linter_output(linter_type: ArtifactType | str, log_content: str) -> str | None:
    """Return just the ``linter_type`` output contained in ``log_content``."""
    match = find_linter_output(linter_type, log_content)
    return match.content if match else None
