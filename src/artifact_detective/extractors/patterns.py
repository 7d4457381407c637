"""
Regex pattern registry for locating tool output in CI logs.

To add a tool:
  - Append a (linter_type, patterns) entry to LINTER_PATTERNS; order is
    priority, since one job name can mention several tools
  - Add its LogSliceRule to SLICE_RULES in extractors/linters.py

Each LINTER_PATTERNS entry: (linter_type, (compiled_regex, ...))
"""

import re

LinterPatternEntry = tuple[str, tuple[re.Pattern, ...]]


# ---------------------------------------------------------------------------
# Linter family detection: matched against job name + head of the log
# ---------------------------------------------------------------------------

LINTER_PATTERNS: tuple[LinterPatternEntry, ...] = (
    ("eslint", (re.compile(r"eslint", re.I), re.compile(r"npm run lint", re.I))),
    ("prettier", (re.compile(r"prettier", re.I), re.compile(r"npm run format", re.I))),
    ("ruff", (re.compile(r"ruff check", re.I), re.compile(r"ruff\s", re.I))),
    ("flake8", (re.compile(r"flake8", re.I),)),
    ("isort", (re.compile(r"isort", re.I),)),
    ("black", (re.compile(r"black --check", re.I), re.compile(r"black\s", re.I))),
    ("tsc", (re.compile(r"tsc --noEmit", re.I), re.compile(r"npm run type-check", re.I))),
    ("mypy", (re.compile(r"mypy", re.I),)),
    ("pylint", (re.compile(r"pylint", re.I),)),
    ("clippy", (re.compile(r"cargo clippy", re.I), re.compile(r"clippy", re.I))),
    ("rustfmt", (re.compile(r"cargo fmt", re.I), re.compile(r"rustfmt", re.I))),
)

# How much of the log, after the job name, is searched for the patterns above.
DETECTION_WINDOW = 1000


# ---------------------------------------------------------------------------
# Line shapes shared by the slice rules
# ---------------------------------------------------------------------------

PATH_CHARS = r"[a-zA-Z0-9_\-/.]"

# GitHub Actions workflow commands: ##[group], ##[endgroup], ##[error] ...
CI_MARKER = re.compile(r"^##\[")

# ── ESLint ──
ESLINT_BANNER = re.compile(r"(?i:eslint.*\.(?:js|ts|jsx|tsx))|npm run lint")
ESLINT_MESSAGE = re.compile(r"\d+:\d+\s+(error|warning)|\d+\s+problem")
ESLINT_SUMMARY = re.compile(r"\d+\s+problem")

# ── Prettier ──
PRETTIER_BANNER = re.compile(r"prettier|npm run format")
PRETTIER_FILE = re.compile(rf"^(\[warn\]\s+)?{PATH_CHARS}+\.(js|ts|jsx|tsx|json|css|md)")
PRETTIER_SUMMARY = re.compile(r"Code style issues (found|were found)")

# ── Python linters (ruff, flake8, pylint) ──
PY_LINT_LINE = re.compile(rf"^{PATH_CHARS}+\.py:\d+")
RUFF_LINE = re.compile(rf"^{PATH_CHARS}+\.py:\d+|^[A-Z]+\d+\s")
RUFF_RAW = re.compile(rf"^{PATH_CHARS}+\.py:\d+|^\s*-->\s+{PATH_CHARS}+\.py:\d+:\d+")
PY_LINT_SUMMARY = re.compile(r"^(Found )?\d+ errors?", re.I)
PYLINT_LINE = re.compile(rf"^{PATH_CHARS}+\.py:\d+|^\*{{13}} Module ")
PYLINT_SUMMARY = re.compile(r"Your code has been rated at")

# ── TypeScript compiler ──
TSC_BANNER = re.compile(r"tsc |type-check")
TSC_LINE = re.compile(rf"^{PATH_CHARS}+\.tsx?:\d+:\d+|error TS\d+:")
TSC_RAW = re.compile(r"\.tsx?\(\d+,\d+\):\s+error\s+TS\d+|\.tsx?:\d+:\d+\s+-\s+error\s+TS\d+")
TSC_SUMMARY = re.compile(r"Found \d+ error")

# ── mypy ──
MYPY_LINE = re.compile(rf"^{PATH_CHARS}+\.py:\d+:(?:\d+:)?\s*(error|warning):")
MYPY_RAW = re.compile(rf"^{PATH_CHARS}+\.py:\d+:(?:\d+:)?\s*(error|warning|note):")
MYPY_SUMMARY = re.compile(r"Found \d+ error")

# ── Formatters (black, isort) ──
FORMATTER_LINE = re.compile(rf"would reformat|incorrectly sorted|^{PATH_CHARS}+\.py", re.I)
BLACK_SUMMARY = re.compile(r"\d+ files? would be (reformatted|left unchanged)")
ISORT_SUMMARY = re.compile(r"^Skipped \d+ files")

# ── Clippy ──
CLIPPY_LINE = re.compile(r"^(warning|error)(\[\w+\])?:|-->\s+\S+\.rs:\d+:\d+")
CLIPPY_RAW = re.compile(r"^(warning|error)(\[\w+\])?:\s|-->\s+\S+\.rs:\d+:\d+")
CLIPPY_SUMMARY = re.compile(r"\d+\s+warnings?\s+emitted")
