"""Tests for locating tool output inside CI logs."""

from __future__ import annotations

import json
import re

import pytest

from artifact_detective.extractors import (
    detect_linter_type,
    extract_linter_output,
    find_linter_output,
    linter_family,
    slice_between,
)
from artifact_detective.types import ArtifactType


ESLINT_CI_LOG = """##[group]Run npm run lint
npm run lint
/home/runner/work/app/src/sample.js
  1:7  error  'unused' is assigned a value but never used  no-unused-vars

✖ 1 problem (1 error, 0 warnings)
##[error]Process completed with exit code 1."""

ESLINT_RAW = """
/home/runner/work/app/src/sample.js
  1:7  error  'unused' is assigned a value but never used  no-unused-vars
  5:1  warning  Unexpected console statement  no-console

✖ 2 problems (1 error, 1 warning)
"""

RUFF_CI_LOG = """##[group]Run ruff check .
ruff check .
shell: /usr/bin/bash -e {0}
##[endgroup]
src/app.py:1:8: F401 [*] `os` imported but unused
src/app.py:10:1: E302 expected 2 blank lines, found 1
Found 2 errors.
[*] 1 fixable with the `--fix` option.
##[error]Process completed with exit code 1."""

TSC_CI_LOG = """> app@1.0.0 type-check
> tsc --noEmit

src/a.ts(3,7): error TS2322: Type 'string' is not assignable to type 'number'.

Found 1 error in src/a.ts:3
"""

MYPY_RAW = (
    'src/app.py:3: error: Incompatible return value type (got "str", expected "int")  [return-value]\n'
    "Found 1 error in 1 file (checked 2 source files)"
)

FLAKE8_CI_LOG = """flake8 src --show-source
src/app.py:1:1: F401 'os' imported but unused
import os
^

##[error]Process completed with exit code 1."""

PYLINT_RAW = """************* Module app
app.py:1:0: C0114: Missing module docstring (missing-module-docstring)

------------------------------------------------------------------
Your code has been rated at 5.00/10
"""

BLACK_CI_LOG = """##[group]Run black --check .
black --check .
##[endgroup]
would reformat src/app.py
Oh no! 💥 💔 💥
1 file would be reformatted, 3 files would be left unchanged.
##[error]Process completed with exit code 1."""

ISORT_LOG = """isort --check-only .
ERROR: /repo/src/app.py Imports are incorrectly sorted and/or formatted.
Skipped 2 files"""

PRETTIER_LOG = """> prettier --check .
Checking formatting...
[warn] src/a.ts
[warn] src/b.css
[warn] Code style issues found in 2 files. Run Prettier with --write to fix."""

CLIPPY_CI_LOG = """##[group]Run cargo clippy -- -D warnings
cargo clippy -- -D warnings
##[endgroup]
    Checking sample v0.1.0 (/home/runner/work/sample)
warning: unused variable: `x`
 --> src/lib.rs:3:9
  |
3 |     let x = 5;
  |         ^ help: if this is intentional, prefix it with an underscore: `_x`

warning: `sample` (lib) generated 1 warning
    Finished dev [unoptimized + debuginfo] target(s) in 0.50s"""


# -- Linter type detection -------------------------------------------------

class TestDetectLinterType:
    @pytest.mark.parametrize("job_name, log, expected", [
        ("lint", "npm run lint\n", "eslint"),
        ("format", "npm run format", "prettier"),
        ("ruff check", "", "ruff"),
        ("Lint", "flake8 src", "flake8"),
        ("imports", "isort --check-only .", "isort"),
        ("style", "black --check .", "black"),
        ("types", "tsc --noEmit", "tsc"),
        ("mypy", "", "mypy"),
        ("pylint", "", "pylint"),
        ("rust", "cargo clippy -- -D warnings", "clippy"),
        ("rust-format", "cargo fmt --check", "rustfmt"),
    ])
    def test_families(self, job_name, log, expected):
        assert detect_linter_type(job_name, log) == expected

    def test_priority_order(self):
        assert detect_linter_type("eslint + prettier + mypy", "") == "eslint"

    def test_only_log_head_searched(self):
        log = "x" * 1000 + "\nmypy src"
        assert detect_linter_type("build", log) is None

    def test_nothing_matches(self):
        assert detect_linter_type("build", "compiling...") is None


class TestLinterFamily:
    @pytest.mark.parametrize("name, family", [
        ("eslint-txt", "eslint"),
        ("clippy-json", "clippy"),
        ("cargo-test-txt", "cargo-test"),
        ("mypy", "mypy"),
        (ArtifactType.TSC_TXT, "tsc"),
    ])
    def test_strips_suffix(self, name, family):
        assert linter_family(name) == family


# -- JavaScript ------------------------------------------------------------

class TestEslintExtraction:
    def test_ci_log_slice_ends_at_problem_line(self):
        output = extract_linter_output("eslint-txt", ESLINT_CI_LOG)
        assert output == (
            "/home/runner/work/app/src/sample.js\n"
            "  1:7  error  'unused' is assigned a value but never used  no-unused-vars\n"
            "✖ 1 problem (1 error, 0 warnings)"
        )

    def test_ci_markers_not_included(self):
        output = extract_linter_output("eslint", ESLINT_CI_LOG)
        assert "##[" not in output
        assert "npm run lint" not in output

    def test_raw_output_returned_trimmed(self):
        assert extract_linter_output("eslint-txt", ESLINT_RAW) == ESLINT_RAW.strip()

    def test_line_numbers(self):
        match = find_linter_output("eslint-txt", ESLINT_CI_LOG)
        assert (match.start_line, match.end_line) == (3, 6)
        assert match.linter_type == "eslint-txt"

    def test_no_banner_no_output(self):
        assert extract_linter_output("eslint", "Compiling...\nDone.") is None


class TestTscAndPrettierExtraction:
    def test_tsc_slice(self):
        output = extract_linter_output("tsc-txt", TSC_CI_LOG)
        assert output == (
            "src/a.ts(3,7): error TS2322: Type 'string' is not assignable to type 'number'.\n"
            "Found 1 error in src/a.ts:3"
        )

    def test_prettier_slice(self):
        output = extract_linter_output("prettier", PRETTIER_LOG)
        assert output.splitlines() == [
            "[warn] src/a.ts",
            "[warn] src/b.css",
            "[warn] Code style issues found in 2 files. Run Prettier with --write to fix.",
        ]


# -- Python ----------------------------------------------------------------

class TestPythonExtraction:
    def test_ruff_skips_step_preamble(self):
        match = find_linter_output("ruff-txt", RUFF_CI_LOG)
        assert match.content.splitlines() == [
            "src/app.py:1:8: F401 [*] `os` imported but unused",
            "src/app.py:10:1: E302 expected 2 blank lines, found 1",
            "Found 2 errors.",
        ]
        assert (match.start_line, match.end_line) == (5, 7)

    def test_mypy_raw(self):
        match = find_linter_output("mypy-txt", MYPY_RAW)
        assert match.content == MYPY_RAW
        assert (match.start_line, match.end_line) == (1, 2)

    def test_flake8_continuation_lines(self):
        output = extract_linter_output("flake8-txt", FLAKE8_CI_LOG)
        assert output == "src/app.py:1:1: F401 'os' imported but unused\nimport os\n^"

    def test_pylint_raw(self):
        assert extract_linter_output("pylint-txt", PYLINT_RAW) == PYLINT_RAW.strip()

    def test_black(self):
        output = extract_linter_output("black-txt", BLACK_CI_LOG)
        assert output == (
            "would reformat src/app.py\n"
            "1 file would be reformatted, 3 files would be left unchanged."
        )

    def test_isort(self):
        output = extract_linter_output("isort-txt", ISORT_LOG)
        assert output.splitlines() == [
            "ERROR: /repo/src/app.py Imports are incorrectly sorted and/or formatted.",
            "Skipped 2 files",
        ]


# -- Rust ------------------------------------------------------------------

class TestRustExtraction:
    def test_clippy_text_slice(self):
        output = extract_linter_output("clippy-txt", CLIPPY_CI_LOG)
        assert output.splitlines()[0] == "warning: unused variable: `x`"
        assert " --> src/lib.rs:3:9" in output
        assert "Checking sample" not in output
        assert "##[" not in output

    def test_clippy_json_keeps_only_messages(self):
        messages = [
            json.dumps({"reason": "compiler-artifact", "package_id": "a"}),
            json.dumps({"reason": "build-finished", "success": True}),
        ]
        log = "\n".join(["    Checking a v0.1.0", messages[0], '{"unrelated": true}', messages[1]])
        match = find_linter_output("clippy-json", log)
        assert match.content.splitlines() == messages
        assert (match.start_line, match.end_line) == (2, 4)

    def test_clippy_json_none_found(self):
        assert find_linter_output("clippy-json", "no json here") is None

    def test_clippy_json_deeply_nested_line_skipped(self):
        message = json.dumps({"reason": "build-finished", "success": True})
        log = "\n".join(['{"reason": ' + "[" * 40000, message])
        match = find_linter_output("clippy-json", log)
        assert match.content == message
        assert (match.start_line, match.end_line) == (2, 2)

    @pytest.mark.parametrize("linter_type", ["cargo-test-txt", "rustfmt-txt", "rustfmt"])
    def test_passthrough(self, linter_type):
        assert extract_linter_output(linter_type, "\n  running 1 test\n") == "running 1 test"

    def test_passthrough_empty(self):
        assert extract_linter_output("cargo-test", "   \n") is None


class TestUnknownLinter:
    def test_returns_none(self):
        assert extract_linter_output("golangci-lint", "anything") is None
        assert find_linter_output("jest-json", "{}") is None


# -- Marker slicing --------------------------------------------------------

class TestSliceBetween:
    LINES = ["noise", "BEGIN", "", "a", "b", "END", "after"]

    def test_includes_end_by_default(self):
        captured = slice_between(self.LINES, re.compile("BEGIN"), re.compile("END"))
        assert [line for _, line in captured] == ["a", "b", "END"]
        assert captured[0][0] == 3

    def test_exclude_end(self):
        captured = slice_between(self.LINES, re.compile("BEGIN"), re.compile("END"), include_end=False)
        assert [line for _, line in captured] == ["a", "b"]

    def test_no_end_runs_to_eof(self):
        captured = slice_between(self.LINES, re.compile("BEGIN"))
        assert [line for _, line in captured][-1] == "after"

    def test_start_not_found(self):
        assert slice_between(self.LINES, re.compile("MISSING")) == []
