"""Tests for the per-type validators."""

from __future__ import annotations

import json

import pytest

from artifact_detective.validators import (
    validate_black_output,
    validate_cargo_test_output,
    validate_clippy_json,
    validate_clippy_text,
    validate_eslint_output,
    validate_flake8_output,
    validate_isort_output,
    validate_jest_json,
    validate_junit_xml,
    validate_mypy_output,
    validate_playwright_json,
    validate_prettier_output,
    validate_pylint_output,
    validate_pytest_json,
    validate_ruff_output,
    validate_rustfmt_output,
    validate_tsc_output,
)

COMPILER_MESSAGE = {
    "reason": "compiler-message",
    "package_id": "sample 0.1.0",
    "message": {
        "level": "warning",
        "message": "unused variable: `x`",
        "code": {"code": "unused_variables"},
        "spans": [{"file_name": "src/lib.rs", "line_start": 3, "column_start": 9, "is_primary": True}],
    },
}


# -- Rust ------------------------------------------------------------------

class TestClippyJson:
    def test_empty_is_invalid(self):
        result = validate_clippy_json("")
        assert not result.valid
        assert result.error == "No valid clippy JSON messages found"

    def test_valid_stream_with_noise(self):
        content = "\n".join([
            "    Checking sample v0.1.0",
            json.dumps(COMPILER_MESSAGE),
            json.dumps({"reason": "build-finished", "success": True}),
        ])
        assert validate_clippy_json(content).valid

    def test_bad_reason_fails(self):
        result = validate_clippy_json(json.dumps({"reason": "compiler-oops"}))
        assert not result.valid
        assert result.error == "Invalid reason value: compiler-oops"

    def test_compiler_message_without_spans(self):
        msg = {"reason": "compiler-message", "message": {"level": "warning"}}
        result = validate_clippy_json(json.dumps(msg))
        assert result.error == "Compiler message missing required fields"

    def test_empty_spans_list_is_fine(self):
        msg = {"reason": "compiler-message", "message": {"level": "warning", "spans": []}}
        assert validate_clippy_json(json.dumps(msg)).valid

    def test_lines_without_reason_skipped(self):
        content = '{"foo": 1}\n{not json\n' + json.dumps({"reason": "compiler-artifact"})
        assert validate_clippy_json(content).valid

    def test_deeply_nested_line_skipped(self):
        result = validate_clippy_json('{"a":' + "[" * 40000)
        assert result.error == "No valid clippy JSON messages found"


class TestClippyText:
    def test_empty_is_valid(self):
        assert validate_clippy_text("").valid

    def test_warning_with_span(self):
        content = "warning: unused variable: `x`\n --> src/lib.rs:3:9\n"
        assert validate_clippy_text(content).valid

    def test_summary_only(self):
        assert validate_clippy_text("warning: `sample` (lib) generated 2 warnings emitted").valid

    def test_warning_without_span(self):
        result = validate_clippy_text("warning: something happened")
        assert result.error == "Does not match clippy text output format"


class TestRustfmt:
    def test_empty_is_valid(self):
        assert validate_rustfmt_output("   \n").valid

    def test_diff(self):
        assert validate_rustfmt_output("Diff in /repo/src/main.rs at line 3:\n").valid

    def test_unrelated(self):
        result = validate_rustfmt_output("all good")
        assert result.error == "Does not match rustfmt output format"


class TestCargoTest:
    def test_running_and_result(self):
        content = "running 3 tests\n\ntest result: ok. 3 passed; 0 failed"
        assert validate_cargo_test_output(content).valid

    def test_individual_line_alone(self):
        assert validate_cargo_test_output("test tests::adds ... FAILED").valid

    def test_running_without_result(self):
        result = validate_cargo_test_output("running 3 tests\n")
        assert result.error == "Does not match cargo test output format"


# -- JavaScript ------------------------------------------------------------

class TestJavaScriptValidators:
    def test_jest_json(self):
        assert validate_jest_json(json.dumps({"testResults": [{"assertionResults": []}]})).valid

    def test_jest_json_missing_results(self):
        assert not validate_jest_json("{}").valid

    def test_jest_json_not_json(self):
        assert validate_jest_json("nope").error.startswith("Invalid JSON")

    def test_jest_json_deeply_nested(self):
        assert validate_jest_json("[" * 40000).error.startswith("Invalid JSON")

    def test_playwright_json(self):
        assert validate_playwright_json(json.dumps({"config": {}, "suites": []})).valid

    def test_playwright_json_without_suites(self):
        assert validate_playwright_json(json.dumps({"config": {}})).error == "Missing suites array"

    def test_eslint(self):
        assert validate_eslint_output("  3:7  error  'x' is unused  no-unused-vars").valid
        assert not validate_eslint_output("hello").valid

    def test_prettier(self):
        assert validate_prettier_output("[warn] src/a.ts\n").valid
        assert validate_prettier_output("All matched files use Prettier code style!").valid

    def test_tsc(self):
        assert validate_tsc_output("src/a.ts(1,5): error TS2304: Cannot find name 'foo'.").valid
        assert not validate_tsc_output("").valid


# -- Python ----------------------------------------------------------------

class TestPythonValidators:
    def test_pytest_json(self):
        content = json.dumps({"tests": [{"nodeid": "t.py::a", "outcome": "passed"}]})
        assert validate_pytest_json(content).valid

    def test_pytest_json_bad_test(self):
        result = validate_pytest_json(json.dumps({"tests": [{"nodeid": "t.py::a"}]}))
        assert result.error == "tests[0] missing nodeid or outcome"

    @pytest.mark.parametrize("content", [
        "src/app.py:1:8: F401 [*] `os` imported but unused",
        "F401 [*] `os` imported but unused\n --> src/app.py:1:8",
        "All checks passed!",
    ])
    def test_ruff(self, content):
        assert validate_ruff_output(content).valid

    def test_mypy(self):
        assert validate_mypy_output("src/app.py:3: error: Bad return  [return-value]").valid
        assert validate_mypy_output("Success: no issues found in 4 source files").valid

    def test_flake8(self):
        assert validate_flake8_output("app/mod.py:12:3: E225 missing whitespace").valid
        assert not validate_flake8_output("").valid

    def test_pylint(self):
        assert validate_pylint_output("app.py:1:0: C0114: Missing module docstring").valid

    def test_black(self):
        assert validate_black_output("would reformat src/app.py").valid
        assert validate_black_output("All done! ✨ 🍰 ✨\n3 files would be left unchanged.").valid

    def test_isort(self):
        assert validate_isort_output("ERROR: src/a.py Imports are incorrectly sorted and/or formatted.").valid
        assert not validate_isort_output("ok").valid


# -- JUnit -----------------------------------------------------------------

class TestJunitXml:
    def test_testsuites_root(self):
        content = '<?xml version="1.0" encoding="UTF-8"?>\n<testsuites><testsuite name="s"><testcase name="a"/></testsuite></testsuites>'
        assert validate_junit_xml(content).valid

    def test_bom_prefix(self):
        assert validate_junit_xml("\ufeff<testsuite><testcase name='a'/></testsuite>").valid

    def test_wrong_root(self):
        assert validate_junit_xml("<project/>").error == "Unexpected root element: <project>"

    def test_testcase_without_name(self):
        assert not validate_junit_xml("<testsuite><testcase classname='x'/></testsuite>").valid

    def test_malformed(self):
        assert validate_junit_xml("<testsuite>").error.startswith("Invalid XML")
