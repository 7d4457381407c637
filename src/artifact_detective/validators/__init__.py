"""
Structural validators, one per artifact type that has one.

Every validator is a pure function ``(content: str) -> ValidationResult``
that never raises, so it can check text cut out of a CI log just as well
as a whole file. Dispatch by type lives in artifact_detective.registry.
"""

from artifact_detective.validators.javascript import (
    validate_eslint_output,
    validate_jest_json,
    validate_playwright_json,
    validate_prettier_output,
    validate_tsc_output,
)
from artifact_detective.validators.junit import validate_junit_xml
from artifact_detective.validators.python import (
    validate_black_output,
    validate_flake8_output,
    validate_isort_output,
    validate_mypy_output,
    validate_pylint_output,
    validate_pytest_json,
    validate_ruff_output,
)
from artifact_detective.validators.rust import (
    CLIPPY_REASONS,
    validate_cargo_test_output,
    validate_clippy_json,
    validate_clippy_text,
    validate_rustfmt_output,
)

__all__ = [
    "CLIPPY_REASONS",
    "validate_black_output",
    "validate_cargo_test_output",
    "validate_clippy_json",
    "validate_clippy_text",
    "validate_eslint_output",
    "validate_flake8_output",
    "validate_isort_output",
    "validate_jest_json",
    "validate_junit_xml",
    "validate_mypy_output",
    "validate_playwright_json",
    "validate_prettier_output",
    "validate_pylint_output",
    "validate_pytest_json",
    "validate_ruff_output",
    "validate_rustfmt_output",
    "validate_tsc_output",
]
