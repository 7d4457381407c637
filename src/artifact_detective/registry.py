"""
Type capability registry: the single table every other component consults
to decide what an ArtifactType supports.

- supports_auto_detection: the content classifier may return this type.
  False means the type can only be assigned by explicit configuration and
  confirmed through its validator.
- validator: structural checker for the type, or None.

The table is built once at import and exposed read-only.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from artifact_detective import validators as v
from artifact_detective.types import ArtifactType, ValidationResult

Validator = Callable[[str], ValidationResult]


@dataclass(frozen=True)
class ArtifactTypeCapabilities:
    supports_auto_detection: bool
    validator: Validator | None
    short_description: str = ""
    file_extension: str = "txt"
    tool_url: str | None = None

    def to_dict(self) -> dict:
        return {
            "supports_auto_detection": self.supports_auto_detection,
            "has_validator": self.validator is not None,
            "short_description": self.short_description,
            "file_extension": self.file_extension,
            "tool_url": self.tool_url,
        }


def _build_registry() -> Mapping[ArtifactType, ArtifactTypeCapabilities]:
    T = ArtifactType
    C = ArtifactTypeCapabilities
    table = {
        # ── Test reports ──
        T.PLAYWRIGHT_JSON: C(True, v.validate_playwright_json,
                             "Playwright JSON test report", "json", "https://playwright.dev"),
        T.PLAYWRIGHT_HTML: C(True, None,
                             "Playwright HTML test report", "html", "https://playwright.dev"),
        T.JEST_JSON: C(True, v.validate_jest_json,
                       "Jest JSON test results", "json", "https://jestjs.io"),
        T.JEST_HTML: C(True, None,
                       "Jest HTML test report", "html", "https://jestjs.io"),
        T.PYTEST_JSON: C(True, v.validate_pytest_json,
                         "pytest JSON report", "json", "https://docs.pytest.org"),
        T.PYTEST_HTML: C(True, None,
                         "pytest-html test report", "html", "https://pytest-html.readthedocs.io"),
        T.JUNIT_XML: C(True, v.validate_junit_xml,
                       "JUnit XML test report", "xml", None),

        # ── JavaScript / TypeScript linters ──
        T.ESLINT_TXT: C(False, v.validate_eslint_output,
                        "ESLint stylish output", "txt", "https://eslint.org"),
        T.PRETTIER_TXT: C(False, v.validate_prettier_output,
                          "Prettier --check output", "txt", "https://prettier.io"),
        T.TSC_TXT: C(False, v.validate_tsc_output,
                     "TypeScript compiler diagnostics", "txt", "https://www.typescriptlang.org"),

        # ── Python linters ──
        T.RUFF_TXT: C(False, v.validate_ruff_output,
                      "Ruff lint output", "txt", "https://docs.astral.sh/ruff"),
        T.MYPY_TXT: C(False, v.validate_mypy_output,
                      "mypy type-check output", "txt", "https://mypy-lang.org"),
        # The one text format with a signature strong enough to sniff.
        T.FLAKE8_TXT: C(True, v.validate_flake8_output,
                        "flake8 lint output", "txt", "https://flake8.pycqa.org"),
        T.PYLINT_TXT: C(False, v.validate_pylint_output,
                        "pylint output", "txt", "https://pylint.readthedocs.io"),
        T.BLACK_TXT: C(False, v.validate_black_output,
                       "black --check output", "txt", "https://black.readthedocs.io"),
        T.ISORT_TXT: C(False, v.validate_isort_output,
                       "isort --check output", "txt", "https://pycqa.github.io/isort"),

        # ── Rust ──
        T.CARGO_TEST_TXT: C(False, v.validate_cargo_test_output,
                            "cargo test output", "txt", "https://doc.rust-lang.org/cargo"),
        T.CLIPPY_JSON: C(True, v.validate_clippy_json,
                         "clippy JSON message stream", "json", "https://doc.rust-lang.org/clippy"),
        T.CLIPPY_TXT: C(False, v.validate_clippy_text,
                        "clippy text output", "txt", "https://doc.rust-lang.org/clippy"),
        T.RUSTFMT_TXT: C(False, v.validate_rustfmt_output,
                         "rustfmt --check output", "txt", "https://rust-lang.github.io/rustfmt"),

        # ── Fallbacks ──
        T.BINARY: C(True, None, "Binary file", "bin", None),
        T.UNKNOWN: C(False, None, "Unrecognized artifact", "txt", None),
    }
    missing = set(ArtifactType) - set(table)
    if missing:
        raise RuntimeError(f"registry missing entries for: {sorted(t.value for t in missing)}")
    return MappingProxyType(table)


ARTIFACT_TYPE_REGISTRY: Mapping[ArtifactType, ArtifactTypeCapabilities] = _build_registry()


def get_capabilities(artifact_type: ArtifactType | str) -> ArtifactTypeCapabilities | None:
    try:
        return ARTIFACT_TYPE_REGISTRY[ArtifactType(artifact_type)]
    except ValueError:
        return None


def configurable_artifact_types() -> list[ArtifactType]:
    """Types a configuration file may assign (everything but the fallbacks)."""
    return [t for t in ARTIFACT_TYPE_REGISTRY if t not in (ArtifactType.BINARY, ArtifactType.UNKNOWN)]


def validate(artifact_type: ArtifactType | str, content: str) -> ValidationResult:
    """Validate ``content`` against the grammar of ``artifact_type``."""
    name = getattr(artifact_type, "value", artifact_type)
    capabilities = get_capabilities(artifact_type)
    if capabilities is None:
        return ValidationResult(False, f"Unknown artifact type: {name}")
    if capabilities.validator is None:
        return ValidationResult(False, f"No validator available for type: {name}")
    return capabilities.validator(content)
