"""artifact-detective: classify, validate and normalize CI artifacts."""

from artifact_detective.config import (
    ArtifactExtractionConfig,
    ArtifactTypeMapping,
    DetectiveConfig,
    ExtractorConfig,
    apply_custom_artifact_type,
    load_config,
)
from artifact_detective.detector import detect, detect_by_content
from artifact_detective.errors import ArtifactDetectiveError, ConfigError, ExtractionError
from artifact_detective.extract import ExtractResult, extract
from artifact_detective.extractors import (
    detect_linter_type,
    extract_linter_output,
    find_linter_output,
)
from artifact_detective.normalizers import (
    can_convert_to_json,
    convert_to_json,
    extract_playwright_json,
    extract_pytest_json,
    is_json,
    normalize_linter_output,
)
from artifact_detective.registry import (
    ARTIFACT_TYPE_REGISTRY,
    ArtifactTypeCapabilities,
    get_capabilities,
    validate,
)
from artifact_detective.types import (
    ArtifactType,
    DetectionResult,
    LinterMatch,
    OriginalFormat,
    PytestReport,
    ValidationResult,
)

__version__ = "0.1.0"

__all__ = [
    "ARTIFACT_TYPE_REGISTRY",
    "ArtifactDetectiveError",
    "ArtifactExtractionConfig",
    "ArtifactType",
    "ArtifactTypeCapabilities",
    "ArtifactTypeMapping",
    "ConfigError",
    "DetectionResult",
    "DetectiveConfig",
    "ExtractResult",
    "ExtractionError",
    "ExtractorConfig",
    "LinterMatch",
    "OriginalFormat",
    "PytestReport",
    "ValidationResult",
    "apply_custom_artifact_type",
    "can_convert_to_json",
    "convert_to_json",
    "detect",
    "detect_by_content",
    "detect_linter_type",
    "extract",
    "extract_linter_output",
    "extract_playwright_json",
    "extract_pytest_json",
    "find_linter_output",
    "get_capabilities",
    "is_json",
    "load_config",
    "normalize_linter_output",
    "validate",
]
