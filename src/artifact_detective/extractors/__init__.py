from artifact_detective.extractors.linters import (
    SLICE_RULES,
    detect_linter_type,
    extract_linter_output,
    find_linter_output,
    linter_family,
)
from artifact_detective.extractors.patterns import LINTER_PATTERNS
from artifact_detective.extractors.slicer import LogSliceRule, slice_between, slice_log

__all__ = [
    "LINTER_PATTERNS",
    "SLICE_RULES",
    "LogSliceRule",
    "detect_linter_type",
    "extract_linter_output",
    "find_linter_output",
    "linter_family",
    "slice_between",
    "slice_log",
]
