"""Validator for JUnit-style XML reports."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from artifact_detective.types import ValidationResult


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def validate_junit_xml(content: str) -> ValidationResult:
    try:
        root = ET.fromstring(content.lstrip("\ufeff").strip())
    except ET.ParseError as exc:
        return ValidationResult(False, f"Invalid XML: {exc}")

    root_name = _local_name(root.tag)
    if root_name not in ("testsuites", "testsuite"):
        return ValidationResult(False, f"Unexpected root element: <{root_name}>")

    for case in root.iter():
        if _local_name(case.tag) == "testcase" and "name" not in case.attrib:
            return ValidationResult(False, "testcase element missing name attribute")

    return ValidationResult(True)
