"""Tests for CI log preprocessing."""

from __future__ import annotations

import pytest

from artifact_detective.preprocessor import (
    PREPROCESSORS,
    GitHubActionsPreprocessor,
    LogPreprocessor,
    get_preprocessor,
)


class TestGitHubActionsPreprocessor:
    def test_strips_timestamps_keeps_indentation(self):
        raw = "2024-05-01T12:00:00.1234567Z /src/a.js\n2024-05-01T12:00:00.2Z   1:7  error  x  rule\n"
        assert GitHubActionsPreprocessor().clean(raw) == "/src/a.js\n  1:7  error  x  rule\n"

    def test_drops_command_lines(self):
        raw = "##[command]/usr/bin/npm run lint\noutput\n"
        assert GitHubActionsPreprocessor().clean(raw) == "output\n"

    def test_keeps_group_markers(self):
        raw = "2024-05-01T12:00:00Z ##[group]Run ruff\n2024-05-01T12:00:01Z ##[endgroup]"
        assert GitHubActionsPreprocessor().clean(raw) == "##[group]Run ruff\n##[endgroup]"

    def test_ansi_and_crlf(self):
        raw = "\x1b[1m\x1b[31merror\x1b[0m: bad\r\nnext\r\n"
        assert GitHubActionsPreprocessor().clean(raw) == "error: bad\nnext\n"


class TestRegistry:
    def test_plain_only_strips_ansi(self):
        raw = "2024-05-01T12:00:00Z \x1b[32mok\x1b[0m"
        assert get_preprocessor("plain").clean(raw) == "2024-05-01T12:00:00Z ok"

    def test_default_is_github(self):
        assert isinstance(get_preprocessor(), GitHubActionsPreprocessor)

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Available: github, plain"):
            get_preprocessor("circleci")

    def test_all_subclass_base(self):
        assert all(issubclass(cls, LogPreprocessor) for cls in PREPROCESSORS.values())
