"""
Log preprocessing: strips CI-specific noise before tool output is sliced
out of a job log.

Each CI provider gets its own preprocessor. Add new providers by
subclassing LogPreprocessor.
"""

import re


class LogPreprocessor:
    """Base preprocessor. Override for provider-specific behavior."""

    _ANSI = re.compile(r"\x1b\[[0-9;]*m")

    def clean(self, raw: str) -> str:
        """Strip noise common to all providers."""
        return self._ANSI.sub("", raw)


class GitHubActionsPreprocessor(LogPreprocessor):
    """Preprocessor for GitHub Actions job logs.

    Job logs fetched through the API prefix every line with an ISO
    timestamp and a single space; anchored patterns like ``^##\\[`` only
    work once it is gone. Only that one space is removed, so indentation
    in tool output (ESLint's ``  3:7  error``) survives.
    """

    _TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}T[\d:.]+Z ?", re.M)
    _COMMAND = re.compile(r"^##\[command\].*\n?", re.M)

    def clean(self, raw: str) -> str:
        text = super().clean(raw)
        text = self._TIMESTAMP.sub("", text)
        text = self._COMMAND.sub("", text)
        return text.replace("\r\n", "\n")


# Registry of preprocessors; extend as you add CI providers
PREPROCESSORS: dict[str, type[LogPreprocessor]] = {
    "github": GitHubActionsPreprocessor,
    "plain": LogPreprocessor,
}


def get_preprocessor(provider: str = "github") -> LogPreprocessor:
    cls = PREPROCESSORS.get(provider)
    if not cls:
        raise ValueError(
            f"Unknown CI provider '{provider}'. "
            f"Available: {', '.join(PREPROCESSORS)}"
        )
    return cls()
