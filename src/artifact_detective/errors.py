"""Exceptions raised by artifact-detective.

Classification and validation never raise; these cover the cases where a
caller asked for something specific that could not be done.
"""


class ArtifactDetectiveError(Exception):
    """Base class for all artifact-detective errors."""


class ExtractionError(ArtifactDetectiveError):
    """A normalizer could not read the file it was pointed at."""


class ConfigError(ArtifactDetectiveError):
    """The configuration file is unreadable or fails schema validation."""
