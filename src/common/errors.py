"""Error types raised by the version and manifest parsers."""

from __future__ import annotations


class DepMetaError(Exception):
    """Base class for all DepMeta errors."""


class VersionParseError(DepMetaError, ValueError):
    """Raised when a single version string cannot be parsed."""

    def __init__(self, text: str, reason: str = "not a valid version"):
        self.text = text
        self.reason = reason
        super().__init__(f"unable to parse version '{text}': {reason}")


class VersionRangeParseError(DepMetaError, ValueError):
    """Raised when a NuGet version range cannot be parsed.

    The message always carries the raw range text so the offending manifest
    or declaration entry can be located.
    """

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"unable to parse version range '{text}': {reason}")


class ManifestError(DepMetaError):
    """Raised when a package manifest cannot be loaded."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)
