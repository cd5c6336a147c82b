"""NuGet flavoured semantic versions.

NuGet versions are looser than semver 2.0: one to four numeric parts
(``1``, ``1.0``, ``1.0.0``, ``1.0.0.0``) followed by optional pre-release and
build metadata. Ordering of the pre-release part follows semver 2.0 and is
delegated to ``semantic_version``.
"""

from __future__ import annotations

import re
from functools import total_ordering
from typing import Optional, Tuple

import semantic_version

from common.errors import VersionParseError

_VERSION_RE = re.compile(
    r"^[vV]?(?P<numbers>\d+(?:\.\d+){0,3})"
    r"(?:-(?P<prerelease>[0-9A-Za-z.\-]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z.\-]+))?$"
)
_PRERELEASE_NAME_RE = re.compile(r"^[A-Za-z]+")


@total_ordering
class SemVer:
    """Immutable, totally ordered version value.

    ``str()`` returns the text the version was parsed from, so ``"0"`` stays
    ``"0"`` and formatting a range reproduces what the manifest declared.
    Build metadata is kept for display but ignored for ordering and equality.
    """

    __slots__ = ("major", "minor", "patch", "revision", "prerelease", "build",
                 "_original", "_key")

    def __init__(self, major: int, minor: int = 0, patch: int = 0, revision: int = 0,
                 prerelease: Optional[str] = None, build: Optional[str] = None,
                 original: Optional[str] = None):
        pre_parts: Tuple[str, ...] = tuple(prerelease.split(".")) if prerelease else ()
        try:
            release = semantic_version.Version(major=major, minor=minor, patch=patch,
                                               prerelease=(), build=())
            precedence = semantic_version.Version(major=major, minor=minor, patch=patch,
                                                  prerelease=pre_parts, build=())
        except ValueError as e:
            raise VersionParseError(original or f"{major}.{minor}.{patch}", str(e)) from e

        object.__setattr__(self, "major", major)
        object.__setattr__(self, "minor", minor)
        object.__setattr__(self, "patch", patch)
        object.__setattr__(self, "revision", revision)
        object.__setattr__(self, "prerelease", prerelease or None)
        object.__setattr__(self, "build", build or None)
        object.__setattr__(self, "_original", original)
        object.__setattr__(self, "_key", (release, revision, precedence))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def parse(cls, text: str) -> "SemVer":
        """Parse NuGet version text.

        Raises:
            VersionParseError: if the text is not a version.
        """
        if text is None:
            raise VersionParseError("None", "no version given")
        stripped = str(text).strip()
        match = _VERSION_RE.match(stripped)
        if not match:
            raise VersionParseError(stripped)
        numbers = [int(part) for part in match.group("numbers").split(".")]
        numbers += [0] * (4 - len(numbers))
        return cls(numbers[0], numbers[1], numbers[2], numbers[3],
                   prerelease=match.group("prerelease"),
                   build=match.group("build"),
                   original=stripped)

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def prerelease_name(self) -> Optional[str]:
        """Alphabetic head of the pre-release tag, e.g. ``beta`` for ``beta2``."""
        if not self.prerelease:
            return None
        match = _PRERELEASE_NAME_RE.match(self.prerelease.split(".")[0])
        return match.group(0).lower() if match else None

    @property
    def is_zero(self) -> bool:
        """True for the "any version" marker ``0`` (and ``0.0.0`` etc.)."""
        return (self.major, self.minor, self.patch, self.revision) == (0, 0, 0, 0) \
            and not self.prerelease

    def normalize(self) -> str:
        """Canonical dotted form; the revision is only shown when non-zero."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision:
            text += f".{self.revision}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        return text

    def __str__(self) -> str:
        return self._original if self._original is not None else self.normalize()

    def __repr__(self) -> str:
        return f"SemVer('{self}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key < other._key

    def __hash__(self) -> int:
        return hash(self._key)
