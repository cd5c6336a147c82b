"""Data models for version constraints."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .semver import SemVer


class VersionRangeBound(Enum):
    """Inclusiveness of one side of a ``Range``."""
    INCLUDING = "including"
    EXCLUDING = "excluding"


class RangeKind(Enum):
    """Tag of the closed set of range shapes."""
    MINIMUM = "minimum"
    GREATER_THAN = "greater_than"
    MAXIMUM = "maximum"
    LESS_THAN = "less_than"
    SPECIFIC = "specific"
    OVERRIDE_ALL = "override_all"
    RANGE = "range"


_SINGLE_LOW = (RangeKind.MINIMUM, RangeKind.GREATER_THAN, RangeKind.SPECIFIC, RangeKind.OVERRIDE_ALL)
_SINGLE_HIGH = (RangeKind.MAXIMUM, RangeKind.LESS_THAN)

# (low, low inclusive, high, high inclusive); None means unbounded.
Interval = Tuple[Optional[SemVer], bool, Optional[SemVer], bool]
_EMPTY: Interval = (None, False, None, False)
_UNBOUNDED: Interval = (None, True, None, True)


@dataclass(frozen=True)
class VersionRange:
    """Set of acceptable versions.

    Single-bound kinds keep their version in ``low`` (lower-bound kinds and
    exact pins) or ``high`` (upper-bound kinds). ``RANGE`` uses both plus the
    two bound flags. Build values through the classmethod constructors.
    """

    kind: RangeKind
    low: Optional[SemVer] = None
    high: Optional[SemVer] = None
    from_bound: VersionRangeBound = VersionRangeBound.INCLUDING
    to_bound: VersionRangeBound = VersionRangeBound.INCLUDING

    def __post_init__(self):
        if self.kind == RangeKind.RANGE:
            if self.low is None or self.high is None:
                raise ValueError("a range needs both a lower and an upper version")
            if self.low > self.high:
                raise ValueError(f"range lower bound {self.low} is greater than upper bound {self.high}")
        elif self.kind in _SINGLE_LOW:
            if self.low is None or self.high is not None:
                raise ValueError(f"{self.kind.value} takes exactly one lower version")
        elif self.kind in _SINGLE_HIGH:
            if self.high is None or self.low is not None:
                raise ValueError(f"{self.kind.value} takes exactly one upper version")

    @classmethod
    def minimum(cls, version: SemVer) -> "VersionRange":
        return cls(RangeKind.MINIMUM, low=version)

    @classmethod
    def greater_than(cls, version: SemVer) -> "VersionRange":
        return cls(RangeKind.GREATER_THAN, low=version)

    @classmethod
    def maximum(cls, version: SemVer) -> "VersionRange":
        return cls(RangeKind.MAXIMUM, high=version)

    @classmethod
    def less_than(cls, version: SemVer) -> "VersionRange":
        return cls(RangeKind.LESS_THAN, high=version)

    @classmethod
    def specific(cls, version: SemVer) -> "VersionRange":
        return cls(RangeKind.SPECIFIC, low=version)

    @classmethod
    def override_all(cls, version: SemVer) -> "VersionRange":
        return cls(RangeKind.OVERRIDE_ALL, low=version)

    @classmethod
    def between(cls, from_bound: VersionRangeBound, low: SemVer, high: SemVer,
                to_bound: VersionRangeBound) -> "VersionRange":
        return cls(RangeKind.RANGE, low=low, high=high, from_bound=from_bound, to_bound=to_bound)

    @property
    def version(self) -> SemVer:
        """The single bound of a non-``RANGE`` kind."""
        if self.kind == RangeKind.RANGE:
            raise AttributeError("a range has two versions; use low and high")
        return self.low if self.low is not None else self.high

    @property
    def is_global(self) -> bool:
        """True for ``Minimum(0)``, the unrestricted set."""
        return self.kind == RangeKind.MINIMUM and self.low.is_zero

    def interval(self) -> Interval:
        """Canonical interval form used for set comparisons."""
        kind = self.kind
        if kind == RangeKind.MINIMUM:
            if self.low.is_zero:
                return _UNBOUNDED
            return (self.low, True, None, True)
        if kind == RangeKind.GREATER_THAN:
            return (self.low, False, None, True)
        if kind == RangeKind.MAXIMUM:
            return (None, True, self.high, True)
        if kind == RangeKind.LESS_THAN:
            return (None, True, self.high, False)
        if kind in (RangeKind.SPECIFIC, RangeKind.OVERRIDE_ALL):
            return (self.low, True, self.low, True)
        if kind == RangeKind.RANGE:
            low_inc = self.from_bound == VersionRangeBound.INCLUDING
            high_inc = self.to_bound == VersionRangeBound.INCLUDING
            if self.low == self.high and not (low_inc and high_inc):
                return _EMPTY
            return (self.low, low_inc, self.high, high_inc)
        raise ValueError(f"unknown range kind {kind!r}")

    def is_equivalent(self, other: "VersionRange") -> bool:
        """True when both ranges accept exactly the same versions."""
        return self.interval() == other.interval()

    def is_in_range(self, version: SemVer) -> bool:
        """Check the version against the bounds only (no pre-release policy)."""
        low, low_inc, high, high_inc = self.interval()
        if (low, low_inc, high, high_inc) == _EMPTY:
            return False
        if low is not None:
            if version < low or (version == low and not low_inc):
                return False
        if high is not None:
            if version > high or (version == high and not high_inc):
                return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind.value}
        if self.low is not None:
            data["low"] = str(self.low)
        if self.high is not None:
            data["high"] = str(self.high)
        if self.kind == RangeKind.RANGE:
            data["from_bound"] = self.from_bound.value
            data["to_bound"] = self.to_bound.value
        return data


class PreReleaseKind(Enum):
    """Pre-release inclusion policies."""
    NO = "no"
    ALL = "all"
    CONCRETE = "concrete"


@dataclass(frozen=True)
class PreReleaseStatus:
    """Which pre-release versions a requirement may select."""

    kind: PreReleaseKind
    names: Tuple[str, ...] = field(default=())

    @classmethod
    def no(cls) -> "PreReleaseStatus":
        return cls(PreReleaseKind.NO)

    @classmethod
    def all(cls) -> "PreReleaseStatus":
        return cls(PreReleaseKind.ALL)

    @classmethod
    def concrete(cls, names) -> "PreReleaseStatus":
        return cls(PreReleaseKind.CONCRETE, tuple(name.lower() for name in names))

    def allows(self, version: SemVer) -> bool:
        if not version.is_prerelease:
            return True
        if self.kind == PreReleaseKind.ALL:
            return True
        if self.kind == PreReleaseKind.CONCRETE:
            return version.prerelease_name in self.names
        return False

    def __str__(self) -> str:
        if self.kind == PreReleaseKind.CONCRETE:
            return f"concrete({', '.join(self.names)})"
        return self.kind.value


@dataclass(frozen=True)
class VersionRequirement:
    """A version range combined with a pre-release inclusion policy."""

    range: VersionRange
    prerelease: PreReleaseStatus = field(default_factory=PreReleaseStatus.no)

    @classmethod
    def all_releases(cls) -> "VersionRequirement":
        """The "no constraint" sentinel: any version, pre-releases included."""
        return _ALL_RELEASES

    @classmethod
    def no_restriction(cls) -> "VersionRequirement":
        """Any version, pre-releases excluded."""
        return _NO_RESTRICTION

    def is_in_range(self, version: SemVer, ignore_prerelease: bool = False) -> bool:
        """Return True if ``version`` satisfies this requirement.

        A pre-release version that the policy rejects is still accepted when
        it is one of the range bounds, e.g. ``1.0-beta`` for ``[1.0-beta]`` or
        ``1.0-beta``.
        """
        if not self.range.is_in_range(version):
            return False
        if ignore_prerelease or not version.is_prerelease:
            return True
        if self.prerelease.allows(version):
            return True
        return version in (self.range.low, self.range.high)

    def to_dict(self) -> Dict[str, Any]:
        return {"range": self.range.to_dict(), "prerelease": str(self.prerelease)}


_ALL_RELEASES = VersionRequirement(VersionRange.minimum(SemVer.parse("0")), PreReleaseStatus.all())
_NO_RESTRICTION = VersionRequirement(VersionRange.minimum(SemVer.parse("0")), PreReleaseStatus.no())
