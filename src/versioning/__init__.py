"""Version values, version constraints and the NuGet range syntax."""

from .semver import SemVer
from .models import (
    PreReleaseKind,
    PreReleaseStatus,
    RangeKind,
    VersionRange,
    VersionRangeBound,
    VersionRequirement,
)
from .nuget_range import format_range, format_requirement, parse, parse_range

__all__ = [
    "SemVer",
    "PreReleaseKind",
    "PreReleaseStatus",
    "RangeKind",
    "VersionRange",
    "VersionRangeBound",
    "VersionRequirement",
    "format_range",
    "format_requirement",
    "parse",
    "parse_range",
]
