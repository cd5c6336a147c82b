"""NuGet version range syntax.

Parses range text such as ``1.0``, ``[1.0]``, ``(1.0,)``, ``(,2.0]`` or
``[1.0,2.0)`` into a ``VersionRequirement`` and formats ranges back.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from common.errors import VersionParseError, VersionRangeParseError
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

from .models import RangeKind, VersionRange, VersionRangeBound, VersionRequirement, PreReleaseStatus
from .semver import SemVer

logger = logging.getLogger(__name__)

_BRACKETS = "[]()"
_LOWER_BOUNDS = {"[": VersionRangeBound.INCLUDING, "(": VersionRangeBound.EXCLUDING}
_UPPER_BOUNDS = {"]": VersionRangeBound.INCLUDING, ")": VersionRangeBound.EXCLUDING}


def is_unconstrained(text: Optional[str]) -> bool:
    """True for the texts meaning "no constraint": None, blank or ``null``."""
    return text is None or text.strip() in Constants.UNCONSTRAINED_VERSION_TOKENS


def _parse_version(text: str, segment: str) -> SemVer:
    try:
        return SemVer.parse(segment)
    except VersionParseError as e:
        raise VersionRangeParseError(text, f"invalid version '{segment.strip()}'") from e


def _parse_bound(text: str, char: str, bounds) -> VersionRangeBound:
    bound = bounds.get(char)
    if bound is None:
        raise VersionRangeParseError(text, f"invalid bound character '{char}'")
    return bound


def _parse_interval(text: str) -> VersionRange:
    from_bound = _parse_bound(text, text[0], _LOWER_BOUNDS)
    to_bound = _parse_bound(text, text[-1], _UPPER_BOUNDS)

    inner = "".join(char for char in text if char not in _BRACKETS)
    versions: List[SemVer] = [
        _parse_version(text, segment)
        for segment in inner.split(",")
        if segment.strip()
    ]

    if len(versions) == 2:
        low, high = versions
        if low > high:
            raise VersionRangeParseError(
                text, f"lower bound {low} is greater than upper bound {high}")
        return VersionRange.between(from_bound, low, high, to_bound)

    if len(versions) == 1:
        version = versions[0]
        upper_only = text[1] == ","
        if upper_only:
            if to_bound == VersionRangeBound.INCLUDING:
                return VersionRange.maximum(version)
            if from_bound == VersionRangeBound.EXCLUDING:
                return VersionRange.less_than(version)
            raise VersionRangeParseError(
                text, "an inclusive lower side cannot be combined with an exclusive upper bound")
        if from_bound != to_bound:
            raise VersionRangeParseError(
                text, "a lower-bound-only range needs matching brackets, '[v,]' or '(v,)'")
        if from_bound == VersionRangeBound.EXCLUDING:
            return VersionRange.greater_than(version)
        return VersionRange.minimum(version)

    raise VersionRangeParseError(text, f"expected one or two versions, found {len(versions)}")


def parse_range(text: str) -> VersionRange:
    """Parse non-empty NuGet range text into a ``VersionRange``.

    A one-version interval is upper-bound-only when the comma directly follows
    the opening bracket, so ``"[ ,1.0]"`` is the lower-bound-only ``Minimum(1.0)``.

    Raises:
        VersionRangeParseError: for a bad bracket, version or bound combination.
    """
    text = text.strip()
    if "," not in text:
        if text.startswith("["):
            return VersionRange.specific(_parse_version(text, text.strip("[]")))
        return VersionRange.minimum(_parse_version(text, text))
    return _parse_interval(text)


def parse(text: Optional[str]) -> VersionRequirement:
    """Parse NuGet range text into a ``VersionRequirement``.

    Unconstrained text yields ``VersionRequirement.all_releases()``. Any other
    text gets the ``No`` pre-release policy; refining the policy is left to
    the caller.
    """
    if is_unconstrained(text):
        return VersionRequirement.all_releases()
    requirement = VersionRequirement(parse_range(text), PreReleaseStatus.no())
    if is_debug_enabled(logger):
        logger.debug("Parsed version range", extra=extra_context(
            event="parse", component="nuget_range", action="parse",
            target=text, outcome=requirement.range.kind.value
        ))
    return requirement


def format_range(version_range: VersionRange) -> str:
    """Format a ``VersionRange`` in NuGet syntax.

    ``Specific`` and ``OverrideAll`` both format as ``[v]``: the override tag
    only exists in memory and does not survive a round trip through text.
    """
    kind = version_range.kind
    if kind == RangeKind.MINIMUM:
        text = str(version_range.low)
        return "" if text == Constants.ANY_VERSION else text
    if kind == RangeKind.GREATER_THAN:
        return f"({version_range.low},)"
    if kind == RangeKind.MAXIMUM:
        return f"(,{version_range.high}]"
    if kind == RangeKind.LESS_THAN:
        return f"(,{version_range.high})"
    if kind in (RangeKind.SPECIFIC, RangeKind.OVERRIDE_ALL):
        return f"[{version_range.low}]"
    if kind == RangeKind.RANGE:
        opening = "[" if version_range.from_bound == VersionRangeBound.INCLUDING else "("
        closing = "]" if version_range.to_bound == VersionRangeBound.INCLUDING else ")"
        return f"{opening}{version_range.low},{version_range.high}{closing}"
    raise ValueError(f"unknown range kind {kind!r}")


def format_requirement(requirement: VersionRequirement) -> str:
    """Format the range of a requirement in NuGet syntax."""
    return format_range(requirement.range)
