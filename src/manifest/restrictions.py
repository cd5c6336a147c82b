"""Framework restrictions and restriction-set optimisation.

A dependency or assembly reference carries a collection of restrictions; an
empty collection means it applies to every framework.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from common.logging_utils import extra_context, is_debug_enabled

from .frameworks import FrameworkIdentifier

logger = logging.getLogger(__name__)


class RestrictionKind(Enum):
    """How a restriction relates to its framework."""
    EXACTLY = "exactly"
    AT_LEAST = "at_least"


@dataclass(frozen=True)
class FrameworkRestriction:
    """Ties a dependency or reference to a target framework."""

    kind: RestrictionKind
    framework: FrameworkIdentifier

    @classmethod
    def exactly(cls, framework: FrameworkIdentifier) -> "FrameworkRestriction":
        return cls(RestrictionKind.EXACTLY, framework)

    @classmethod
    def at_least(cls, framework: FrameworkIdentifier) -> "FrameworkRestriction":
        return cls(RestrictionKind.AT_LEAST, framework)

    def matches(self, framework: FrameworkIdentifier) -> bool:
        """True if a project targeting ``framework`` satisfies this restriction."""
        if self.kind == RestrictionKind.EXACTLY:
            return framework == self.framework
        return framework.kind == self.framework.kind and framework.sort_key() >= self.framework.sort_key()

    def sort_key(self):
        return (self.framework.sort_key(), 0 if self.kind == RestrictionKind.EXACTLY else 1)

    def __str__(self) -> str:
        if self.kind == RestrictionKind.AT_LEAST:
            return f">= {self.framework}"
        return str(self.framework)


FrameworkRestrictions = Tuple[FrameworkRestriction, ...]


def _unique(restrictions: Iterable[FrameworkRestriction]) -> List[FrameworkRestriction]:
    seen = []
    for restriction in restrictions:
        if restriction not in seen:
            seen.append(restriction)
    return seen


def simplify_restrictions(restrictions: Iterable[FrameworkRestriction],
                          declared: Optional[Sequence[FrameworkIdentifier]] = None) -> FrameworkRestrictions:
    """Merge a restriction collection into its smallest equivalent form.

    Duplicates go away, .NET restrictions covered by an ``AtLeast`` are
    dropped, and the lowest .NET ``AtLeast`` swallows ``Exactly`` restrictions
    for the directly preceding frameworks in ``declared`` (the .NET frameworks
    the manifest declares, defaulting to the ones in ``restrictions``).
    """
    items = _unique(restrictions)
    floors = [r.framework for r in items if r.kind == RestrictionKind.AT_LEAST and r.framework.is_dotnet]
    if floors:
        floor = min(floors)
        dotnet_exact = {r.framework for r in items if r.kind == RestrictionKind.EXACTLY and r.framework.is_dotnet}
        if declared is None:
            declared = list(dotnet_exact) + floors
        ladder = sorted({fw for fw in declared if fw.is_dotnet} | {floor})
        position = ladder.index(floor)
        while position > 0 and ladder[position - 1] in dotnet_exact:
            position -= 1
        floor = ladder[position]
        items = [
            r for r in items
            if not (r.framework.is_dotnet and floor.sort_key() <= r.framework.sort_key())
        ]
        items.append(FrameworkRestriction.at_least(floor))
    return tuple(sorted(items, key=FrameworkRestriction.sort_key))


def optimize_restrictions(entries: Iterable[Sequence]) -> List["NuspecDependency"]:
    """Merge the restrictions of dependency entries that share a name and requirement.

    Entries are ``(name, requirement, restrictions)`` triples. Entries with an
    empty name are placeholders for framework groups without dependencies:
    they take part in working out which .NET frameworks the manifest
    declares, then are dropped. When more than one .NET framework is
    declared, a dependency of the highest one is promoted to ``AtLeast``.
    """
    from .models import NuspecDependency  # pylint: disable=import-outside-toplevel

    entries = [(name, requirement, tuple(restrictions)) for name, requirement, restrictions in entries]

    declared = sorted({
        r.framework for _, _, restrictions in entries for r in restrictions
        if r.kind == RestrictionKind.EXACTLY and r.framework.is_dotnet
    })
    highest = declared[-1] if len(declared) > 1 else None

    grouped: Dict[Tuple, List[FrameworkRestrictions]] = {}
    for name, requirement, restrictions in entries:
        grouped.setdefault((name, requirement), []).append(restrictions)

    optimized = []
    for (name, requirement), restriction_sets in grouped.items():
        if name == "":
            continue
        if any(not restrictions for restrictions in restriction_sets):
            merged: FrameworkRestrictions = ()
        else:
            plain = [r for restrictions in restriction_sets for r in restrictions]
            promoted = [
                FrameworkRestriction.at_least(r.framework)
                if highest is not None and r.kind == RestrictionKind.EXACTLY and r.framework == highest
                else r
                for r in plain
            ]
            merged = simplify_restrictions(promoted, declared)
        optimized.append(NuspecDependency(name, requirement, merged))

    if is_debug_enabled(logger):
        logger.debug("Optimized dependency restrictions", extra=extra_context(
            event="function_exit", component="restrictions", action="optimize_restrictions",
            count=len(optimized), declared=[str(fw) for fw in declared]
        ))
    return optimized
