"""Data models for package manifests (nuspec files)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Tuple

from versioning.models import VersionRequirement
from versioning.nuget_range import format_requirement

from .restrictions import FrameworkRestrictions


class ReferencesKind(Enum):
    """Whether a manifest lists the files to reference."""
    ALL = "all"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class NuspecReferences:
    """``All`` files of the package, or an ``Explicit`` ordered list of file names."""

    kind: ReferencesKind
    files: Tuple[str, ...] = ()

    @classmethod
    def all(cls) -> "NuspecReferences":
        return cls(ReferencesKind.ALL)

    @classmethod
    def explicit(cls, files) -> "NuspecReferences":
        return cls(ReferencesKind.EXPLICIT, tuple(files))

    @property
    def is_all(self) -> bool:
        return self.kind == ReferencesKind.ALL

    def to_dict(self) -> Dict[str, Any]:
        if self.is_all:
            return {"kind": self.kind.value}
        return {"kind": self.kind.value, "files": list(self.files)}


@dataclass(frozen=True)
class FrameworkAssemblyReference:
    """A framework assembly the package needs, with the frameworks it applies to."""

    assembly_name: str
    framework_restrictions: FrameworkRestrictions = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "assembly_name": self.assembly_name,
            "framework_restrictions": [str(r) for r in self.framework_restrictions],
        }


@dataclass(frozen=True)
class NuspecDependency:
    """A declared dependency: package name, version requirement, restrictions.

    Unpacks like the ``(name, requirement, restrictions)`` triple.
    """

    name: str
    requirement: VersionRequirement
    restrictions: FrameworkRestrictions = ()

    def __iter__(self) -> Iterator:
        return iter((self.name, self.requirement, self.restrictions))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": format_requirement(self.requirement),
            "prerelease": str(self.requirement.prerelease),
            "framework_restrictions": [str(r) for r in self.restrictions],
        }


@dataclass(frozen=True)
class Nuspec:
    """A loaded package manifest."""

    references: NuspecReferences = field(default_factory=NuspecReferences.all)
    dependencies: Tuple[NuspecDependency, ...] = ()
    official_name: str = ""
    framework_assembly_references: Tuple[FrameworkAssemblyReference, ...] = ()

    @classmethod
    def all(cls) -> "Nuspec":
        """All references, no dependencies, no name: the missing-manifest value."""
        return cls()

    @classmethod
    def explicit(cls, files) -> "Nuspec":
        return cls(references=NuspecReferences.explicit(files))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "official_name": self.official_name,
            "references": self.references.to_dict(),
            "dependencies": [dependency.to_dict() for dependency in self.dependencies],
            "framework_assembly_references": [
                reference.to_dict() for reference in self.framework_assembly_references
            ],
        }
