"""Package manifest support.

This package provides nuspec manifest support:
- frameworks.py: target framework identifiers and moniker detection
- restrictions.py: framework restrictions and restriction optimisation
- xml_access.py: narrow accessors over the parsed XML tree
- models.py: Nuspec, references and dependency values
- nuspec.py: the loader
"""

from .frameworks import FrameworkIdentifier, FrameworkKind, extract_framework, extract_frameworks
from .restrictions import (
    FrameworkRestriction,
    RestrictionKind,
    optimize_restrictions,
    simplify_restrictions,
)
from .models import (
    FrameworkAssemblyReference,
    Nuspec,
    NuspecDependency,
    NuspecReferences,
    ReferencesKind,
)
from .nuspec import load_nuspec, parse_nuspec, read_nuspec

__all__ = [
    "FrameworkIdentifier",
    "FrameworkKind",
    "extract_framework",
    "extract_frameworks",
    "FrameworkRestriction",
    "RestrictionKind",
    "optimize_restrictions",
    "simplify_restrictions",
    "FrameworkAssemblyReference",
    "Nuspec",
    "NuspecDependency",
    "NuspecReferences",
    "ReferencesKind",
    "load_nuspec",
    "parse_nuspec",
    "read_nuspec",
]
