"""Nuspec loader: read package manifests into ``Nuspec`` values."""
from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from typing import Dict, List, Tuple

from common.errors import ManifestError
from common.logging_utils import extra_context, is_debug_enabled, Timer
from constants import Constants
from versioning.models import VersionRequirement
from versioning.nuget_range import parse

from .frameworks import extract_framework, extract_frameworks
from .models import FrameworkAssemblyReference, Nuspec, NuspecReferences
from .restrictions import FrameworkRestriction, FrameworkRestrictions, optimize_restrictions
from .xml_access import XmlDocument

logger = logging.getLogger(__name__)

Entry = Tuple[str, VersionRequirement, FrameworkRestrictions]


def _group_restriction(group) -> FrameworkRestrictions:
    """Restriction of a ``group`` element, empty when its framework is unknown."""
    framework = extract_framework(group.get_attribute(Constants.ATTR_TARGET_FRAMEWORK))
    return (FrameworkRestriction.exactly(framework),) if framework is not None else ()


def _official_name(document, source: str) -> str:
    root = document.root
    node = None
    if root.name == Constants.NUSPEC_PACKAGE:
        metadata = root.child(Constants.NUSPEC_METADATA)
        node = metadata.child(Constants.NUSPEC_ID) if metadata is not None else None
    name = node.text.strip() if node is not None else ""
    if not name:
        raise ManifestError(source, f"unable to find package id in {source}")
    return name


def _dependency(node, source: str) -> Entry:
    name = node.get_attribute(Constants.ATTR_ID)
    if name is None:
        raise ManifestError(source, f"unable to find dependency id in {source}")
    version = node.get_attribute(Constants.ATTR_VERSION)
    requirement = parse(version if version is not None else Constants.ANY_VERSION)

    restrictions: FrameworkRestrictions = ()
    parent = node.parent
    if parent is not None and parent.name.lower() == Constants.NUSPEC_GROUP:
        restrictions = _group_restriction(parent)
    return name, requirement, restrictions


def _group_placeholders(document) -> List[Entry]:
    """Placeholder entries for dependency groups that declare no dependency."""
    placeholders: List[Entry] = []
    for dependencies in document.descendants(Constants.NUSPEC_DEPENDENCIES):
        for group in dependencies.children(Constants.NUSPEC_GROUP):
            if group.children(Constants.NUSPEC_DEPENDENCY):
                continue
            restrictions = _group_restriction(group)
            if restrictions:
                placeholders.append(("", VersionRequirement.no_restriction(), restrictions))
    return placeholders


def _assembly_references(node) -> List[FrameworkAssemblyReference]:
    name = node.get_attribute(Constants.ATTR_ASSEMBLY_NAME)
    if name is None:
        return []
    target_frameworks = node.get_attribute(Constants.ATTR_TARGET_FRAMEWORK)
    if not target_frameworks:
        return [FrameworkAssemblyReference(name)]
    return [
        FrameworkAssemblyReference(name, (FrameworkRestriction.exactly(framework),))
        for framework in extract_frameworks(target_frameworks)
    ]


def _merge_assembly_references(references: List[FrameworkAssemblyReference]) -> List[FrameworkAssemblyReference]:
    """One reference per assembly name with the union of the restrictions."""
    grouped: Dict[str, List[FrameworkAssemblyReference]] = {}
    for reference in references:
        grouped.setdefault(reference.assembly_name, []).append(reference)

    merged = []
    for name, members in grouped.items():
        union: List[FrameworkRestriction] = []
        for member in members:
            for restriction in member.framework_restrictions:
                if restriction not in union:
                    union.append(restriction)
        merged.append(FrameworkAssemblyReference(name, tuple(union)))
    return merged


def read_nuspec(document, source: str) -> Nuspec:
    """Build a ``Nuspec`` from a parsed document.

    ``document`` only needs the ``XmlDocument`` surface: ``root`` and
    ``descendants`` on the document; ``name``, ``text``, ``parent``,
    ``get_attribute``, ``child``, ``children`` on elements.

    Raises:
        ManifestError: if the package id or a dependency id is missing.
    """
    official_name = _official_name(document, source)

    entries = [_dependency(node, source) for node in document.descendants(Constants.NUSPEC_DEPENDENCY)]
    dependencies = optimize_restrictions(entries + _group_placeholders(document))

    files = [
        file_name
        for file_name in (node.get_attribute(Constants.ATTR_FILE)
                          for node in document.descendants(Constants.NUSPEC_REFERENCE))
        if file_name is not None
    ]
    references = NuspecReferences.explicit(files) if files else NuspecReferences.all()

    assembly_references: List[FrameworkAssemblyReference] = []
    for node in document.descendants(Constants.NUSPEC_FRAMEWORK_ASSEMBLY):
        assembly_references.extend(_assembly_references(node))

    return Nuspec(
        references=references,
        dependencies=tuple(dependencies),
        official_name=official_name,
        framework_assembly_references=tuple(_merge_assembly_references(assembly_references)),
    )


def parse_nuspec(text: str, source: str = "<string>") -> Nuspec:
    """Load a manifest from XML text; ``source`` names it in errors."""
    try:
        document = XmlDocument.from_string(text)
    except ET.ParseError as e:
        raise ManifestError(source, f"unable to parse XML in {source}: {e}") from e
    return read_nuspec(document, source)


def load_nuspec(path: str) -> Nuspec:
    """Load the manifest at ``path``.

    A missing file is a legitimate state for some package sources and yields
    ``Nuspec.all()``.

    Raises:
        ManifestError: for malformed XML or missing required ids.
        OSError: if the file exists but cannot be read.
    """
    if not os.path.isfile(path):
        if is_debug_enabled(logger):
            logger.debug("Nuspec not found, using all references", extra=extra_context(
                event="decision", component="nuspec", action="load",
                target=path, outcome="missing"
            ))
        return Nuspec.all()

    with Timer() as t:
        try:
            document = XmlDocument.load(path)
        except ET.ParseError as e:
            raise ManifestError(path, f"unable to parse XML in {path}: {e}") from e
        nuspec = read_nuspec(document, path)

    if is_debug_enabled(logger):
        logger.debug("Loaded nuspec", extra=extra_context(
            event="function_exit", component="nuspec", action="load",
            target=path, outcome="success", package=nuspec.official_name,
            count=len(nuspec.dependencies), duration_ms=t.duration_ms()
        ))
    return nuspec
