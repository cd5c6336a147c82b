"""Narrow, namespace-agnostic accessors over an ElementTree document.

The nuspec loader only needs attribute lookup, child/descendant lookup by
name and the parent of an element. Keeping the loader on this surface means
it can run over any tree offering the same methods.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Dict, Iterator, List, Optional


def _local_name(tag: str) -> str:
    return tag.split("}", 1)[1] if "}" in tag else tag


class XmlElement:
    """Read-only view of one element of an ``XmlDocument``."""

    __slots__ = ("_element", "_document")

    def __init__(self, element: ET.Element, document: "XmlDocument"):
        self._element = element
        self._document = document

    @property
    def name(self) -> str:
        return self._element.tag

    @property
    def text(self) -> str:
        return "".join(self._element.itertext())

    @property
    def parent(self) -> Optional["XmlElement"]:
        return self._document.parent_of(self._element)

    def get_attribute(self, name: str) -> Optional[str]:
        return self._element.get(name)

    def children(self, name: Optional[str] = None) -> List["XmlElement"]:
        return [
            XmlElement(child, self._document)
            for child in self._element
            if name is None or child.tag == name
        ]

    def child(self, name: str) -> Optional["XmlElement"]:
        found = self.children(name)
        return found[0] if found else None

    def descendants(self, name: str) -> Iterator["XmlElement"]:
        for element in self._element.iter(name):
            if element is not self._element:
                yield XmlElement(element, self._document)

    def __eq__(self, other) -> bool:
        return isinstance(other, XmlElement) and other._element is self._element

    def __hash__(self) -> int:
        return id(self._element)

    def __repr__(self) -> str:
        return f"XmlElement({self.name!r})"


class XmlDocument:
    """A parsed XML document with namespaces removed from element names."""

    def __init__(self, root: ET.Element):
        # Remove namespace for easier parsing
        for elem in root.iter():
            if isinstance(elem.tag, str) and "}" in elem.tag:
                elem.tag = _local_name(elem.tag)
        self._root = root
        self._parents: Dict[int, ET.Element] = {
            id(child): parent for parent in root.iter() for child in parent
        }

    @classmethod
    def load(cls, path: str) -> "XmlDocument":
        """Parse a file. Raises ``ET.ParseError`` for malformed XML."""
        return cls(ET.parse(path).getroot())

    @classmethod
    def from_string(cls, text: str) -> "XmlDocument":
        return cls(ET.fromstring(text))

    @property
    def root(self) -> XmlElement:
        return XmlElement(self._root, self)

    def parent_of(self, element: ET.Element) -> Optional[XmlElement]:
        parent = self._parents.get(id(element))
        return XmlElement(parent, self) if parent is not None else None

    def descendants(self, name: str) -> Iterator[XmlElement]:
        """Every element called ``name``, the root included, in document order."""
        for element in self._root.iter(name):
            yield XmlElement(element, self)
