"""Utility functions for GraphML parsing operations."""

import xml.etree.ElementTree as ET
from typing import Iterator, Optional


class XmlUtils:
    """XML processing utilities that ignore namespace prefixes."""

    @staticmethod
    def get_local_name(tag: str) -> str:
        """Extract local name from qualified tag.

        Args:
            tag: Tag name (possibly namespaced, e.g. '{ns}node')

        Returns:
            Local tag name without namespace
        """
        return tag.split('}')[-1] if '}' in tag else tag

    @staticmethod
    def is_tag(elem: ET.Element, local_name: str) -> bool:
        """Check element local name, skipping comments and processing instructions."""
        return isinstance(elem.tag, str) and XmlUtils.get_local_name(elem.tag) == local_name

    @staticmethod
    def iter_local(root: ET.Element, local_name: str) -> Iterator[ET.Element]:
        """Iterate all descendants (and root) with the given local name in document order."""
        for elem in root.iter():
            if XmlUtils.is_tag(elem, local_name):
                yield elem

    @staticmethod
    def children_local(elem: ET.Element, local_name: str) -> Iterator[ET.Element]:
        """Iterate direct children with the given local name."""
        for child in elem:
            if XmlUtils.is_tag(child, local_name):
                yield child

    @staticmethod
    def find_first(root: ET.Element, local_name: str) -> Optional[ET.Element]:
        """First element with the given local name in document order, or None."""
        return next(XmlUtils.iter_local(root, local_name), None)

    @staticmethod
    def text_content(elem: ET.Element) -> str:
        """Concatenated text of the element and its descendants, unstripped."""
        return "".join(elem.itertext())
