"""Specialized extractors for the GraphML element types.

Each extractor handles one element family (key, data, node, edge) so the
parser itself only sequences them.
"""

import xml.etree.ElementTree as ET
from typing import Dict, Iterator, List, Optional

from .constants import (
    DATA_TAG,
    DIRECTED_ATTRIBUTE,
    DIRECTED_EDGE_DEFAULT,
    EDGE_DEFAULT_ATTRIBUTE,
    EDGE_TAG,
    GRAPH_TAG,
    ID_ATTRIBUTE,
    KEY_ATTRIBUTE,
    KEY_NAME_ATTRIBUTES,
    KEY_TAG,
    NODE_TAG,
    SOURCE_ATTRIBUTE,
    TARGET_ATTRIBUTE,
    TRUE_VALUE,
)
from .models import AttributeKeyTable, EdgeRecord, NodeRecord
from .utils import XmlUtils


class KeyExtractor:
    """Builds the attribute-key table from key declarations."""

    @staticmethod
    def extract_keys(root: ET.Element) -> AttributeKeyTable:
        """Scan every key element once.

        Keys without an id are ignored; a later declaration of the same id
        replaces the earlier one. A document without keys yields an empty
        table, which is valid.
        """
        entries: Dict[str, str] = {}
        for key in XmlUtils.iter_local(root, KEY_TAG):
            key_id = key.get(ID_ATTRIBUTE)
            if key_id is None:
                continue
            entries[key_id] = KeyExtractor._display_name(key) or key_id
        return AttributeKeyTable(entries)

    @staticmethod
    def _display_name(key: ET.Element) -> Optional[str]:
        for attr in KEY_NAME_ATTRIBUTES:
            name = key.get(attr)
            if name:
                return name
        return None


class DataExtractor:
    """Collects direct child data elements into an ordered mapping."""

    @staticmethod
    def extract_attributes(elem: ET.Element, keys: AttributeKeyTable) -> Dict[str, str]:
        # Last write wins for data elements resolving to the same name
        attributes: Dict[str, str] = {}
        for data in XmlUtils.children_local(elem, DATA_TAG):
            name = keys.resolve(data.get(KEY_ATTRIBUTE, ""))
            attributes[name] = XmlUtils.text_content(data)
        return attributes

    @staticmethod
    def count_data_elements(elem: ET.Element) -> int:
        return sum(1 for _ in XmlUtils.children_local(elem, DATA_TAG))


class GraphExtractor:
    """Reads the top-level graph element."""

    @staticmethod
    def find_graph(root: ET.Element) -> Optional[ET.Element]:
        return XmlUtils.find_first(root, GRAPH_TAG)

    @staticmethod
    def extract_default_directed(graph: Optional[ET.Element]) -> bool:
        """Document-level directedness; absent means undirected."""
        if graph is None:
            return False
        return graph.get(EDGE_DEFAULT_ATTRIBUTE, "undirected") == DIRECTED_EDGE_DEFAULT

    @staticmethod
    def iter_elements(root: ET.Element, graph: Optional[ET.Element],
                      local_name: str, nested: bool) -> Iterator[ET.Element]:
        """Node or edge elements in document order.

        With nested=True every matching element in the document is returned,
        otherwise only direct children of the top-level graph element.
        """
        if nested or graph is None:
            return XmlUtils.iter_local(root, local_name)
        return XmlUtils.children_local(graph, local_name)


class NodeExtractor:
    """Extracts node records."""

    @staticmethod
    def extract_nodes(elements: Iterator[ET.Element], keys: AttributeKeyTable) -> List[NodeRecord]:
        return [NodeExtractor.extract_node(elem, keys) for elem in elements]

    @staticmethod
    def extract_node(elem: ET.Element, keys: AttributeKeyTable) -> NodeRecord:
        return NodeRecord(
            id=elem.get(ID_ATTRIBUTE, ""),
            attributes=DataExtractor.extract_attributes(elem, keys),
        )


class EdgeExtractor:
    """Extracts edge records with per-edge directedness."""

    @staticmethod
    def extract_edges(elements: Iterator[ET.Element], keys: AttributeKeyTable,
                      default_directed: bool) -> List[EdgeRecord]:
        return [EdgeExtractor.extract_edge(elem, keys, default_directed) for elem in elements]

    @staticmethod
    def extract_edge(elem: ET.Element, keys: AttributeKeyTable, default_directed: bool) -> EdgeRecord:
        return EdgeRecord(
            source_id=elem.get(SOURCE_ATTRIBUTE, ""),
            target_id=elem.get(TARGET_ATTRIBUTE, ""),
            directed=EdgeExtractor.resolve_directed(elem.get(DIRECTED_ATTRIBUTE), default_directed),
            attributes=DataExtractor.extract_attributes(elem, keys),
        )

    @staticmethod
    def resolve_directed(flag: Optional[str], default_directed: bool) -> bool:
        """Explicit per-edge flag wins, otherwise the document default."""
        if flag is None:
            return default_directed
        return flag.strip().lower() == TRUE_VALUE


def resolve_keys(root: ET.Element) -> AttributeKeyTable:
    """Build the attribute-key table for a parsed document."""
    return KeyExtractor.extract_keys(root)
