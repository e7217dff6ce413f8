"""Constants and configuration for GraphML parsing.

Tag names, attribute names and parser defaults centralized for easy
maintenance.
"""

from typing import Any, Dict, Tuple

GRAPHML_NAMESPACE = "http://graphml.graphdrawing.org/xmlns"

# Element local names (namespace prefixes are ignored when matching)
GRAPH_TAG = "graph"
KEY_TAG = "key"
NODE_TAG = "node"
EDGE_TAG = "edge"
DATA_TAG = "data"

# Attributes read from the markup
ID_ATTRIBUTE = "id"
KEY_ATTRIBUTE = "key"
SOURCE_ATTRIBUTE = "source"
TARGET_ATTRIBUTE = "target"
DIRECTED_ATTRIBUTE = "directed"
EDGE_DEFAULT_ATTRIBUTE = "edgedefault"

# Key display-name attributes, first match wins. 'attr.name' is the GraphML
# standard spelling, 'attrname' the legacy one.
KEY_NAME_ATTRIBUTES: Tuple[str, ...] = ("attr.name", "attrname")

DIRECTED_EDGE_DEFAULT = "directed"
TRUE_VALUE = "true"

# Resolved attribute used as a node's display label
LABEL_ATTRIBUTE = "label"

DEFAULT_CONFIG: Dict[str, Any] = {
    # Collect node/edge elements from nested graphs as well as the top level
    'nested_graphs': True,
    # Add warnings for edges whose endpoints name no node
    'report_dangling_endpoints': True,
    # Add warnings for node ids declared more than once
    'report_duplicate_ids': True,
}
