"""Standalone GraphML parser producing immutable graph models.

This package turns graph-description markup (graph, key, node, edge, data
elements) into a GraphModel. Its only dependency is defusedxml.

Basic usage:
    from graphml_parser import GraphmlParser

    parser = GraphmlParser()
    model = parser.build(text)
    print(f"Found {len(model.nodes)} nodes and {len(model.edges)} edges")

    result = parser.parse_file(Path("graph.graphml"))
    if not result.success:
        print(result.errors)
"""

from .__version__ import __version__, __author__, __description__
from .errors import MalformedDocument
from .extractors import (
    DataExtractor,
    EdgeExtractor,
    GraphExtractor,
    KeyExtractor,
    NodeExtractor,
    resolve_keys,
)
from .models import (
    AttributeKeyTable,
    EdgeRecord,
    GraphModel,
    NodeRecord,
    ParseDiagnostics,
    ParseResult,
)
from .parser import GraphmlParser
from .utils import XmlUtils
from .constants import DEFAULT_CONFIG, GRAPHML_NAMESPACE

# Public API
__all__ = [
    # Version info
    '__version__',
    '__author__',
    '__description__',

    # Main parser
    'GraphmlParser',
    'MalformedDocument',

    # Data models
    'AttributeKeyTable',
    'NodeRecord',
    'EdgeRecord',
    'GraphModel',
    'ParseDiagnostics',
    'ParseResult',

    # Extractors
    'KeyExtractor',
    'DataExtractor',
    'GraphExtractor',
    'NodeExtractor',
    'EdgeExtractor',
    'resolve_keys',

    # Utilities
    'XmlUtils',

    # Constants
    'DEFAULT_CONFIG',
    'GRAPHML_NAMESPACE',
]


def build_graph(text, config=None):
    """Convenience function to build a GraphModel, raising MalformedDocument.

    Args:
        text: GraphML content as string
        config: Optional parser configuration

    Returns:
        GraphModel
    """
    return GraphmlParser(config).build(text)


def parse_graphml_content(text, config=None):
    """Convenience function to parse GraphML content without raising.

    Args:
        text: GraphML content as string
        config: Optional parser configuration

    Returns:
        ParseResult with the graph model
    """
    return GraphmlParser(config).parse_content(text)


def parse_graphml_file(file_path, config=None):
    """Convenience function to parse a GraphML file directly.

    Args:
        file_path: Path to GraphML file (string or Path object)
        config: Optional parser configuration

    Returns:
        ParseResult with the graph model
    """
    from pathlib import Path
    return GraphmlParser(config).parse_file(Path(file_path))
