"""Core GraphML parser.

This module provides the GraphmlParser class that turns graph-description
markup into an immutable GraphModel. Parsing goes through defusedxml so
hostile documents (entity expansion, external references) are rejected as
malformed instead of being expanded.
"""

import logging
import time
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import fromstring as defused_fromstring

from .constants import DEFAULT_CONFIG, EDGE_TAG, NODE_TAG
from .errors import MalformedDocument
from .extractors import (
    DataExtractor,
    EdgeExtractor,
    GraphExtractor,
    NodeExtractor,
    resolve_keys,
)
from .models import GraphModel, ParseDiagnostics, ParseResult

logger = logging.getLogger(__name__)


class GraphmlParser:
    """GraphML markup to graph-model parser.

    Resolves attribute-key indirection, per-edge directedness with the
    document-level fallback, and keeps node/edge document order.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize parser with configuration.

        Args:
            config: Parser configuration dict, merged over DEFAULT_CONFIG
        """
        self.config = {**DEFAULT_CONFIG, **(config or {})}

    def build(self, text: str, source_name: str = "<string>") -> GraphModel:
        """Build a GraphModel from document text.

        Args:
            text: Raw markup
            source_name: Name used in error messages

        Returns:
            New immutable GraphModel

        Raises:
            MalformedDocument: If the markup cannot be structurally parsed
        """
        model, _ = self._build(text, source_name)
        return model

    def parse_content(self, text: str, source_name: str = "<string>") -> ParseResult:
        """Parse document text without raising.

        Args:
            text: Raw markup
            source_name: Virtual file name for error reporting

        Returns:
            ParseResult with the model or error information
        """
        start_time = time.time()
        result = ParseResult(source_name=source_name)

        try:
            result.model, result.diagnostics = self._build(text, source_name)
        except MalformedDocument as e:
            result.success = False
            result.errors.append(f"XML parse error: {e}")

        if result.model is not None:
            result.warnings.extend(self._collect_warnings(result.model))

        result.parse_time_ms = (time.time() - start_time) * 1000
        return result

    def parse_file(self, file_path: Path) -> ParseResult:
        """Parse a GraphML file.

        Args:
            file_path: Path to the document

        Returns:
            ParseResult with the model or error information
        """
        try:
            text = file_path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            return ParseResult(success=False, errors=[f"Encoding error: {e}"], source_name=str(file_path))
        except OSError as e:
            return ParseResult(success=False, errors=[f"Read error: {e}"], source_name=str(file_path))
        return self.parse_content(text, str(file_path))

    def _build(self, text: str, source_name: str) -> Tuple[GraphModel, ParseDiagnostics]:
        diagnostics = ParseDiagnostics()
        diagnostics.processing_steps.append("build_started")

        parse_start = time.time()
        try:
            root = defused_fromstring(text)
        except ET.ParseError as e:
            diagnostics.processing_steps.append("xml_parse_failed")
            raise MalformedDocument(str(e), source_name) from e
        except DefusedXmlException as e:
            diagnostics.processing_steps.append("xml_rejected")
            raise MalformedDocument(f"forbidden markup: {e}", source_name) from e
        except UnicodeError as e:
            # expat encodes str input as UTF-8; lone surrogates cannot be
            diagnostics.processing_steps.append("xml_encoding_failed")
            raise MalformedDocument(f"unencodable text: {e}", source_name) from e
        diagnostics.performance_metrics['xml_parse_ms'] = (time.time() - parse_start) * 1000
        diagnostics.root_element_tag = root.tag
        diagnostics.total_elements_processed = sum(1 for _ in root.iter())
        diagnostics.processing_steps.append("xml_parsed")

        extract_start = time.time()
        keys = resolve_keys(root)
        diagnostics.keys_found = len(keys)
        diagnostics.processing_steps.append("keys_resolved")

        graph = GraphExtractor.find_graph(root)
        default_directed = GraphExtractor.extract_default_directed(graph)
        nested = self.config['nested_graphs']

        node_elements = list(GraphExtractor.iter_elements(root, graph, NODE_TAG, nested))
        edge_elements = list(GraphExtractor.iter_elements(root, graph, EDGE_TAG, nested))
        nodes = NodeExtractor.extract_nodes(node_elements, keys)
        diagnostics.processing_steps.append("nodes_extracted")
        edges = EdgeExtractor.extract_edges(edge_elements, keys, default_directed)
        diagnostics.processing_steps.append("edges_extracted")

        model = GraphModel(nodes=nodes, edges=edges, default_directed=default_directed, keys=keys)

        diagnostics.nodes_found = len(model.nodes)
        diagnostics.edges_found = len(model.edges)
        diagnostics.directed_edges = sum(1 for edge in model.edges if edge.directed)
        diagnostics.data_elements_found = sum(
            DataExtractor.count_data_elements(elem) for elem in node_elements + edge_elements
        )
        diagnostics.dangling_endpoints = model.dangling_endpoints()
        diagnostics.duplicate_node_ids = model.duplicate_node_ids()
        diagnostics.performance_metrics['content_extract_ms'] = (time.time() - extract_start) * 1000
        diagnostics.processing_steps.append("model_built")

        logger.debug(
            f"Built graph from {source_name}: {diagnostics.nodes_found} nodes, "
            f"{diagnostics.edges_found} edges, {diagnostics.keys_found} keys"
        )
        return model, diagnostics

    def _collect_warnings(self, model: GraphModel) -> list:
        warnings = []
        if self.config['report_dangling_endpoints']:
            for endpoint in model.dangling_endpoints():
                warnings.append(f"Edge endpoint '{endpoint}' does not match any node")
        if self.config['report_duplicate_ids']:
            for node_id in model.duplicate_node_ids():
                warnings.append(f"Node id '{node_id}' is declared more than once")
        return warnings
