"""Data models for GraphML parsing.

All models are frozen dataclasses with read-only attribute mappings: a
published GraphModel is never mutated, a re-parse produces a new one.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .constants import LABEL_ATTRIBUTE


def _freeze(mapping: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    if isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class AttributeKeyTable:
    """Short key token to display name, declared once per document."""
    entries: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "entries", _freeze(self.entries))

    def resolve(self, token: str) -> str:
        """Display name for token, or the raw token when undeclared."""
        return self.entries.get(token, token)

    def __contains__(self, token: object) -> bool:
        return token in self.entries

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class NodeRecord:
    """Graph node with resolved attributes in document order."""
    id: str
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "attributes", _freeze(self.attributes))

    @property
    def label(self) -> str:
        """Display label: the resolved 'label' attribute, falling back to id."""
        return self.attributes.get(LABEL_ATTRIBUTE) or self.id


@dataclass(frozen=True)
class EdgeRecord:
    """Graph edge. Endpoints are opaque ids and may name no node."""
    source_id: str
    target_id: str
    directed: bool = False
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "attributes", _freeze(self.attributes))

    @property
    def is_self_loop(self) -> bool:
        return self.source_id == self.target_id


@dataclass(frozen=True)
class GraphModel:
    """Complete immutable graph built from one document."""
    nodes: Tuple[NodeRecord, ...] = ()
    edges: Tuple[EdgeRecord, ...] = ()
    default_directed: bool = False
    keys: AttributeKeyTable = field(default_factory=AttributeKeyTable, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def find_node(self, node_id: str) -> Optional[NodeRecord]:
        """First node declared with node_id, or None."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def dangling_endpoints(self) -> List[str]:
        """Edge endpoint ids that name no node, in first-seen order."""
        known = set(self.node_ids())
        missing: Dict[str, None] = {}
        for edge in self.edges:
            for endpoint in (edge.source_id, edge.target_id):
                if endpoint not in known:
                    missing.setdefault(endpoint, None)
        return list(missing)

    def duplicate_node_ids(self) -> List[str]:
        """Node ids declared more than once, in first-seen order."""
        seen = set()
        duplicates: Dict[str, None] = {}
        for node in self.nodes:
            if node.id in seen:
                duplicates.setdefault(node.id, None)
            seen.add(node.id)
        return list(duplicates)


@dataclass
class ParseDiagnostics:
    """Detailed diagnostic information about a parsing operation."""
    total_elements_processed: int = 0
    keys_found: int = 0
    nodes_found: int = 0
    edges_found: int = 0
    data_elements_found: int = 0
    directed_edges: int = 0
    dangling_endpoints: List[str] = field(default_factory=list)
    duplicate_node_ids: List[str] = field(default_factory=list)
    root_element_tag: Optional[str] = None
    processing_steps: List[str] = field(default_factory=list)
    performance_metrics: Dict[str, float] = field(default_factory=dict)


@dataclass
class ParseResult:
    """Parsing result with success/error information and diagnostics."""
    model: Optional[GraphModel] = None
    success: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    parse_time_ms: float = 0.0
    source_name: Optional[str] = None
    diagnostics: Optional[ParseDiagnostics] = None
