"""Layout algorithms selectable by name.

Each algorithm maps scene node indices to (x, y) positions in scene units,
y pointing up. Any failure inside an algorithm surfaces as
LayoutEngineFailure; the render engine recovers from it with the grid
layout.
"""

import logging
import math
from abc import ABC, abstractmethod

import networkx as nx

from ..config import LayoutConfig, LayoutName
from .scene import Scene

logger = logging.getLogger(__name__)

Position = tuple[float, float]


class LayoutEngineFailure(Exception):
    """A named layout algorithm could not execute."""

    def __init__(self, layout_name: str, detail: str):
        self.layout_name = layout_name
        self.detail = detail
        super().__init__(f"layout '{layout_name}' failed: {detail}")


def layout_key(name: LayoutName | str) -> str:
    """Normalize an enum member or raw string to the registry key."""
    return name.value if isinstance(name, LayoutName) else str(name)


def scene_to_graph(scene: Scene) -> nx.MultiDiGraph:
    """Build a networkx graph keyed by scene node index.

    Parallel edges and self-loops are kept; every edge endpoint already has
    a scene node (placeholders included).
    """
    graph = nx.MultiDiGraph()
    graph.add_nodes_from(range(len(scene.nodes)))
    for edge in scene.edges:
        graph.add_edge(edge.source_index, edge.target_index)
    return graph


class LayoutAlgorithm(ABC):
    """Abstract base class for layout algorithms."""

    def __init__(self, config: LayoutConfig):
        self.config = config

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry name of the algorithm."""
        pass

    def compute(self, graph: nx.MultiDiGraph) -> dict[int, Position]:
        if graph.number_of_nodes() == 0:
            return {}
        return self._compute(graph)

    @abstractmethod
    def _compute(self, graph: nx.MultiDiGraph) -> dict[int, Position]:
        pass

    @staticmethod
    def _as_floats(positions) -> dict[int, Position]:
        return {node: (float(pos[0]), float(pos[1])) for node, pos in positions.items()}


class ForceDirectedLayout(LayoutAlgorithm):
    """Fruchterman-Reingold spring embedding, seeded for stable output."""

    @property
    def name(self) -> str:
        return LayoutName.FORCE_DIRECTED.value

    def _compute(self, graph: nx.MultiDiGraph) -> dict[int, Position]:
        positions = nx.spring_layout(
            graph,
            seed=self.config.seed,
            iterations=self.config.iterations,
            scale=self.config.scale,
        )
        return self._as_floats(positions)


class GridLayout(LayoutAlgorithm):
    """Row-major grid in node order. Pure arithmetic, cannot fail."""

    @property
    def name(self) -> str:
        return LayoutName.GRID.value

    def _compute(self, graph: nx.MultiDiGraph) -> dict[int, Position]:
        nodes = list(graph.nodes)
        columns = math.ceil(math.sqrt(len(nodes)))
        spacing = self.config.spacing
        return {
            node: ((i % columns) * spacing, -(i // columns) * spacing)
            for i, node in enumerate(nodes)
        }


class ConcentricLayout(LayoutAlgorithm):
    """Rings grouped by degree, highest degree innermost."""

    @property
    def name(self) -> str:
        return LayoutName.CONCENTRIC.value

    def _compute(self, graph: nx.MultiDiGraph) -> dict[int, Position]:
        degrees = dict(graph.degree())
        shells = [
            [node for node in graph.nodes if degrees[node] == degree]
            for degree in sorted(set(degrees.values()), reverse=True)
        ]
        positions = nx.shell_layout(graph, nlist=shells, scale=self.config.scale)
        return self._as_floats(positions)


class LayeredLayout(LayoutAlgorithm):
    """Breadth-first layers from root nodes, one band per layer."""

    @property
    def name(self) -> str:
        return LayoutName.LAYERED.value

    def _compute(self, graph: nx.MultiDiGraph) -> dict[int, Position]:
        layers = self.assign_layers(graph)

        # Insert nodes in layer order so bands come out top to bottom
        layered = nx.Graph()
        for node in sorted(graph.nodes, key=lambda n: (layers[n], n)):
            layered.add_node(node, layer=layers[node])

        positions = nx.multipartite_layout(
            layered, subset_key="layer", align="horizontal", scale=self.config.scale
        )
        return {node: (x, -y) for node, (x, y) in self._as_floats(positions).items()}

    @staticmethod
    def assign_layers(graph: nx.MultiDiGraph) -> dict[int, int]:
        """Hop distance from the roots of each connected component.

        Roots are nodes without incoming edges; a component without any
        (a cycle) is rooted at its first node.
        """
        undirected = graph.to_undirected(as_view=True)
        layers: dict[int, int] = {}
        for component in nx.connected_components(undirected):
            members = sorted(component)
            roots = [node for node in members if graph.in_degree(node) == 0] or members[:1]
            lengths = nx.multi_source_dijkstra_path_length(undirected, set(roots))
            layers.update({node: int(length) for node, length in lengths.items()})
        return layers


class LayoutRegistry:
    """Algorithms by name; run() turns any algorithm error into LayoutEngineFailure."""

    def __init__(self, config: LayoutConfig):
        self.config = config
        self._algorithms: dict[str, LayoutAlgorithm] = {}
        for algorithm in (
            ForceDirectedLayout(config),
            GridLayout(config),
            ConcentricLayout(config),
            LayeredLayout(config),
        ):
            self.register(algorithm)

    def register(self, algorithm: LayoutAlgorithm) -> None:
        self._algorithms[algorithm.name] = algorithm

    def names(self) -> list[str]:
        return list(self._algorithms)

    def run(self, name: LayoutName | str, graph: nx.MultiDiGraph) -> dict[int, Position]:
        key = layout_key(name)
        algorithm = self._algorithms.get(key)
        if algorithm is None:
            raise LayoutEngineFailure(key, f"unknown layout. Available: {self.names()}")

        try:
            positions = algorithm.compute(graph)
        except Exception as e:
            raise LayoutEngineFailure(key, f"{type(e).__name__}: {e}") from e

        missing = [node for node in graph.nodes if node not in positions]
        if missing:
            raise LayoutEngineFailure(key, f"{len(missing)} nodes left unpositioned")
        if any(not (math.isfinite(x) and math.isfinite(y)) for x, y in positions.values()):
            raise LayoutEngineFailure(key, "non-finite coordinates")
        return positions
