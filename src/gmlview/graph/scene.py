"""Scene data structures owned by the render engine.

A Scene is the exclusively-owned handle passed between the render engine,
the interaction controller and the session. Other components change it only
through engine or controller operations.
"""

from dataclasses import dataclass, field
from enum import Enum

from graphml_parser import GraphModel


class ArrowShape(str, Enum):
    """Edge end affordance."""
    TRIANGLE = "triangle"
    NONE = "none"


@dataclass
class SceneNode:
    """Positioned node element."""
    id: str
    label: str
    data: dict[str, str] = field(default_factory=dict)
    x: float = 0.0
    y: float = 0.0
    selected: bool = False
    placeholder: bool = False  # stands in for a missing edge endpoint


@dataclass
class SceneEdge:
    """Edge element connecting two scene nodes by index."""
    source_id: str
    target_id: str
    source_index: int
    target_index: int
    directed: bool
    data: dict[str, str] = field(default_factory=dict)

    @property
    def arrow(self) -> ArrowShape:
        return ArrowShape.TRIANGLE if self.directed else ArrowShape.NONE

    @property
    def is_self_loop(self) -> bool:
        return self.source_index == self.target_index


@dataclass
class Bounds:
    """Axis-aligned bounding box in scene coordinates."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def expand(self, margin: float) -> "Bounds":
        return Bounds(self.min_x - margin, self.min_y - margin, self.max_x + margin, self.max_y + margin)


@dataclass
class Viewport:
    """Visible window onto the scene.

    pan_x/pan_y is the scene point shown at the center of the viewport;
    zoom is screen pixels per scene unit.
    """
    width: int = 800
    height: int = 600
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    min_zoom: float = 1e-3
    max_zoom: float = 10.0

    def fit(self, bounds: Bounds, padding: float = 0.0) -> None:
        """Zoom and pan so bounds fill the viewport minus padding."""
        usable_w = max(self.width - 2 * padding, 1.0)
        usable_h = max(self.height - 2 * padding, 1.0)
        if bounds.width > 0 or bounds.height > 0:
            candidates = []
            if bounds.width > 0:
                candidates.append(usable_w / bounds.width)
            if bounds.height > 0:
                candidates.append(usable_h / bounds.height)
            self.zoom = self._clamp(min(candidates))
        else:
            self.zoom = 1.0
        self.pan_x, self.pan_y = bounds.center

    def center_on(self, x: float, y: float) -> None:
        """Pan so the scene point is in the middle, keeping zoom."""
        self.pan_x, self.pan_y = x, y

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        """Scene coordinates to viewport pixels (origin top-left, y down)."""
        return (
            (x - self.pan_x) * self.zoom + self.width / 2,
            (self.pan_y - y) * self.zoom + self.height / 2,
        )

    def _clamp(self, zoom: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, zoom))


@dataclass
class Scene:
    """Rendered graph: positioned elements, viewport, layout and error state."""
    viewport: Viewport = field(default_factory=Viewport)
    layout_name: str = "force-directed"
    applied_layout: str | None = None
    nodes: list[SceneNode] = field(default_factory=list)
    edges: list[SceneEdge] = field(default_factory=list)
    model: GraphModel | None = None
    missing_endpoints: list[str] = field(default_factory=list)
    error: str | None = None
    revision: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def clear(self) -> None:
        """Remove all visual elements; viewport and layout name are kept."""
        self.nodes.clear()
        self.edges.clear()
        self.missing_endpoints.clear()
        self.model = None
        self.applied_layout = None

    def graph_nodes(self) -> list[SceneNode]:
        """Nodes declared in the model, in model order (placeholders excluded)."""
        return [node for node in self.nodes if not node.placeholder]

    def find_node(self, node_id: str) -> SceneNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def selected_ids(self) -> list[str]:
        return [node.id for node in self.nodes if node.selected]

    def clear_selection(self) -> None:
        for node in self.nodes:
            node.selected = False

    def bounds(self) -> Bounds | None:
        if not self.nodes:
            return None
        xs = [node.x for node in self.nodes]
        ys = [node.y for node in self.nodes]
        return Bounds(min(xs), min(ys), max(xs), max(ys))

    def summary(self) -> str:
        """Counts badge text."""
        default = "unknown"
        if self.model is not None:
            default = "directed" if self.model.default_directed else "undirected"
        return (
            f"nodes: {len(self.graph_nodes())}  edges: {len(self.edges)}  "
            f"default: {default}"
        )
