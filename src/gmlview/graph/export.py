"""Scene exporters: raster image (matplotlib) and Mermaid flowchart text.

Exporters always serialize the full scene, not just the visible viewport.
"""

import io
import logging
from abc import ABC, abstractmethod
from collections import defaultdict

from matplotlib.figure import Figure
from matplotlib.patches import Circle, FancyArrowPatch

from ..config import ExportConfig, ExportFormat, StyleConfig
from .scene import Scene, SceneEdge

logger = logging.getLogger(__name__)

# Scene units per inch of exported image
UNITS_PER_INCH = 100.0
MIN_FIGURE_INCHES = 2.0
MAX_FIGURE_INCHES = 40.0


def truncate_label(label: str, max_length: int) -> str:
    """Shorten long labels with an ellipsis."""
    if len(label) > max_length:
        return label[:max_length - 3] + "..."
    return label


class GraphExporter(ABC):
    """Abstract base class for scene exporters."""

    def __init__(self, style: StyleConfig, export: ExportConfig):
        self.style = style
        self.export_config = export

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def export(self, scene: Scene) -> bytes:
        """Serialize the full scene."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass


class PngExporter(GraphExporter):
    """Raster export of the whole scene through matplotlib's Agg canvas."""

    @property
    def format_name(self) -> str:
        return ExportFormat.PNG.value

    def get_file_extension(self) -> str:
        return ".png"

    def export(self, scene: Scene) -> bytes:
        style = self.style
        radius = style.node_size / 2
        bounds = scene.bounds()

        if bounds is None:
            width_in = height_in = MIN_FIGURE_INCHES * 2
        else:
            bounds = bounds.expand(style.node_size * 2)
            width_in = self._inches(bounds.width)
            height_in = self._inches(bounds.height)

        fig = Figure(figsize=(width_in, height_in), dpi=self.export_config.dpi)
        fig.patch.set_facecolor(self.export_config.background)
        ax = fig.add_axes((0, 0, 1, 1))
        ax.set_axis_off()

        if bounds is None:
            ax.set_xlim(0, 1)
            ax.set_ylim(0, 1)
            if scene.error:
                ax.text(0.5, 0.5, scene.error, ha="center", va="center",
                        fontsize=style.font_size, color="#b00020", wrap=True)
        else:
            ax.set_xlim(bounds.min_x, bounds.max_x)
            ax.set_ylim(bounds.min_y, bounds.max_y)
            ax.set_aspect("equal")
            circles = self._draw_nodes(ax, scene, radius)
            self._draw_edges(ax, scene, circles, radius)

        buffer = io.BytesIO()
        fig.savefig(buffer, format="png", dpi=self.export_config.dpi,
                    facecolor=self.export_config.background)
        logger.debug(f"Exported PNG ({len(buffer.getvalue())} bytes) for {scene.summary()}")
        return buffer.getvalue()

    def _inches(self, extent: float) -> float:
        return min(max(extent / UNITS_PER_INCH, MIN_FIGURE_INCHES), MAX_FIGURE_INCHES)

    def _draw_nodes(self, ax, scene: Scene, radius: float) -> list[Circle]:
        style = self.style
        circles = []
        for node in scene.nodes:
            if node.selected:
                edgecolor, linewidth = style.selected_border_color, 3
            else:
                edgecolor, linewidth = style.node_border_color, 1
            circle = Circle(
                (node.x, node.y), radius,
                facecolor=style.placeholder_color if node.placeholder else style.node_color,
                edgecolor=edgecolor,
                linewidth=linewidth,
                linestyle="--" if node.placeholder else "-",
                zorder=3,
            )
            ax.add_patch(circle)
            ax.text(node.x, node.y, truncate_label(node.label, style.max_label_length),
                    ha="center", va="center", fontsize=style.font_size, color="#111111", zorder=4)
            circles.append(circle)
        return circles

    def _draw_edges(self, ax, scene: Scene, circles: list[Circle], radius: float) -> None:
        style = self.style
        parallel: dict[tuple[int, int], int] = defaultdict(int)
        for edge in scene.edges:
            if edge.is_self_loop:
                self._draw_self_loop(ax, scene, edge, radius)
                continue
            pair = (min(edge.source_index, edge.target_index), max(edge.source_index, edge.target_index))
            rank = parallel[pair]
            parallel[pair] += 1
            source = scene.nodes[edge.source_index]
            target = scene.nodes[edge.target_index]
            arrow = FancyArrowPatch(
                (source.x, source.y), (target.x, target.y),
                patchA=circles[edge.source_index],
                patchB=circles[edge.target_index],
                arrowstyle="-|>" if edge.directed else "-",
                connectionstyle=f"arc3,rad={self._curvature(rank)}",
                mutation_scale=12,
                color=style.edge_color,
                linewidth=1.2,
                zorder=2,
            )
            ax.add_patch(arrow)

    def _draw_self_loop(self, ax, scene: Scene, edge: SceneEdge, radius: float) -> None:
        node = scene.nodes[edge.source_index]
        ax.add_patch(Circle(
            (node.x, node.y + radius * 1.4), radius * 0.8,
            fill=False, edgecolor=self.style.edge_color, linewidth=1.2, zorder=1,
        ))

    @staticmethod
    def _curvature(rank: int) -> float:
        # 0, 0.2, -0.2, 0.4, -0.4, ...
        if rank == 0:
            return 0.0
        step = (rank + 1) // 2 * 0.2
        return step if rank % 2 else -step


class MermaidExporter(GraphExporter):
    """Mermaid flowchart text for the scene."""

    @property
    def format_name(self) -> str:
        return ExportFormat.MERMAID.value

    def get_file_extension(self) -> str:
        return ".mmd"

    def export(self, scene: Scene) -> bytes:
        return self.render(scene).encode("utf-8")

    def render(self, scene: Scene) -> str:
        lines = ["flowchart LR", f"    %% {scene.summary()}", ""]

        if scene.nodes:
            lines.append("    %% Nodes")
            for index, node in enumerate(scene.nodes):
                lines.append(f'    n{index}["{self._escape_label(node.label)}"]')
            lines.append("")

        if scene.edges:
            lines.append("    %% Edges")
            for edge in scene.edges:
                lines.append(f"    {self._render_edge(edge)}")
            lines.append("")

        lines.extend(self._render_styling(scene))
        return "\n".join(lines)

    def _render_edge(self, edge: SceneEdge) -> str:
        arrow = "-->" if edge.directed else "---"
        label = edge.data.get("label")
        if label:
            return f"n{edge.source_index} {arrow}|{self._escape_label(label)}| n{edge.target_index}"
        return f"n{edge.source_index} {arrow} n{edge.target_index}"

    def _render_styling(self, scene: Scene) -> list[str]:
        lines = []
        placeholders = [i for i, node in enumerate(scene.nodes) if node.placeholder]
        if placeholders:
            lines.append("    %% Missing endpoint styling")
            lines.append("    classDef missing fill:#f5f5f5,stroke:#9e9e9e,stroke-dasharray: 3 3")
            lines.append(f"    class {','.join(f'n{i}' for i in placeholders)} missing")

        selected = [i for i, node in enumerate(scene.nodes) if node.selected]
        if selected:
            lines.append("    %% Selection styling")
            lines.append(f"    classDef selected stroke:{self.style.selected_border_color},stroke-width:3px")
            lines.append(f"    class {','.join(f'n{i}' for i in selected)} selected")
        return lines

    def _escape_label(self, label: str) -> str:
        """Escape label for Mermaid rendering."""
        if not label:
            return ""

        label = label.replace('"', "'")
        label = label.replace("[", "(")
        label = label.replace("]", ")")
        label = label.replace("{", "(")
        label = label.replace("}", ")")
        label = label.replace("|", ":")
        label = label.replace("\n", " ")

        return truncate_label(label, self.style.max_label_length)


class ExporterRegistry:
    """Exporters by format name."""

    def __init__(self, style: StyleConfig, export: ExportConfig):
        self.exporters: dict[str, GraphExporter] = {}
        self.add_exporter(PngExporter(style, export))
        self.add_exporter(MermaidExporter(style, export))

    def add_exporter(self, exporter: GraphExporter) -> None:
        self.exporters[exporter.format_name] = exporter

    def get(self, format_name: ExportFormat | str) -> GraphExporter:
        key = format_name.value if isinstance(format_name, ExportFormat) else str(format_name)
        if key not in self.exporters:
            available = list(self.exporters.keys())
            raise ValueError(f"Unknown format '{key}'. Available: {available}")
        return self.exporters[key]
