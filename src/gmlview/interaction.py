"""Interaction controller: search, layout switching, export and activation.

Every operation takes the scene handle explicitly; the controller changes the
scene only through RenderEngine operations.
"""

import logging
from collections.abc import Callable

from .config import ExportFormat, LayoutName
from .graph import ExporterRegistry, RenderEngine, Scene

logger = logging.getLogger(__name__)

ACTIVATE_MESSAGE = "activate"

Emitter = Callable[[dict[str, str]], None]


def _discard(message: dict[str, str]) -> None:
    logger.debug(f"No emitter attached, dropping {message}")


class InteractionController:
    """User-facing commands against a scene."""

    def __init__(
        self,
        engine: RenderEngine,
        emit: Emitter | None = None,
        exporters: ExporterRegistry | None = None,
    ):
        self.engine = engine
        self.emit = emit or _discard
        self.exporters = exporters or ExporterRegistry(engine.config.style, engine.config.export)

    def select_by_id(self, scene: Scene | None, substring: str | None) -> list[str]:
        """Select nodes whose id contains substring and center on the first.

        Matching is literal and case-sensitive. Surrounding whitespace is
        ignored; an empty query only clears the selection. Placeholder nodes
        for missing endpoints are never matched.

        Returns:
            Ids of the selected nodes in node order
        """
        if scene is None:
            return []

        self.engine.clear_selection(scene)
        query = (substring or "").strip()
        if not query:
            return []

        matches = [node for node in scene.graph_nodes() if query in node.id]
        if matches:
            self.engine.select(scene, matches)
            self.engine.center(scene, matches[0])
        logger.debug(f"Search '{query}' matched {len(matches)} node(s)")
        return [node.id for node in matches]

    def export_image(self, scene: Scene | None, format_name: ExportFormat | str | None = None) -> bytes | None:
        """Serialize the full scene; None when there is no scene."""
        if scene is None:
            return None
        exporter = self.exporters.get(format_name or self.engine.config.export.format)
        return exporter.export(scene)

    def on_node_activated(self, node_id: str) -> dict[str, str]:
        """Emit the activation message for node_id outward.

        Resolving the id to a source location is the host's job.
        """
        message = {"type": ACTIVATE_MESSAGE, "id": node_id}
        self.emit(message)
        return message

    def set_layout(self, scene: Scene | None, layout_name: LayoutName | str) -> Scene | None:
        """Re-render the current model with another layout, without re-parsing."""
        if scene is None:
            return None
        return self.engine.relayout(scene, layout_name)

    def fit(self, scene: Scene | None) -> None:
        if scene is not None:
            self.engine.fit(scene)
