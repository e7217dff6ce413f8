"""Layout/render engine.

Turns a GraphModel into a positioned Scene. The engine is the only writer of
scene elements; re-rendering clears and repopulates the same scene handle so
the viewport, the chosen layout name and the selection survive updates.
"""

import logging

from graphml_parser import GraphModel

from ..config import GmlviewConfig, LayoutName, create_default_config
from .layout import LayoutEngineFailure, LayoutRegistry, layout_key, scene_to_graph
from .scene import Scene, SceneEdge, SceneNode, Viewport

logger = logging.getLogger(__name__)


class RenderEngine:
    """Builds and refreshes scenes from graph models."""

    def __init__(self, config: GmlviewConfig | None = None, layouts: LayoutRegistry | None = None):
        self.config = config or create_default_config()
        self.layouts = layouts or LayoutRegistry(self.config.layout)

    def create_scene(self, layout_name: LayoutName | str | None = None) -> Scene:
        """Empty scene with a viewport sized from configuration."""
        viewer = self.config.viewer
        return Scene(
            viewport=Viewport(width=viewer.width, height=viewer.height),
            layout_name=layout_key(layout_name or viewer.default_layout),
        )

    def render(
        self,
        model: GraphModel | None,
        layout_name: LayoutName | str | None = None,
        scene: Scene | None = None,
    ) -> Scene:
        """Render model into scene, constructing the scene on first use.

        Args:
            model: Graph to display; anything that is not a GraphModel clears
                the scene and puts it into error state
            layout_name: Layout to use; None keeps the scene's current one
            scene: Existing scene handle to repopulate

        Returns:
            The rendered scene handle
        """
        if scene is None:
            scene = self.create_scene(layout_name)
        elif layout_name is not None:
            scene.layout_name = layout_key(layout_name)

        if not isinstance(model, GraphModel):
            return self.show_error(scene, "No usable graph model to render")

        selected = set(scene.selected_ids())
        scene.clear()
        scene.error = None
        self._populate(scene, model)
        for node in scene.nodes:
            node.selected = node.id in selected and not node.placeholder

        self._apply_layout(scene)
        scene.revision += 1
        logger.debug(f"Rendered scene r{scene.revision}: {scene.summary()}")
        return scene

    def relayout(self, scene: Scene, layout_name: LayoutName | str) -> Scene:
        """Re-render the scene's current model with another layout.

        A scene without a model (empty or in error state) only records the
        name so the next successful render uses it.
        """
        if scene.model is None:
            scene.layout_name = layout_key(layout_name)
            return scene
        return self.render(scene.model, layout_name, scene)

    def show_error(self, scene: Scene | None, message: str) -> Scene:
        """Clear the scene (no partial render) and attach an error."""
        if scene is None:
            scene = self.create_scene()
        scene.clear()
        scene.error = message
        scene.revision += 1
        logger.info(f"Scene cleared with error: {message}")
        return scene

    def fit(self, scene: Scene) -> None:
        """Fit the viewport to all elements."""
        bounds = scene.bounds()
        viewport = scene.viewport
        if bounds is None:
            viewport.zoom = 1.0
            viewport.center_on(0.0, 0.0)
            return
        viewport.fit(bounds.expand(self.config.style.node_size / 2), self.config.viewer.padding)

    def center(self, scene: Scene, node: SceneNode) -> None:
        scene.viewport.center_on(node.x, node.y)

    def select(self, scene: Scene, nodes: list[SceneNode]) -> None:
        """Replace the selection with nodes."""
        scene.clear_selection()
        for node in nodes:
            node.selected = True

    def clear_selection(self, scene: Scene) -> None:
        scene.clear_selection()

    def _populate(self, scene: Scene, model: GraphModel) -> None:
        index_by_id: dict[str, int] = {}
        for record in model.nodes:
            scene.nodes.append(SceneNode(id=record.id, label=record.label, data=dict(record.attributes)))
            # Duplicate ids each get a node; edges attach to the first one
            index_by_id.setdefault(record.id, len(scene.nodes) - 1)

        for record in model.edges:
            source = self._endpoint(scene, index_by_id, record.source_id)
            target = self._endpoint(scene, index_by_id, record.target_id)
            scene.edges.append(SceneEdge(
                source_id=record.source_id,
                target_id=record.target_id,
                source_index=source,
                target_index=target,
                directed=record.directed,
                data=dict(record.attributes),
            ))

        scene.model = model
        if scene.missing_endpoints:
            logger.warning(
                f"{len(scene.missing_endpoints)} edge endpoint(s) reference missing nodes: "
                f"{', '.join(scene.missing_endpoints)}"
            )

    def _endpoint(self, scene: Scene, index_by_id: dict[str, int], node_id: str) -> int:
        index = index_by_id.get(node_id)
        if index is None:
            scene.nodes.append(SceneNode(id=node_id, label=node_id, placeholder=True))
            index = index_by_id[node_id] = len(scene.nodes) - 1
            scene.missing_endpoints.append(node_id)
        return index

    def _apply_layout(self, scene: Scene) -> None:
        graph = scene_to_graph(scene)
        try:
            positions = self.layouts.run(scene.layout_name, graph)
            applied = scene.layout_name
        except LayoutEngineFailure as e:
            logger.warning(f"{e}; falling back to grid layout")
            positions = self.layouts.run(LayoutName.GRID, graph)
            applied = LayoutName.GRID.value

        for index, node in enumerate(scene.nodes):
            node.x, node.y = positions[index]
        scene.applied_layout = applied

        if self.config.viewer.fit_after_layout:
            self.fit(scene)
