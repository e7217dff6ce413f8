"""Session channel: event dispatch for one open document.

A ViewerSession owns the scene handle for one document and processes a closed
set of events strictly in arrival order. Document updates rebuild the model
wholesale; a bad update never blanks a previously good scene.
"""

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from graphml_parser import GraphModel, GraphmlParser, MalformedDocument

from .config import GmlviewConfig, LayoutName, create_default_config
from .graph import RenderEngine, Scene
from .interaction import Emitter, InteractionController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentUpdated:
    """Full-text replacement of the document."""
    text: str


@dataclass(frozen=True)
class NodeActivated:
    """User interacted directly with a node."""
    node_id: str


@dataclass(frozen=True)
class SearchChanged:
    """Search box contents changed."""
    query: str


@dataclass(frozen=True)
class LayoutChanged:
    """Layout selector changed."""
    layout: LayoutName | str


@dataclass(frozen=True)
class ExportRequested:
    """Export trigger; format None uses the configured default."""
    format: str | None = None


ViewerEvent = Union[DocumentUpdated, NodeActivated, SearchChanged, LayoutChanged, ExportRequested]


class StatusIndicator:
    """Persistent user-visible status: an error message plus the counts badge."""

    def __init__(self):
        self.message: str | None = None
        self.summary: str = ""

    @property
    def has_error(self) -> bool:
        return self.message is not None

    def set_error(self, message: str) -> None:
        self.message = message

    def clear(self) -> None:
        self.message = None


class ViewerSession:
    """One rendering/interaction surface for one document."""

    def __init__(
        self,
        config: GmlviewConfig | None = None,
        emit: Emitter | None = None,
        parser: GraphmlParser | None = None,
        engine: RenderEngine | None = None,
        source_name: str = "<document>",
    ):
        self.config = config or create_default_config()
        self.parser = parser or GraphmlParser()
        self.engine = engine or RenderEngine(self.config)
        self.controller = InteractionController(self.engine, emit)
        self.source_name = source_name
        self.status = StatusIndicator()
        self.scene: Scene | None = None
        self.model: GraphModel | None = None
        self._queue: deque[ViewerEvent] = deque()
        self._handlers: dict[type, Callable[[Any], Any]] = {
            DocumentUpdated: self._handle_document_updated,
            NodeActivated: self._handle_node_activated,
            SearchChanged: self._handle_search_changed,
            LayoutChanged: self._handle_layout_changed,
            ExportRequested: self._handle_export_requested,
        }

    def open(self, text: str) -> bool:
        """Initial load; same path as any later update."""
        return self.on_document_updated(text)

    def post(self, event: ViewerEvent) -> None:
        """Queue an event for run_pending."""
        if type(event) not in self._handlers:
            raise TypeError(f"Unsupported event: {type(event).__name__}")
        self._queue.append(event)

    def run_pending(self) -> list[Any]:
        """Handle queued events in arrival order; returns each handler's result."""
        results = []
        while self._queue:
            results.append(self.dispatch(self._queue.popleft()))
        return results

    @property
    def pending(self) -> int:
        return len(self._queue)

    def dispatch(self, event: ViewerEvent) -> Any:
        """Handle one event immediately."""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported event: {type(event).__name__}")
        return handler(event)

    def on_document_updated(self, text: str) -> bool:
        """Rebuild and re-render from new document text.

        Returns:
            True when the update was applied, False when it was rejected as
            malformed (the previous scene is kept and the status shows why)
        """
        try:
            model = self.parser.build(text, self.source_name)
        except MalformedDocument as e:
            message = f"Parse error: {e}"
            logger.warning(f"Rejected update for {self.source_name}: {e}")
            # Nothing rendered yet: show the error on the scene itself
            if self.scene is None or self.scene.model is None:
                self.scene = self.engine.show_error(self.scene, message)
            self.status.set_error(message)
            return False

        self.model = model
        self.scene = self.engine.render(model, scene=self.scene)
        self.status.clear()
        self.status.summary = self.scene.summary()
        logger.info(f"Applied update for {self.source_name}: {self.status.summary}")
        return True

    def _handle_document_updated(self, event: DocumentUpdated) -> bool:
        return self.on_document_updated(event.text)

    def _handle_node_activated(self, event: NodeActivated) -> dict[str, str]:
        return self.controller.on_node_activated(event.node_id)

    def _handle_search_changed(self, event: SearchChanged) -> list[str]:
        return self.controller.select_by_id(self.scene, event.query)

    def _handle_layout_changed(self, event: LayoutChanged) -> Scene | None:
        return self.controller.set_layout(self.scene, event.layout)

    def _handle_export_requested(self, event: ExportRequested) -> bytes | None:
        return self.controller.export_image(self.scene, event.format)
