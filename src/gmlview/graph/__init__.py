"""Layout/render engine for gmlview.

Scenes are built from graph models by the RenderEngine, laid out by named
networkx-backed algorithms and serialized by exporters (PNG, Mermaid).
"""

from .engine import RenderEngine
from .export import ExporterRegistry, GraphExporter, MermaidExporter, PngExporter
from .layout import LayoutEngineFailure, LayoutRegistry
from .scene import ArrowShape, Bounds, Scene, SceneEdge, SceneNode, Viewport

__all__ = [
    "RenderEngine",
    "LayoutRegistry",
    "LayoutEngineFailure",
    "GraphExporter",
    "PngExporter",
    "MermaidExporter",
    "ExporterRegistry",
    "Scene",
    "SceneNode",
    "SceneEdge",
    "Viewport",
    "Bounds",
    "ArrowShape",
]
