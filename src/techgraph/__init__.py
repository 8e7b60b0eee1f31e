"""
techgraph - interactive graph state and layout engine for technology
ecosystem maps.
"""

from .controller import GraphController
from .core import FatalLoadError, FilterState, GraphStore, InteractionError, Node, Edge
from .provider import JsonDataProvider, StaticDataProvider, load_store
from .render import RecordingSurface, RenderFrame, RenderSurface

__all__ = [
    "GraphController",
    "FatalLoadError", "FilterState", "GraphStore", "InteractionError", "Node", "Edge",
    "JsonDataProvider", "StaticDataProvider", "load_store",
    "RecordingSurface", "RenderFrame", "RenderSurface",
]
__version__ = "0.1.0"
