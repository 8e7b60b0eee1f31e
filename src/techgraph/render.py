"""
Render surface contract.

The engine never draws anything. It hands a ``RenderFrame`` to whatever
surface is attached (SVG canvas, terminal, test recorder) once per tick or
state change. The surface in turn forwards pointer/keyboard events to the
``GraphController`` callbacks.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Dict, List, Protocol, Tuple

from .config import NODE_RADIUS
from .core.types import Edge, Point, SelectionState
from .interaction.selection import HighlightSet


class FrameReason(StrEnum):
    INIT = "init"
    FILTER = "filter"
    SEARCH = "search"
    RESIZE = "resize"
    SELECTION = "selection"
    TICK = "tick"


@dataclass(frozen=True)
class RenderFrame:
    positions: Dict[str, Point]
    edges: Tuple[Edge, ...]
    highlight: HighlightSet
    selection: SelectionState
    reason: FrameReason
    node_count: int = 0
    edge_count: int = 0
    # Display labels by node id; ids without an entry are shown as-is
    labels: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reason": str(self.reason),
            "nodes": [
                {"id": node_id, "label": self.labels.get(node_id, node_id),
                 "x": x, "y": y, "radius": NODE_RADIUS,
                 "emphasized": self.highlight.is_node_emphasized(node_id)}
                for node_id, (x, y) in self.positions.items()
            ],
            "edges": [
                {"source": edge.source_id, "target": edge.target_id,
                 "strength": edge.strength,
                 "emphasized": self.highlight.is_edge_emphasized(edge)}
                for edge in self.edges
            ],
            "selected": self.selection.selected_id,
            "hovered": self.selection.hovered_id,
            "stats": {"nodes": self.node_count, "edges": self.edge_count},
        }


class RenderSurface(Protocol):
    def render_frame(self, frame: RenderFrame) -> None: ...


@dataclass
class RecordingSurface:
    """Keeps recent frames in memory. Used headless and in tests."""
    keep: int = 50
    frames: List[RenderFrame] = field(default_factory=list)
    frame_count: int = 0

    def render_frame(self, frame: RenderFrame) -> None:
        self.frame_count += 1
        self.frames.append(frame)
        if len(self.frames) > self.keep:
            del self.frames[0]

    @property
    def last_frame(self) -> RenderFrame | None:
        return self.frames[-1] if self.frames else None

    def reasons(self) -> List[FrameReason]:
        return [frame.reason for frame in self.frames]
