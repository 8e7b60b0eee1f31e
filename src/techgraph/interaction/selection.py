"""
Selection and hover tracking.

The controller is a small state machine over ``SelectionState``:

    EMPTY     nothing selected, nothing hovered
    HOVERING  a node is hovered, nothing selected
    SELECTED  a node is selected (hover may also be set)

Selection always wins over hover when deciding the focal node. Hover never
writes ``selected_id`` and selection never writes ``hovered_id``.
"""

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Callable, Collection, FrozenSet, Iterable, List, Optional, Tuple

from ..core.types import Edge, SelectionState

logger = logging.getLogger(__name__)

SelectionListener = Callable[[SelectionState], None]


class SelectionPhase(StrEnum):
    EMPTY = "empty"
    HOVERING = "hovering"
    SELECTED = "selected"


@dataclass(frozen=True)
class HighlightSet:
    """
    Focal node plus its direct neighbours, and the edges joining them.

    An empty set means nothing is emphasized and everything renders at
    default emphasis.
    """
    focal_id: Optional[str] = None
    nodes: FrozenSet[str] = field(default_factory=frozenset)
    edges: Tuple[Edge, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.focal_id is None

    def is_node_emphasized(self, node_id: str) -> bool:
        return self.is_empty or node_id in self.nodes

    def is_edge_emphasized(self, edge: Edge) -> bool:
        return self.is_empty or edge in self.edges


def highlight_set(focal_id: Optional[str], edges: Iterable[Edge]) -> HighlightSet:
    """
    Compute the strict one-hop neighbourhood of ``focal_id``.

    Only the given edges are considered (normally the visible ones), and
    only edges incident to the focal node are returned. Nodes two hops away
    are not included.
    """
    if focal_id is None:
        return HighlightSet()

    nodes = {focal_id}
    incident = []
    for edge in edges:
        if edge.touches(focal_id):
            nodes.add(edge.other_end(focal_id))
            incident.append(edge)
    return HighlightSet(focal_id=focal_id, nodes=frozenset(nodes), edges=tuple(incident))


def phase_of(state: SelectionState) -> SelectionPhase:
    if state.selected_id is not None:
        return SelectionPhase.SELECTED
    if state.hovered_id is not None:
        return SelectionPhase.HOVERING
    return SelectionPhase.EMPTY


class SelectionController:
    """
    Owns the current SelectionState and notifies listeners on change.

    Each operation computes the next state in one step and swaps it in, so
    listeners never observe an intermediate unselected state.
    """

    def __init__(self, state: Optional[SelectionState] = None):
        self._state = state or SelectionState()
        self._listeners: List[SelectionListener] = []

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def phase(self) -> SelectionPhase:
        return phase_of(self._state)

    @property
    def selected_id(self) -> Optional[str]:
        return self._state.selected_id

    @property
    def hovered_id(self) -> Optional[str]:
        return self._state.hovered_id

    @property
    def focal_id(self) -> Optional[str]:
        return self._state.focal_id

    def subscribe(self, listener: SelectionListener) -> None:
        self._listeners.append(listener)

    def select(self, node_id: str) -> SelectionState:
        """Toggle: selecting the selected node clears, any other replaces."""
        if self._state.selected_id == node_id:
            return self._transition(self._state.model_copy(update={"selected_id": None}))
        return self._transition(self._state.model_copy(update={"selected_id": node_id}))

    def set_selected(self, node_id: Optional[str]) -> SelectionState:
        """Select without toggling; repeated calls are no-ops."""
        return self._transition(self._state.model_copy(update={"selected_id": node_id}))

    def clear(self) -> SelectionState:
        return self.set_selected(None)

    def hover(self, node_id: Optional[str]) -> SelectionState:
        return self._transition(self._state.model_copy(update={"hovered_id": node_id}))

    def end_hover(self) -> SelectionState:
        return self.hover(None)

    def prune(self, visible_ids: Collection[str], notify: bool = True) -> SelectionState:
        """Forget selection or hover pointing at nodes that are no longer visible."""
        update = {}
        if self._state.selected_id is not None and self._state.selected_id not in visible_ids:
            update["selected_id"] = None
        if self._state.hovered_id is not None and self._state.hovered_id not in visible_ids:
            update["hovered_id"] = None
        if not update:
            return self._state
        return self._transition(self._state.model_copy(update=update), notify=notify)

    def highlight(self, edges: Iterable[Edge]) -> HighlightSet:
        return highlight_set(self.focal_id, edges)

    def _transition(self, new_state: SelectionState, notify: bool = True) -> SelectionState:
        if new_state == self._state:
            return self._state
        old_phase = self.phase
        self._state = new_state
        if old_phase != self.phase:
            logger.debug(f"Selection {old_phase} -> {self.phase}")
        if notify:
            for listener in self._listeners:
                listener(new_state)
        return new_state
