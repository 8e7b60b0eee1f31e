"""
Graph Controller - orchestrates filtering, layout and selection.

Data flows one way per interaction:

    input event -> (debounce) -> state change -> compute_visible
        -> LayoutSimulator.restart -> per-tick frames to the surface

Selection changes skip the layout entirely and only re-emit a frame with
the new highlight set.

Every public handler runs inside ``interaction_boundary``: an
InteractionError (or any unexpected failure) is logged and dropped. Filter
and viewport changes are committed only once the layout has restarted on
them, so a failure before that point leaves the previous state in place. A
failing render surface does not roll anything back.
"""

import functools
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from .config import Settings
from .core.errors import FatalLoadError, InteractionError
from .core.filtering import VisibleGraph, compute_visible, normalize_group
from .core.store import GraphStore
from .core.types import CategoryMeta, FilterState, Point, SelectionState, Viewport
from .interaction.clock import Clock
from .interaction.debounce import InteractionCoordinator
from .interaction.selection import HighlightSet, SelectionController, highlight_set
from .layout.simulation import LayoutSimulator
from .render import FrameReason, RenderFrame, RenderSurface

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


def interaction_boundary(method: F) -> F:
    """Catch and log failures of a single event handler."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except FatalLoadError:
            raise
        except InteractionError as e:
            logger.warning(f"{method.__name__}: {e}")
        except Exception:
            logger.exception(f"Unexpected error in {method.__name__}")
        return None

    return wrapper  # type: ignore[return-value]


@dataclass
class GraphControllerState:
    """Explicit state aggregate owned by the controller."""
    filter: FilterState = field(default_factory=FilterState)
    viewport: Viewport = field(default_factory=Viewport)
    visible: VisibleGraph = field(default_factory=VisibleGraph)


class GraphController:
    """
    Owns FilterState/SelectionState and drives the engine.

    Public surface: ``initialize``, ``set_filter``, ``set_search_term``,
    ``select_node``, ``on_resize`` plus the render surface callbacks
    (``on_node_activate``, ``on_background_activate``, hover and drag).
    """

    def __init__(self, surface: RenderSurface, clock: Clock, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.surface = surface
        self.store: Optional[GraphStore] = None
        self.state = GraphControllerState()
        self.selection = SelectionController()
        self.simulator = LayoutSimulator(clock, self.settings.layout)
        self.coordinator = InteractionCoordinator(
            clock,
            on_search=self._apply_search_term,
            on_resize=self._apply_resize,
            settings=self.settings.interaction,
        )
        self.selection.subscribe(self._on_selection_changed)
        self.simulator.on_tick(self._on_tick)

    # =========================================================================
    # Public API
    # =========================================================================

    def initialize(self, store: GraphStore, category_meta: Optional[CategoryMeta] = None) -> None:
        """
        Attach a loaded store and render the first frame.

        When ``category_meta`` is given it replaces the store's categories;
        nodes whose group it does not describe are dropped with a warning,
        along with their edges.

        Raises:
            FatalLoadError: If no nodes remain. Nothing is kept.
        """
        if category_meta is not None and category_meta != store.categories:
            store = store.with_categories(category_meta)
        if store.node_count == 0:
            raise FatalLoadError("Dataset contains no usable nodes")

        self.coordinator.cancel_all()
        self.store = store
        self.state = GraphControllerState(viewport=self.state.viewport)
        self.selection.prune((), notify=False)
        self._recompute(FrameReason.INIT)
        logger.info(f"Controller initialized with {store.node_count} nodes")

    @property
    def is_initialized(self) -> bool:
        return self.store is not None

    @property
    def highlight(self) -> HighlightSet:
        return highlight_set(self.selection.focal_id, self.state.visible.edges)

    @interaction_boundary
    def set_filter(self, group: Optional[str]) -> None:
        self._require_store()
        group = normalize_group(group)
        if group == self.state.filter.active_group:
            return
        self._recompute(FrameReason.FILTER, self.state.filter.model_copy(update={"active_group": group}))

    @interaction_boundary
    def set_search_term(self, text: str) -> None:
        """Queue a search; applied once typing pauses for the debounce window."""
        self._require_store()
        self.coordinator.submit_search(text or "")

    @interaction_boundary
    def select_node(self, node_id: str) -> None:
        """Navigate to a node (e.g. from the detail panel). Never toggles."""
        self._require_visible(node_id)
        self.selection.set_selected(node_id)

    @interaction_boundary
    def on_resize(self, width: float, height: float) -> None:
        self._require_store()
        if width <= 0 or height <= 0:
            raise InteractionError(f"Invalid viewport size {width}x{height}")
        self.coordinator.submit_resize(Viewport(width=width, height=height))

    # --- Render surface callbacks ---

    @interaction_boundary
    def on_node_activate(self, node_id: str) -> None:
        self._require_visible(node_id)
        self.selection.select(node_id)

    @interaction_boundary
    def on_background_activate(self) -> None:
        self.selection.clear()

    @interaction_boundary
    def on_node_hover_start(self, node_id: str) -> None:
        self._require_visible(node_id)
        self.selection.hover(node_id)

    @interaction_boundary
    def on_node_hover_end(self) -> None:
        self.selection.end_hover()

    @interaction_boundary
    def on_drag_start(self, node_id: str, position: Point) -> None:
        self._require_visible(node_id)
        self.simulator.drag_start(node_id, position)

    @interaction_boundary
    def on_drag_move(self, node_id: str, position: Point) -> None:
        self._require_visible(node_id)
        self.simulator.drag_move(node_id, position)

    @interaction_boundary
    def on_drag_end(self, node_id: str, position: Optional[Point] = None) -> None:
        self._require_visible(node_id)
        self.simulator.drag_end(node_id)

    # =========================================================================
    # Internals
    # =========================================================================

    @interaction_boundary
    def _apply_search_term(self, text: str) -> None:
        if text == self.state.filter.search_term:
            return
        self._recompute(FrameReason.SEARCH, self.state.filter.model_copy(update={"search_term": text}))

    @interaction_boundary
    def _apply_resize(self, viewport: Viewport) -> None:
        if viewport == self.state.viewport:
            return
        self._restart_layout(self.state.visible, viewport)
        self.state.viewport = viewport
        self._emit(FrameReason.RESIZE)

    def _recompute(self, reason: FrameReason, new_filter: Optional[FilterState] = None) -> None:
        if new_filter is None:
            new_filter = self.state.filter
        visible = compute_visible(self.store, new_filter)
        self._restart_layout(visible, self.state.viewport)
        self.state.filter = new_filter
        self.state.visible = visible
        self.selection.prune(visible.node_ids, notify=False)
        logger.debug(
            f"Visible graph: {len(visible.nodes)} nodes, {len(visible.edges)} edges "
            f"(group={self.state.filter.active_group!r}, search={self.state.filter.search_term!r})"
        )
        self._emit(reason)

    def _restart_layout(self, visible: VisibleGraph, viewport: Viewport) -> None:
        self.simulator.restart(visible.nodes, visible.edges, viewport)

    def _on_selection_changed(self, state: SelectionState) -> None:
        self._emit(FrameReason.SELECTION)

    @interaction_boundary
    def _on_tick(self, positions) -> None:
        self._emit(FrameReason.TICK)

    def _emit(self, reason: FrameReason) -> None:
        visible = self.state.visible
        frame = RenderFrame(
            positions=self.simulator.positions,
            edges=tuple(visible.edges),
            highlight=self.highlight,
            selection=self.selection.state,
            reason=reason,
            node_count=len(visible.nodes),
            edge_count=len(visible.edges),
            labels={node.id: node.display_label for node in visible.nodes},
        )
        self.surface.render_frame(frame)

    def _require_store(self) -> None:
        if self.store is None:
            raise InteractionError("Controller is not initialized")

    def _require_visible(self, node_id: str) -> None:
        self._require_store()
        if not isinstance(node_id, str) or not node_id.strip():
            raise InteractionError(f"Invalid node id: {node_id!r}")
        if not self.store.has_node(node_id):
            raise InteractionError(f"Unknown node: {node_id}")
        if node_id not in self.state.visible.node_ids:
            raise InteractionError(f"Node is not visible: {node_id}")
