"""
Layout simulator.

Wraps the pure ``step`` function with scheduling:

- ``restart`` discards the current simulation and seeds a new one. The
  previous tick schedule is cancelled first, so only one simulation ever
  ticks at a time.
- While RUNNING, a tick is scheduled on the clock every
  ``tick_interval_ms``; each tick notifies the position listeners.
- Once alpha falls below ``alpha_min`` the simulator goes IDLE and
  positions stay frozen until the next restart or drag.
"""

import logging
from enum import StrEnum
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..config import MAX_TICKS, LayoutSettings
from ..core.types import Edge, Node, Point, Viewport
from ..interaction.clock import Clock, Timer
from .forces import SimulationState, build_state, step

logger = logging.getLogger(__name__)

TickListener = Callable[[Dict[str, Point]], None]


class SimulationStatus(StrEnum):
    IDLE = "idle"
    RUNNING = "running"


class LayoutSimulator:
    """
    Owns the one active SimulationState.

    Other components read positions through ``positions`` or a tick
    listener; the only write access from outside is pin/unpin (drag).
    """

    def __init__(self, clock: Clock, settings: Optional[LayoutSettings] = None):
        self.settings = settings or LayoutSettings()
        self._timer = Timer(clock)
        self._state: Optional[SimulationState] = None
        self._status = SimulationStatus.IDLE
        self._listeners: List[TickListener] = []
        self._dragging: set[str] = set()

    @property
    def state(self) -> Optional[SimulationState]:
        return self._state

    @property
    def status(self) -> SimulationStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status == SimulationStatus.RUNNING

    @property
    def alpha(self) -> float:
        return self._state.alpha if self._state else 0.0

    @property
    def positions(self) -> Dict[str, Point]:
        return self._state.positions if self._state else {}

    def on_tick(self, listener: TickListener) -> None:
        self._listeners.append(listener)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def restart(
        self,
        nodes: Sequence[Node],
        edges: Iterable[Edge],
        viewport: Viewport,
        carry_positions: bool = True,
    ) -> None:
        """
        Replace the simulation with one over ``nodes``/``edges``.

        Nodes that were already laid out keep their last position when
        ``carry_positions`` is set. An empty node list leaves the simulator
        IDLE with no positions.

        Nodes being dragged stay pinned under the pointer and keep the
        simulation warm, as long as they are still in ``nodes``.
        """
        self._timer.cancel_pending()
        previous = self.positions if carry_positions else {}
        pins = self._drag_pins()
        node_ids = [node.id for node in nodes]
        self._state = build_state(node_ids, edges, viewport.center, self.settings, previous)

        self._dragging = set(pins).intersection(node_ids)
        for node_id in self._dragging:
            self._state = self._state.with_pin(node_id, pins[node_id])
        if self._dragging:
            self._state = self._state.with_alpha_target(self.settings.drag_alpha_target)

        if not self._state.bodies:
            self._status = SimulationStatus.IDLE
            logger.debug("Simulation restarted with no nodes; staying idle")
            return

        logger.debug(
            f"Simulation restarted: {len(self._state.bodies)} nodes, "
            f"{len(self._state.links)} links"
        )
        self._status = SimulationStatus.RUNNING
        self._schedule()

    def stop(self) -> None:
        """Stop ticking without discarding positions."""
        self._timer.cancel_pending()
        self._status = SimulationStatus.IDLE

    def tick(self, count: int = 1) -> Optional[SimulationState]:
        """Run ``count`` ticks synchronously (stops early once idle)."""
        for _ in range(count):
            if not self._advance():
                break
        return self._state

    def run_until_idle(self, max_ticks: int = MAX_TICKS) -> int:
        """
        Tick synchronously until the simulator goes idle.

        Returns the number of ticks run.
        """
        self._timer.cancel_pending()
        ticks = 0
        while ticks < max_ticks and self._advance():
            ticks += 1
        if self.is_running:
            logger.warning(f"Layout did not settle within {max_ticks} ticks (alpha={self.alpha:.4f})")
            self._schedule()
        return ticks

    def _schedule(self) -> None:
        self._timer.schedule(self._on_timer, self.settings.tick_interval_ms)

    def _on_timer(self) -> None:
        if self._advance() and self.is_running:
            self._schedule()

    def _advance(self) -> bool:
        """One tick. Returns False when there was nothing to run."""
        if self._state is None or not self._state.bodies or not self.is_running:
            return False

        self._state = step(self._state)
        if self._state.converged:
            self._status = SimulationStatus.IDLE
            self._timer.cancel_pending()
            logger.debug(f"Simulation idle after {self._state.tick} ticks")

        positions = self._state.positions
        for listener in self._listeners:
            listener(positions)
        return True

    def _reheat(self, target: float) -> None:
        self._state = self._state.with_alpha_target(target)
        if not self.is_running:
            self._status = SimulationStatus.RUNNING
            self._schedule()

    # =========================================================================
    # Pinning (drag)
    # =========================================================================

    def pin(self, node_id: str, position: Point) -> None:
        """Hold a node fixed at ``position`` until unpinned."""
        self._require_state()
        self._state = self._state.with_pin(node_id, position)

    def unpin(self, node_id: str) -> None:
        self._require_state()
        self._state = self._state.with_pin(node_id, None)

    def drag_start(self, node_id: str, position: Optional[Point] = None) -> None:
        self._require_state()
        if position is None:
            position = self._state.bodies[self._state.index_of(node_id)].position
        self.pin(node_id, position)
        if not self._dragging:
            self._reheat(self.settings.drag_alpha_target)
        self._dragging.add(node_id)

    def drag_move(self, node_id: str, position: Point) -> None:
        if node_id not in self._dragging:
            self.drag_start(node_id, position)
            return
        self.pin(node_id, position)

    def drag_end(self, node_id: str) -> None:
        self.unpin(node_id)
        self._dragging.discard(node_id)
        if not self._dragging:
            self._state = self._state.with_alpha_target(0.0)

    def _drag_pins(self) -> Dict[str, Point]:
        if self._state is None:
            return {}
        return {
            body.id: (body.fx, body.fy)
            for body in self._state.bodies if body.id in self._dragging and body.pinned
        }

    def _require_state(self) -> None:
        if self._state is None:
            raise KeyError("no active simulation")
