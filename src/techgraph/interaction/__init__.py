"""
Interaction handling: scheduling, debouncing and selection.
"""

from .clock import AsyncioClock, Clock, Timer, VirtualClock
from .debounce import Debouncer, InteractionCoordinator
from .selection import HighlightSet, SelectionController, SelectionPhase, highlight_set

__all__ = [
    "AsyncioClock", "Clock", "Timer", "VirtualClock",
    "Debouncer", "InteractionCoordinator",
    "HighlightSet", "SelectionController", "SelectionPhase", "highlight_set",
]
