"""
Input coalescing.

Bursty input (search keystrokes, viewport resizes) is collapsed into one
trailing call per burst: every call restarts the quiescence window and only
the last argument reaches the handler. There is no leading-edge call and no
maximum wait.
"""

import logging
from typing import Callable, Generic, Optional, TypeVar

from ..config import InteractionSettings
from ..core.types import Viewport
from .clock import Clock, Timer

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()


class Debouncer(Generic[T]):
    """Trailing-edge debounce around ``handler``."""

    def __init__(self, handler: Callable[[T], None], delay_ms: float, clock: Clock, name: str = ""):
        self._handler = handler
        self._delay_ms = delay_ms
        self._timer = Timer(clock)
        self._value = _UNSET
        self.name = name or getattr(handler, "__name__", "debounced")

    @property
    def delay_ms(self) -> float:
        return self._delay_ms

    @property
    def pending(self) -> bool:
        return self._timer.pending

    def __call__(self, value: T) -> None:
        self._value = value
        self._timer.schedule(self._fire, self._delay_ms)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        self._timer.cancel_pending()
        self._value = _UNSET

    def flush(self) -> None:
        """Run the pending call immediately."""
        if self._timer.pending:
            self._timer.cancel_pending()
            self._fire()

    def _fire(self) -> None:
        value, self._value = self._value, _UNSET
        if value is _UNSET:
            return
        logger.debug(f"{self.name}: firing after {self._delay_ms:.0f}ms quiet")
        self._handler(value)


class InteractionCoordinator:
    """
    Holds the two independent debounce channels.

    - search: text typed into the search box
    - resize: viewport size reported by the render surface
    """

    def __init__(
        self,
        clock: Clock,
        on_search: Callable[[str], None],
        on_resize: Callable[[Viewport], None],
        settings: Optional[InteractionSettings] = None,
    ):
        settings = settings or InteractionSettings()
        self.search = Debouncer(on_search, settings.search_debounce_ms, clock, name="search")
        self.resize = Debouncer(on_resize, settings.resize_debounce_ms, clock, name="resize")

    def submit_search(self, text: str) -> None:
        self.search(text)

    def submit_resize(self, viewport: Viewport) -> None:
        self.resize(viewport)

    def cancel_all(self) -> None:
        self.search.cancel()
        self.resize.cancel()
