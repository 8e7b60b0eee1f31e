"""Unit tests for trailing-edge debouncing."""

from unittest.mock import MagicMock

from techgraph.config import InteractionSettings
from techgraph.core.types import Viewport
from techgraph.interaction.clock import VirtualClock
from techgraph.interaction.debounce import Debouncer, InteractionCoordinator


class TestDebouncer:
    def test_burst_collapses_to_last_value(self):
        clock = VirtualClock()
        handler = MagicMock()
        debounced = Debouncer(handler, 300, clock)

        for text in ["r", "re", "rea", "reac", "react"]:
            debounced(text)
            clock.advance(100)
        handler.assert_not_called()

        clock.advance(200)
        handler.assert_called_once_with("react")

    def test_no_leading_edge_call(self):
        clock = VirtualClock()
        handler = MagicMock()
        debounced = Debouncer(handler, 300, clock)

        debounced("a")
        clock.advance(299)

        handler.assert_not_called()
        assert debounced.pending

    def test_spaced_calls_each_fire(self):
        clock = VirtualClock()
        handler = MagicMock()
        debounced = Debouncer(handler, 300, clock)

        debounced("a")
        clock.advance(300)
        debounced("b")
        clock.advance(300)

        assert [c.args[0] for c in handler.call_args_list] == ["a", "b"]

    def test_cancel_drops_pending_call(self):
        clock = VirtualClock()
        handler = MagicMock()
        debounced = Debouncer(handler, 300, clock)

        debounced("a")
        debounced.cancel()
        clock.advance(1000)

        handler.assert_not_called()
        assert not debounced.pending

    def test_flush_fires_immediately(self):
        clock = VirtualClock()
        handler = MagicMock()
        debounced = Debouncer(handler, 300, clock)

        debounced("a")
        debounced.flush()
        handler.assert_called_once_with("a")

        clock.advance(1000)
        handler.assert_called_once()

    def test_flush_without_pending_call_is_noop(self):
        handler = MagicMock()
        Debouncer(handler, 300, VirtualClock()).flush()
        handler.assert_not_called()


class TestInteractionCoordinator:
    def test_channels_are_independent(self):
        clock = VirtualClock()
        on_search, on_resize = MagicMock(), MagicMock()
        coordinator = InteractionCoordinator(clock, on_search, on_resize)

        coordinator.submit_search("py")
        coordinator.submit_resize(Viewport(width=1000, height=700))
        clock.advance(250)

        on_resize.assert_called_once_with(Viewport(width=1000, height=700))
        on_search.assert_not_called()

        clock.advance(50)
        on_search.assert_called_once_with("py")

    def test_uses_configured_windows(self):
        settings = InteractionSettings(search_debounce_ms=50, resize_debounce_ms=10)
        coordinator = InteractionCoordinator(VirtualClock(), MagicMock(), MagicMock(), settings)
        assert coordinator.search.delay_ms == 50
        assert coordinator.resize.delay_ms == 10

    def test_cancel_all(self):
        clock = VirtualClock()
        on_search, on_resize = MagicMock(), MagicMock()
        coordinator = InteractionCoordinator(clock, on_search, on_resize)

        coordinator.submit_search("py")
        coordinator.submit_resize(Viewport())
        coordinator.cancel_all()
        clock.advance(1000)

        on_search.assert_not_called()
        on_resize.assert_not_called()
