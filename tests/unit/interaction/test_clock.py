"""Unit tests for the scheduling primitives."""

import asyncio

import pytest

from techgraph.interaction.clock import AsyncioClock, Timer, VirtualClock


class TestVirtualClock:
    def test_runs_callbacks_in_due_order(self):
        clock = VirtualClock()
        calls = []
        clock.call_later(20, lambda: calls.append("late"))
        clock.call_later(10, lambda: calls.append("first"))
        clock.call_later(10, lambda: calls.append("second"))

        assert clock.advance(15) == 2
        assert calls == ["first", "second"]
        assert clock.now() == 15

        clock.advance(5)
        assert calls == ["first", "second", "late"]

    def test_cancelled_callbacks_do_not_run(self):
        clock = VirtualClock()
        calls = []
        handle = clock.call_later(10, lambda: calls.append(1))
        handle.cancel()

        assert clock.pending == 0
        assert clock.advance(100) == 0
        assert calls == []

    def test_callbacks_scheduled_while_advancing(self):
        clock = VirtualClock()
        calls = []

        def chain():
            calls.append(clock.now())
            if len(calls) < 3:
                clock.call_later(10, chain)

        clock.call_later(10, chain)
        clock.advance(100)

        assert calls == [10, 20, 30]

    def test_run_until_quiet(self):
        clock = VirtualClock()
        calls = []
        clock.call_later(500, lambda: calls.append(1))
        clock.call_later(1500, lambda: calls.append(2))

        assert clock.run_until_quiet() == 2
        assert clock.now() == 1500


class TestTimer:
    def test_schedule_replaces_pending_callback(self):
        clock = VirtualClock()
        timer = Timer(clock)
        calls = []

        timer.schedule(lambda: calls.append("old"), 10)
        timer.schedule(lambda: calls.append("new"), 10)
        clock.advance(50)

        assert calls == ["new"]
        assert not timer.pending

    def test_cancel_pending(self):
        clock = VirtualClock()
        timer = Timer(clock)
        calls = []

        timer.schedule(lambda: calls.append(1), 10)
        assert timer.pending
        timer.cancel_pending()
        clock.advance(50)

        assert calls == []
        assert not timer.pending


class TestAsyncioClock:
    def test_runs_on_event_loop(self):
        fired = []

        async def main():
            clock = AsyncioClock()
            clock.call_later(5, lambda: fired.append(True))
            await asyncio.sleep(0.05)

        asyncio.run(main())
        assert fired == [True]

    def test_requires_running_loop(self):
        with pytest.raises(RuntimeError):
            AsyncioClock()
