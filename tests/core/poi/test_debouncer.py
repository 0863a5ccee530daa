# tests/core/poi/test_debouncer.py
"""
Тесты отменяемого таймера.
"""

from __future__ import annotations

import asyncio

import pytest

from src.core.poi.debouncer import DebounceTimer


def make_timer(scheduler, delay_ms: int = 300) -> DebounceTimer:
    return DebounceTimer(delay_ms, after=scheduler.after, after_cancel=scheduler.after_cancel)


class TestDebounceTimer:
    """Тесты DebounceTimer."""

    def test_fires_after_delay(self, scheduler) -> None:
        timer = make_timer(scheduler)
        calls: list[int] = []

        timer.schedule(lambda: calls.append(1))
        scheduler.advance(299)
        assert calls == []
        assert timer.pending

        scheduler.advance(1)
        assert calls == [1]
        assert not timer.pending

    def test_reschedule_cancels_previous(self, scheduler) -> None:
        """Каждый schedule() перезапускает интервал."""
        timer = make_timer(scheduler)
        calls: list[str] = []

        timer.schedule(lambda: calls.append("first"))
        scheduler.advance(200)
        timer.schedule(lambda: calls.append("second"))
        scheduler.advance(200)
        assert calls == []

        scheduler.advance(100)
        assert calls == ["second"]
        assert scheduler.cancelled == [1]

    def test_cancelled_callback_ignored_even_if_scheduler_runs_it(self, recording_scheduler) -> None:
        """Планировщик, который только записывает отмену, не приводит к лишнему вызову."""
        timer = make_timer(recording_scheduler)
        calls: list[str] = []

        timer.schedule(lambda: calls.append("stale"))
        timer.schedule(lambda: calls.append("fresh"))
        recording_scheduler.advance(300)

        assert calls == ["fresh"]

    def test_cancel_without_pending_is_noop(self, scheduler) -> None:
        timer = make_timer(scheduler)

        timer.cancel()

        assert scheduler.cancelled == []
        assert not timer.pending

    def test_zero_delay(self, scheduler) -> None:
        """Нулевой интервал: колбэк срабатывает на следующем шаге планировщика."""
        timer = make_timer(scheduler, delay_ms=0)
        calls: list[int] = []

        timer.schedule(lambda: calls.append(1))
        assert calls == []
        scheduler.advance(0)
        assert calls == [1]

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(ValueError):
            DebounceTimer(-1)

    @pytest.mark.asyncio
    async def test_default_scheduler_uses_event_loop(self) -> None:
        """Без подмены используется loop.call_later."""
        timer = DebounceTimer(10)
        fired = asyncio.Event()

        timer.schedule(fired.set)
        await asyncio.wait_for(fired.wait(), timeout=1.0)

        assert not timer.pending

    @pytest.mark.asyncio
    async def test_default_scheduler_cancel(self) -> None:
        timer = DebounceTimer(10)
        calls: list[int] = []

        timer.schedule(lambda: calls.append(1))
        timer.cancel()
        await asyncio.sleep(0.05)

        assert calls == []
