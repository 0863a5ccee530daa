# src/core/poi/debouncer.py
"""
Отменяемый таймер для дебаунса по заднему фронту.

Планировщик внедряется через after/after_cancel, по умолчанию
используется loop.call_later текущего event loop.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

AfterFn = Callable[[int, Callable[[], None]], object]
AfterCancelFn = Callable[[object], None]


def _loop_after(delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
    loop = asyncio.get_running_loop()
    return loop.call_later(delay_ms / 1000.0, callback)


def _loop_after_cancel(handle: object) -> None:
    if isinstance(handle, asyncio.TimerHandle):
        handle.cancel()


class DebounceTimer:
    """
    Держит не более одного запланированного колбэка.

    Каждый schedule() отменяет предыдущий. Отменённый колбэк не выполнится,
    даже если планировщик всё же его вызовет: у каждого запуска свой токен.
    """

    def __init__(
        self,
        delay_ms: int,
        *,
        after: Optional[AfterFn] = None,
        after_cancel: Optional[AfterCancelFn] = None,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms не может быть отрицательным")
        self.delay_ms = int(delay_ms)
        self._after = after or _loop_after
        self._after_cancel = after_cancel or _loop_after_cancel
        self._handle: object | None = None
        self._token = 0

    @property
    def pending(self) -> bool:
        """Есть ли запланированный и не отменённый колбэк."""
        return self._handle is not None

    def schedule(self, callback: Callable[[], None]) -> object:
        """Перезапускает таймер: предыдущий колбэк отменяется."""
        self.cancel()
        self._token += 1
        token = self._token

        def fire() -> None:
            if token != self._token:
                return
            self._handle = None
            callback()

        self._handle = self._after(self.delay_ms, fire)
        return self._handle

    def cancel(self) -> None:
        """Отменяет запланированный колбэк, если он есть."""
        self._token += 1
        handle = self._handle
        self._handle = None
        if handle is not None:
            self._after_cancel(handle)
