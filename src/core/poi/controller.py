# src/core/poi/controller.py
"""
Контроллер слоя POI, привязанный к жизни одной карты.

Решает, когда загружать POI, когда держать уже загруженные
и когда очищать их, в зависимости от масштаба и перемещений карты.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from src.common.constants import ZoomBand
from src.common.logger import log_debug, log_error
from src.core.poi.debouncer import AfterCancelFn, AfterFn, DebounceTimer
from src.core.poi.models import PointOfInterest, ViewportBounds
from src.core.poi.zoom_gate import ZoomGate

PoiFetcher = Callable[[ViewportBounds], Awaitable[list[PointOfInterest]]]
ChangeCallback = Callable[[tuple[PointOfInterest, ...]], None]

DEFAULT_DEBOUNCE_MS = 300


class ProximityPoiController:
    """
    Состояния CLEARED / HELD / ACTIVE определяются масштабом (ZoomGate).

    - ACTIVE: каждое изменение viewport перезапускает дебаунс, по тишине
      запускается загрузка для последних границ.
    - HELD: загрузки нет, ранее загруженные POI остаются видимыми.
    - CLEARED: слот очищается, отображать нечего.

    Каждая загрузка получает номер поколения. Результат применяется,
    только если его поколение старше последнего *применённого*, а не
    последнего отправленного: если новейшая загрузка упала, более ранняя,
    ещё не завершённая, может успеть заполнить слот. Очистка слота делает
    устаревшими все уже отправленные загрузки.

    Границы могут быть неизвестны (None), если карта не смогла их отдать.
    Диапазон всё равно определяется по масштабу, пропускается только
    планирование загрузки.

    Ошибки загрузки логируются и дальше контроллера не уходят.
    """

    def __init__(
        self,
        fetch_pois: PoiFetcher,
        *,
        gate: ZoomGate | None = None,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        after: Optional[AfterFn] = None,
        after_cancel: Optional[AfterCancelFn] = None,
        on_change: Optional[ChangeCallback] = None,
        enabled: bool = True,
    ) -> None:
        self._fetch_pois = fetch_pois
        self._gate = gate or ZoomGate()
        self._timer = DebounceTimer(debounce_ms, after=after, after_cancel=after_cancel)
        self._on_change = on_change
        self._enabled = enabled

        self._band: ZoomBand | None = None
        self._slot: tuple[PointOfInterest, ...] = ()
        self._generation = 0
        self._applied_generation = 0
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        fetch_pois: PoiFetcher,
        **kwargs,
    ) -> "ProximityPoiController":
        """Создаёт контроллер с порогами и интервалом из конфига."""
        from src.config import settings

        return cls(
            fetch_pois,
            gate=ZoomGate.from_settings(),
            debounce_ms=settings.poi.POI_DEBOUNCE_MS,
            enabled=settings.poi.POI_ENABLED,
            **kwargs,
        )

    # -------------------------------------------------------------------------
    # Состояние
    # -------------------------------------------------------------------------

    @property
    def band(self) -> ZoomBand | None:
        """Текущий диапазон масштаба (None до mount)."""
        return self._band

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def cached_pois(self) -> tuple[PointOfInterest, ...]:
        """Содержимое слота, без учёта масштаба."""
        return self._slot

    @property
    def visible_pois(self) -> tuple[PointOfInterest, ...]:
        """Что должно быть нарисовано на карте сейчас."""
        if not self._enabled or self._band in (None, ZoomBand.CLEARED):
            return ()
        return self._slot

    @property
    def fetch_pending(self) -> bool:
        """Запланирована ли загрузка (идёт интервал тишины)."""
        return self._timer.pending

    @property
    def in_flight(self) -> int:
        """Количество незавершённых загрузок."""
        return len(self._tasks)

    # -------------------------------------------------------------------------
    # События карты
    # -------------------------------------------------------------------------

    def mount(self, zoom: float, bounds: Optional[ViewportBounds]) -> None:
        """Начальная оценка диапазона при появлении карты."""
        self.handle_viewport_change(zoom, bounds)

    def handle_viewport_change(self, zoom: float, bounds: Optional[ViewportBounds]) -> None:
        """
        Обработка moveend / zoomend.
        Вызывается только с итоговыми значениями, не на промежуточных кадрах.
        """
        if self._closed:
            return
        before = self.visible_pois
        self._band = self._gate.classify(zoom)

        if not self._enabled:
            self._timer.cancel()
            self._clear_slot()
        elif self._band is ZoomBand.CLEARED:
            self._timer.cancel()
            self._clear_slot()
        elif self._band is ZoomBand.HELD or bounds is None:
            self._timer.cancel()
        else:
            self._timer.schedule(lambda: self._on_quiet(bounds))

        self._notify_if_changed(before)

    def set_enabled(self, enabled: bool, zoom: float, bounds: Optional[ViewportBounds]) -> None:
        """Включает или выключает отображение POI (переключатель в интерфейсе)."""
        self._enabled = enabled
        self.handle_viewport_change(zoom, bounds)

    # -------------------------------------------------------------------------
    # Загрузка
    # -------------------------------------------------------------------------

    def _on_quiet(self, bounds: ViewportBounds) -> None:
        """Интервал тишины истёк."""
        if self._closed or not self._enabled or self._band is not ZoomBand.ACTIVE:
            return
        self._generation += 1
        task = asyncio.get_running_loop().create_task(self._run_fetch(self._generation, bounds))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_fetch(self, generation: int, bounds: ViewportBounds) -> None:
        try:
            result = await self._fetch_pois(bounds)
            pois = tuple(result)
            if not all(isinstance(poi, PointOfInterest) for poi in pois):
                raise TypeError("провайдер вернул не PointOfInterest")
        except Exception as e:
            await log_error(f"Ошибка загрузки POI (поколение {generation}): {e}")
            return

        if self._closed or generation <= self._applied_generation:
            await log_debug(f"Результат загрузки POI устарел (поколение {generation})")
            return

        before = self.visible_pois
        self._applied_generation = generation
        self._slot = pois
        await log_debug(f"POI обновлены: {len(pois)} шт. (поколение {generation})")
        self._notify_if_changed(before)

    def _clear_slot(self) -> None:
        self._slot = ()
        self._applied_generation = self._generation

    def _notify_if_changed(self, before: tuple[PointOfInterest, ...]) -> None:
        after = self.visible_pois
        if self._on_change is not None and after != before:
            self._on_change(after)

    # -------------------------------------------------------------------------
    # Жизненный цикл
    # -------------------------------------------------------------------------

    async def wait_idle(self) -> None:
        """Ждёт завершения всех отправленных загрузок."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Снимает таймер и незавершённые загрузки вместе с картой."""
        self._closed = True
        self._timer.cancel()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._slot = ()
