# src/core/poi/zoom_gate.py
"""
Классификация масштаба карты по диапазонам слоя POI.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.common.constants import ZoomBand


DEFAULT_CLEAR_ZOOM = 12
DEFAULT_ACTIVE_ZOOM = 15


@dataclass(frozen=True)
class ZoomGate:
    """
    Чистая функция масштаб -> диапазон.

    Нижние границы включительны: zoom == clear_threshold это HELD,
    zoom == active_threshold это ACTIVE. При равных порогах HELD пуст.
    """

    clear_threshold: float = DEFAULT_CLEAR_ZOOM
    active_threshold: float = DEFAULT_ACTIVE_ZOOM

    def __post_init__(self) -> None:
        if self.clear_threshold > self.active_threshold:
            raise ValueError(
                f"clear_threshold ({self.clear_threshold}) > active_threshold ({self.active_threshold})"
            )

    @classmethod
    def from_settings(cls) -> "ZoomGate":
        """Создаёт гейт с порогами из конфига."""
        from src.config import settings

        return cls(
            clear_threshold=settings.poi.POI_CLEAR_ZOOM,
            active_threshold=settings.poi.POI_ACTIVE_ZOOM,
        )

    def classify(self, zoom: float) -> ZoomBand:
        if zoom < self.clear_threshold:
            return ZoomBand.CLEARED
        if zoom < self.active_threshold:
            return ZoomBand.HELD
        return ZoomBand.ACTIVE
