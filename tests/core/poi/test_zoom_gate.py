# tests/core/poi/test_zoom_gate.py
"""
Тесты классификации масштаба.
"""

from __future__ import annotations

import pytest

from src.common.constants import ZoomBand
from src.core.poi.zoom_gate import ZoomGate


class TestZoomGate:
    """Тесты ZoomGate."""

    @pytest.mark.parametrize(
        "zoom, expected",
        [
            (0, ZoomBand.CLEARED),
            (11, ZoomBand.CLEARED),
            (11.99, ZoomBand.CLEARED),
            (12, ZoomBand.HELD),
            (13.5, ZoomBand.HELD),
            (14.99, ZoomBand.HELD),
            (15, ZoomBand.ACTIVE),
            (18, ZoomBand.ACTIVE),
        ],
    )
    def test_default_thresholds(self, zoom: float, expected: ZoomBand) -> None:
        """Пороги по умолчанию 12 / 15, нижние границы включительны."""
        assert ZoomGate().classify(zoom) is expected

    def test_equal_thresholds_have_no_held_band(self) -> None:
        """При равных порогах диапазон HELD пуст."""
        gate = ZoomGate(clear_threshold=14, active_threshold=14)

        assert gate.classify(13.9) is ZoomBand.CLEARED
        assert gate.classify(14) is ZoomBand.ACTIVE

    def test_clear_above_active_rejected(self) -> None:
        with pytest.raises(ValueError):
            ZoomGate(clear_threshold=16, active_threshold=15)

    def test_classify_is_pure(self) -> None:
        """Повторная классификация даёт тот же результат."""
        gate = ZoomGate(10, 13)
        assert [gate.classify(z) for z in (9, 10, 13)] == [gate.classify(z) for z in (9, 10, 13)]

    def test_from_settings(self) -> None:
        """Пороги берутся из конфига."""
        from src.config import settings

        gate = ZoomGate.from_settings()

        assert gate.clear_threshold == settings.poi.POI_CLEAR_ZOOM
        assert gate.active_threshold == settings.poi.POI_ACTIVE_ZOOM
