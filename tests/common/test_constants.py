# tests/common/test_constants.py
"""
Тесты для констант и перечислений.
"""

from __future__ import annotations

from src.common.constants import (
    CATEGORY_FILTER_ALL,
    MAX_RATING_STARS,
    MIN_RATING_STARS,
    LocationCategory,
    LocationType,
    TypeMsg,
    ZoomBand,
)


class TestEnums:
    def test_location_categories(self) -> None:
        assert [c.value for c in LocationCategory] == ["grocery", "restaurant-bar", "other"]

    def test_location_types(self) -> None:
        assert LocationType("temporary") is LocationType.TEMPORARY

    def test_zoom_bands(self) -> None:
        assert {band.value for band in ZoomBand} == {"cleared", "held", "active"}

    def test_type_msg_is_str(self) -> None:
        assert TypeMsg.ERROR == "error"


class TestValues:
    def test_rating_range(self) -> None:
        assert (MIN_RATING_STARS, MAX_RATING_STARS) == (1, 5)

    def test_filter_all_is_not_a_category(self) -> None:
        assert CATEGORY_FILTER_ALL not in {c.value for c in LocationCategory}
