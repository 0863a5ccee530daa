# tests/core/poi/test_models.py
"""
Тесты моделей слоя POI.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.core.poi.models import PointOfInterest, ViewportBounds


class TestViewportBounds:
    """Тесты ViewportBounds."""

    def test_from_leaflet(self) -> None:
        raw = {
            "_southWest": {"lat": 52.50, "lng": 13.38},
            "_northEast": {"lat": 52.53, "lng": 13.42},
        }

        viewport = ViewportBounds.from_leaflet(raw)

        assert viewport == ViewportBounds(north=52.53, south=52.50, east=13.42, west=13.38)

    def test_from_leaflet_world_view(self) -> None:
        raw = {
            "_southWest": {"lat": -95.0, "lng": -250.0},
            "_northEast": {"lat": 98.0, "lng": 250.0},
        }

        viewport = ViewportBounds.from_leaflet(raw)

        assert viewport == ViewportBounds(north=90, south=-90, east=180, west=-180)

    def test_from_leaflet_crossing_antimeridian(self) -> None:
        raw = {
            "_southWest": {"lat": 64.0, "lng": 170.0},
            "_northEast": {"lat": 66.0, "lng": 188.0},
        }

        viewport = ViewportBounds.from_leaflet(raw)

        assert (viewport.west, viewport.east) == (170.0, 180.0)

    def test_from_leaflet_after_full_wrap(self) -> None:
        raw = {
            "_southWest": {"lat": 52.50, "lng": 373.38},
            "_northEast": {"lat": 52.53, "lng": 373.42},
        }

        viewport = ViewportBounds.from_leaflet(raw)

        assert viewport.west == pytest.approx(13.38)
        assert viewport.east == pytest.approx(13.42)

    def test_from_leaflet_western_wrap(self) -> None:
        raw = {
            "_southWest": {"lat": 20.0, "lng": -200.0},
            "_northEast": {"lat": 22.0, "lng": -190.0},
        }

        viewport = ViewportBounds.from_leaflet(raw)

        assert viewport.west == pytest.approx(160.0)
        assert viewport.east == pytest.approx(170.0)

    def test_south_above_north_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ViewportBounds(north=10, south=20, east=1, west=0)

    @pytest.mark.parametrize("field, value", [("north", 91), ("south", -91), ("east", 181), ("west", -181)])
    def test_out_of_range_rejected(self, field: str, value: float) -> None:
        values = {"north": 10, "south": 0, "east": 10, "west": 0, field: value}
        if field == "south":
            values["north"] = 0
        with pytest.raises(ValidationError):
            ViewportBounds(**values)

    def test_frozen(self) -> None:
        viewport = ViewportBounds(north=1, south=0, east=1, west=0)
        with pytest.raises(ValidationError):
            viewport.north = 2


class TestPointOfInterest:
    """Тесты PointOfInterest."""

    def test_equality_by_value(self) -> None:
        a = PointOfInterest(id="node/1", name="Cafe", category="cafe", latitude=1, longitude=2)
        b = PointOfInterest(id="node/1", name="Cafe", category="cafe", latitude=1, longitude=2)

        assert a == b
        assert hash(a) == hash(b)
