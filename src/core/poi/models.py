# src/core/poi/models.py
"""
Модели данных слоя POI.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

LAT_LIMIT = 90.0
LNG_LIMIT = 180.0


def _clamp(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))


class ViewportBounds(BaseModel):
    """Видимая область карты (градусы)."""

    model_config = ConfigDict(frozen=True)

    north: float = Field(..., ge=-90.0, le=90.0, description="Северная граница")
    south: float = Field(..., ge=-90.0, le=90.0, description="Южная граница")
    east: float = Field(..., ge=-180.0, le=180.0, description="Восточная граница")
    west: float = Field(..., ge=-180.0, le=180.0, description="Западная граница")

    @model_validator(mode="after")
    def check_order(self) -> "ViewportBounds":
        """Южная граница не может лежать севернее северной."""
        if self.south > self.north:
            raise ValueError(f"south ({self.south}) > north ({self.north})")
        return self

    @classmethod
    def from_leaflet(cls, bounds: dict) -> "ViewportBounds":
        """
        Создаёт границы из результата Leaflet getBounds().

        Leaflet сериализует LatLngBounds как {"_southWest": {...}, "_northEast": {...}}
        и не заворачивает долготу: при мелком масштабе и после перехода через
        антимеридиан |lng| бывает больше 180. Широта обрезается до ±90,
        окно шире 360° превращается в весь мир, иначе центр окна сдвигается
        в [-180, 180] и края обрезаются.
        """
        south_west = bounds["_southWest"]
        north_east = bounds["_northEast"]
        south = _clamp(float(south_west["lat"]), LAT_LIMIT)
        north = _clamp(float(north_east["lat"]), LAT_LIMIT)
        west = float(south_west["lng"])
        east = float(north_east["lng"])

        if east - west >= 2 * LNG_LIMIT:
            west, east = -LNG_LIMIT, LNG_LIMIT
        else:
            center = (west + east) / 2
            shift = 2 * LNG_LIMIT * math.floor((center + LNG_LIMIT) / (2 * LNG_LIMIT))
            west = _clamp(west - shift, LNG_LIMIT)
            east = _clamp(east - shift, LNG_LIMIT)

        return cls(north=north, south=south, east=east, west=west)

    def as_overpass_bbox(self) -> str:
        """Строка bbox в порядке Overpass: south,west,north,east."""
        return f"{self.south},{self.west},{self.north},{self.east}"


class PointOfInterest(BaseModel):
    """Сторонняя точка интереса. Неизменяема."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Идентификатор у провайдера")
    name: str = Field(..., description="Название")
    category: str = Field(..., description="Категория (тег OSM)")
    latitude: float = Field(..., ge=-90.0, le=90.0, description="Широта")
    longitude: float = Field(..., ge=-180.0, le=180.0, description="Долгота")
