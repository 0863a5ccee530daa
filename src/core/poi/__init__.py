# src/core/poi/__init__.py
"""
Слой сторонних POI (OpenStreetMap).
Контроллер загрузки по масштабу карты, дебаунс и провайдер Overpass.
"""

from src.core.poi.models import PointOfInterest, ViewportBounds
from src.core.poi.zoom_gate import ZoomGate
from src.core.poi.debouncer import DebounceTimer
from src.core.poi.provider import (
    OverpassPoiProvider,
    PoiProviderError,
    get_category_color,
    get_category_icon,
)
from src.core.poi.controller import ProximityPoiController

__all__ = [
    "PointOfInterest",
    "ViewportBounds",
    "ZoomGate",
    "DebounceTimer",
    "OverpassPoiProvider",
    "PoiProviderError",
    "get_category_color",
    "get_category_icon",
    "ProximityPoiController",
]
