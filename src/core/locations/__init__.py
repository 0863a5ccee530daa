# src/core/locations/__init__.py
"""
Домен мест и избранного.
"""

from src.core.locations.models import Location, LocationCreateDTO
from src.core.locations.repository import FavoriteRepository, LocationRepository
from src.core.locations.service import FavoriteService, LocationService

__all__ = [
    "Location",
    "LocationCreateDTO",
    "LocationRepository",
    "FavoriteRepository",
    "LocationService",
    "FavoriteService",
]
