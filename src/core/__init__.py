# src/core/__init__.py
"""
Доменный слой (Core Domain).
Бизнес-логика мест, пользователей, отзывов и слоя POI.
"""

from src.core.errors import ConflictError, NotFoundError, PlacesError, ValidationError

__all__ = [
    "PlacesError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
]
