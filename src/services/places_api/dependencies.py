# src/services/places_api/dependencies.py
"""
Dependency Injection для Places API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.locations.service import FavoriteService, LocationService
    from src.core.poi.provider import OverpassPoiProvider
    from src.core.reviews.service import CommentService, RatingService
    from src.core.users.service import UserService
    from src.infra.postgrest import PostgrestClient


# Синглтоны
_user_service: "UserService | None" = None
_location_service: "LocationService | None" = None
_favorite_service: "FavoriteService | None" = None
_comment_service: "CommentService | None" = None
_rating_service: "RatingService | None" = None
_poi_provider: "OverpassPoiProvider | None" = None


async def init_dependencies(
    client: "PostgrestClient",
    poi_provider: "OverpassPoiProvider",
) -> None:
    """Инициализировать сервисы при старте приложения."""
    global _user_service, _location_service, _favorite_service
    global _comment_service, _rating_service, _poi_provider

    from src.core.locations.service import FavoriteService, LocationService
    from src.core.reviews.service import CommentService, RatingService
    from src.core.users.service import UserService

    _user_service = UserService(client)
    _location_service = LocationService(client, _user_service)
    _favorite_service = FavoriteService(client, _user_service)
    _comment_service = CommentService(client)
    _rating_service = RatingService(client)
    _poi_provider = poi_provider


def get_user_service() -> "UserService":
    """Получить сервис пользователей."""
    if _user_service is None:
        raise RuntimeError("UserService не инициализирован. Вызовите init_dependencies()")
    return _user_service


def get_location_service() -> "LocationService":
    """Получить сервис мест."""
    if _location_service is None:
        raise RuntimeError("LocationService не инициализирован. Вызовите init_dependencies()")
    return _location_service


def get_favorite_service() -> "FavoriteService":
    """Получить сервис избранного."""
    if _favorite_service is None:
        raise RuntimeError("FavoriteService не инициализирован. Вызовите init_dependencies()")
    return _favorite_service


def get_comment_service() -> "CommentService":
    """Получить сервис комментариев."""
    if _comment_service is None:
        raise RuntimeError("CommentService не инициализирован. Вызовите init_dependencies()")
    return _comment_service


def get_rating_service() -> "RatingService":
    """Получить сервис оценок."""
    if _rating_service is None:
        raise RuntimeError("RatingService не инициализирован. Вызовите init_dependencies()")
    return _rating_service


def get_poi_provider() -> "OverpassPoiProvider":
    """Получить провайдер POI."""
    if _poi_provider is None:
        raise RuntimeError("POI провайдер не инициализирован. Вызовите init_dependencies()")
    return _poi_provider


async def cleanup_dependencies() -> None:
    """Очистить ресурсы при остановке приложения."""
    global _user_service, _location_service, _favorite_service
    global _comment_service, _rating_service, _poi_provider

    if _poi_provider is not None:
        await _poi_provider.close()
    _user_service = None
    _location_service = None
    _favorite_service = None
    _comment_service = None
    _rating_service = None
    _poi_provider = None
