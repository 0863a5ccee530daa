# src/core/locations/service.py
"""
Сервисы мест и избранного.
"""

from __future__ import annotations

from typing import Any, Optional

from src.common.constants import (
    CATEGORY_FILTER_ALL,
    PG_FOREIGN_KEY_VIOLATION,
    LocationCategory,
    TypeMsg,
)
from src.common.logger import log_info, log_warning
from src.core.errors import ConflictError, NotFoundError, ValidationError
from src.core.locations.models import Location, LocationCreateDTO
from src.core.locations.repository import FavoriteRepository, LocationRepository
from src.core.users.service import UserService
from src.infra.postgrest import PostgrestClient, PostgrestError


def parse_location_id(value: Any) -> int:
    """
    Приводит ID места к int.
    Допустимы целые числа и строки с целым числом.

    Raises:
        ValidationError: Значение не является целым числом
    """
    if isinstance(value, bool):
        raise ValidationError("Valid locationId is required")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError("Valid locationId is required")


class LocationService:
    """Сервис мест."""

    def __init__(
        self,
        client: PostgrestClient,
        users: UserService,
        *,
        auto_approve: bool | None = None,
        one_per_user: bool | None = None,
        approved_only: bool | None = None,
    ) -> None:
        """
        Args:
            client: Клиент PostgREST
            users: Сервис пользователей (поиск автора по Telegram ID)
            auto_approve: Публиковать места без модерации
            one_per_user: Не более одного места на пользователя
            approved_only: Отдавать в списке только одобренные места
        """
        from src.config import settings

        self._repo = LocationRepository(client)
        self._users = users
        self._auto_approve = settings.places.LOCATIONS_AUTO_APPROVE if auto_approve is None else auto_approve
        self._one_per_user = settings.places.ONE_LOCATION_PER_USER if one_per_user is None else one_per_user
        self._approved_only = settings.places.LIST_APPROVED_ONLY if approved_only is None else approved_only

    async def list_locations(self, category: Optional[str] = None) -> list[Location]:
        """Места, новые первыми. Категория "all" равносильна отсутствию фильтра."""
        if category == CATEGORY_FILTER_ALL:
            category = None
        return await self._repo.list(category=category, approved_only=self._approved_only)

    async def create_location(self, dto: LocationCreateDTO) -> Location:
        """
        Создаёт место.

        Raises:
            ValidationError: Нет координат, названия или категории
            ConflictError: Пользователь уже добавил место (если включено ограничение)
        """
        if dto.latitude is None or dto.longitude is None or not dto.name or not dto.category:
            raise ValidationError("Missing required fields")

        try:
            category = LocationCategory(dto.category)
        except ValueError:
            raise ValidationError(f"Unknown category: {dto.category}")

        user_id = dto.user_id
        if dto.telegram_id is not None:
            author = await self._users.find_by_telegram_id(dto.telegram_id)
            user_id = author.id if author else None

        if self._one_per_user and user_id is not None:
            if await self._repo.count_by_user(user_id) > 0:
                raise ConflictError("User has already created a location")

        location = await self._repo.create({
            "name": dto.name,
            "description": dto.description,
            "latitude": dto.latitude,
            "longitude": dto.longitude,
            "category": category.value,
            "user_id": user_id,
            "type": dto.type.value,
            "is_approved": self._auto_approve,
            "website_url": dto.website_url,
            "image_url": dto.image_url,
            "schedules": dto.schedules,
        })
        await log_info(f"Место {location.id} создано пользователем {user_id}", type_msg=TypeMsg.DEBUG)
        return location


class FavoriteService:
    """Сервис избранного."""

    def __init__(self, client: PostgrestClient, users: UserService) -> None:
        self._repo = FavoriteRepository(client)
        self._locations = LocationRepository(client)
        self._users = users

    async def list_favorites(self, telegram_id: int | str) -> list[Location]:
        """Избранные места. Для незарегистрированного пользователя пустой список."""
        user = await self._users.find_by_telegram_id(telegram_id)
        if user is None:
            return []
        return await self._repo.list_for_user(user.id)

    async def add_favorite(self, telegram_id: int | str, location_id: Any) -> Optional[Location]:
        """
        Добавляет место в избранное и возвращает его.

        Raises:
            ValidationError: Некорректный ID места или нарушение внешнего ключа
            NotFoundError: Нет такого пользователя или места
        """
        parsed_id = parse_location_id(location_id)

        user = await self._users.find_by_telegram_id(telegram_id)
        if user is None:
            raise NotFoundError("User not found")

        if not await self._locations.exists(parsed_id):
            raise NotFoundError("Location not found")

        try:
            return await self._repo.add(user.id, parsed_id)
        except PostgrestError as e:
            if e.code == PG_FOREIGN_KEY_VIOLATION:
                await log_warning(f"Избранное: нарушение внешнего ключа ({e.message})")
                raise ValidationError("Invalid user or location reference") from e
            raise

    async def remove_favorite(self, telegram_id: int | str, location_id: Any) -> None:
        """Удаляет место из избранного. Для незарегистрированного пользователя ничего не делает."""
        parsed_id = parse_location_id(location_id)
        user = await self._users.find_by_telegram_id(telegram_id)
        if user is None:
            return
        await self._repo.remove(user.id, parsed_id)
