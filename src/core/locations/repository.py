# src/core/locations/repository.py
"""
Репозитории мест и избранного (таблицы locations, favorites).
"""

from __future__ import annotations

from typing import Any, Optional

from src.common.logger import log_error
from src.core.locations.models import Location
from src.infra.postgrest import Filters, PostgrestClient, PostgrestError, eq

LOCATIONS_TABLE = "locations"
FAVORITES_TABLE = "favorites"

# Вложенный ресурс места внутри записи избранного
FAVORITE_COLUMNS = (
    "id,location_id,"
    "locations(id,name,description,latitude,longitude,category,created_at,user_id)"
)


class LocationRepository:
    """Репозиторий мест."""

    def __init__(self, client: PostgrestClient) -> None:
        self._client = client

    async def list(
        self,
        *,
        category: str | None = None,
        approved_only: bool = False,
    ) -> list[Location]:
        """Места, новые первыми."""
        filters: Filters = {}
        if category:
            filters["category"] = eq(category)
        if approved_only:
            filters["is_approved"] = eq(True)

        try:
            rows = await self._client.select(
                LOCATIONS_TABLE, filters=filters, order="created_at.desc"
            )
        except PostgrestError as e:
            await log_error(f"Ошибка получения мест: {e.message}")
            raise
        return [Location.model_validate(row) for row in rows]

    async def exists(self, location_id: int) -> bool:
        rows = await self._client.select(
            LOCATIONS_TABLE, columns="id", filters={"id": eq(location_id)}, limit=1
        )
        return bool(rows)

    async def count_by_user(self, user_id: int | str) -> int:
        return await self._client.count(LOCATIONS_TABLE, filters={"user_id": eq(user_id)})

    async def create(self, row: dict[str, Any]) -> Location:
        try:
            data = await self._client.insert(LOCATIONS_TABLE, row)
        except PostgrestError as e:
            await log_error(f"Ошибка создания места: {e.message}")
            raise
        return Location.model_validate(data)


class FavoriteRepository:
    """Репозиторий избранного."""

    def __init__(self, client: PostgrestClient) -> None:
        self._client = client

    @staticmethod
    def _embedded(row: dict[str, Any]) -> Optional[Location]:
        location = row.get("locations")
        return Location.model_validate(location) if location else None

    async def list_for_user(self, user_id: int | str) -> list[Location]:
        rows = await self._client.select(
            FAVORITES_TABLE, columns=FAVORITE_COLUMNS, filters={"user_id": eq(user_id)}
        )
        return [loc for loc in (self._embedded(row) for row in rows) if loc is not None]

    async def add(self, user_id: int | str, location_id: int) -> Optional[Location]:
        """Добавляет место в избранное. Повторное добавление не создаёт дубликат."""
        row = await self._client.upsert(
            FAVORITES_TABLE,
            {"user_id": user_id, "location_id": location_id},
            on_conflict="user_id,location_id",
            columns=FAVORITE_COLUMNS,
        )
        return self._embedded(row)

    async def remove(self, user_id: int | str, location_id: int) -> None:
        await self._client.delete(
            FAVORITES_TABLE,
            filters={"user_id": eq(user_id), "location_id": eq(location_id)},
        )
