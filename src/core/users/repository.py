# src/core/users/repository.py
"""
Репозиторий пользователей (таблица users в PostgREST).
"""

from __future__ import annotations

from typing import Any, Optional

from src.common.logger import log_error
from src.core.users.models import User
from src.infra.postgrest import PostgrestClient, PostgrestError, eq

TABLE = "users"


class UserRepository:
    """Репозиторий пользователей."""

    def __init__(self, client: PostgrestClient) -> None:
        """
        Args:
            client: Клиент PostgREST (Dependency Injection)
        """
        self._client = client

    async def get_by_telegram_id(self, telegram_id: str) -> Optional[User]:
        """
        Получает пользователя по сохранённому Telegram ID.

        Args:
            telegram_id: Значение колонки telegram_id (уже хэшированное, если нужно)
        """
        try:
            rows = await self._client.select(
                TABLE, filters={"telegram_id": eq(telegram_id)}, limit=1
            )
        except PostgrestError as e:
            await log_error(f"Ошибка получения пользователя по telegram_id: {e.message}")
            raise
        return User.model_validate(rows[0]) if rows else None

    async def create(self, row: dict[str, Any]) -> User:
        """Создаёт пользователя."""
        try:
            data = await self._client.insert(TABLE, row)
        except PostgrestError as e:
            await log_error(f"Ошибка создания пользователя: {e.message}")
            raise
        return User.model_validate(data)

    async def update(self, user_id: int | str, values: dict[str, Any]) -> Optional[User]:
        """
        Обновляет пользователя.

        Returns:
            Обновлённый пользователь или None, если такого нет
        """
        try:
            data = await self._client.update(TABLE, values, filters={"id": eq(user_id)})
        except PostgrestError as e:
            if e.is_no_rows:
                return None
            await log_error(f"Ошибка обновления пользователя {user_id}: {e.message}")
            raise
        return User.model_validate(data)
