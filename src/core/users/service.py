# src/core/users/service.py
"""
Сервис пользователей.
Хэширование Telegram ID, генерация никнеймов, обновление профиля.
"""

from __future__ import annotations

from typing import Optional

from src.common.constants import TypeMsg
from src.common.logger import log_info
from src.core.errors import NotFoundError, ValidationError
from src.core.users.identity import generate_nickname, hash_telegram_id
from src.core.users.models import User, UserCreateDTO, UserUpdateDTO
from src.core.users.repository import UserRepository
from src.infra.postgrest import PostgrestClient


class UserService:
    """Сервис пользователей."""

    def __init__(self, client: PostgrestClient, *, hash_ids: bool | None = None) -> None:
        """
        Args:
            client: Клиент PostgREST
            hash_ids: Хранить ли Telegram ID хэшированными (по умолчанию из конфига)
        """
        if hash_ids is None:
            from src.config import settings
            hash_ids = settings.places.HASH_TELEGRAM_IDS

        self._repo = UserRepository(client)
        self._hash_ids = hash_ids

    def storage_id(self, telegram_id: int | str) -> str:
        """Значение telegram_id в том виде, в каком оно хранится в БД."""
        if self._hash_ids:
            return hash_telegram_id(telegram_id)
        return str(telegram_id)

    async def find_by_telegram_id(self, telegram_id: int | str | None) -> Optional[User]:
        """Пользователь по Telegram ID или None (в том числе для пустого ID)."""
        if telegram_id is None or str(telegram_id) == "":
            return None
        return await self._repo.get_by_telegram_id(self.storage_id(telegram_id))

    async def get_by_telegram_id(self, telegram_id: int | str) -> User:
        """
        Raises:
            NotFoundError: Пользователь не зарегистрирован
        """
        user = await self.find_by_telegram_id(telegram_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def create(self, dto: UserCreateDTO) -> User:
        """
        Регистрирует пользователя.
        При хэшировании никнейм генерируется из хэша, переданный игнорируется.
        """
        stored_id = self.storage_id(dto.telegram_id)
        nickname = generate_nickname(stored_id) if self._hash_ids else dto.nickname

        user = await self._repo.create(
            {"telegram_id": stored_id, "nickname": nickname, "avatar_url": dto.avatar_url}
        )
        await log_info(f"Пользователь {user.id} зарегистрирован ({nickname})", type_msg=TypeMsg.DEBUG)
        return user

    async def update_profile(self, user_id: int | str, dto: UserUpdateDTO) -> User:
        """
        Частичное обновление профиля: меняются только переданные поля.

        Raises:
            ValidationError: Не передано ни одного поля
            NotFoundError: Пользователь не найден
        """
        updates = dto.model_dump(exclude_unset=True)
        if not updates:
            raise ValidationError("No updates provided")
        return await self._apply(user_id, updates)

    async def replace_profile(self, user_id: int | str, dto: UserUpdateDTO) -> User:
        """Полная перезапись никнейма и аватара (непереданные поля обнуляются)."""
        return await self._apply(user_id, dto.model_dump())

    async def _apply(self, user_id: int | str, updates: dict) -> User:
        user = await self._repo.update(user_id, updates)
        if user is None:
            raise NotFoundError("User not found")
        return user
