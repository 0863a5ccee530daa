# src/core/users/models.py
"""
Модели данных пользователей.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Пользователь Mini App."""

    model_config = ConfigDict(from_attributes=True)

    id: Union[int, str] = Field(..., description="ID записи в БД")
    telegram_id: str = Field(..., description="Telegram ID (хэш, если включено хэширование)")
    nickname: Optional[str] = Field(None, description="Никнейм")
    avatar_url: Optional[str] = Field(None, description="URL аватара")
    created_at: Optional[datetime] = Field(None, description="Дата регистрации")


class UserCreateDTO(BaseModel):
    """DTO для создания пользователя."""

    model_config = ConfigDict(populate_by_name=True)

    telegram_id: Union[int, str] = Field(..., alias="telegramId")
    nickname: Optional[str] = None
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")


class UserUpdateDTO(BaseModel):
    """
    DTO обновления профиля.
    Учитываются только переданные поля (exclude_unset).
    """

    model_config = ConfigDict(populate_by_name=True)

    nickname: Optional[str] = None
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")
