# src/core/locations/models.py
"""
Модели данных мест.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat

from src.common.constants import LocationType


class Location(BaseModel):
    """Место, добавленное пользователем."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="ID места")
    name: str = Field(..., description="Название")
    description: Optional[str] = Field(None, description="Описание")
    latitude: float = Field(..., description="Широта")
    longitude: float = Field(..., description="Долгота")
    category: str = Field(..., description="Категория (grocery, restaurant-bar, other)")
    user_id: Optional[Union[int, str]] = Field(None, description="Автор")
    is_approved: bool = Field(True, description="Прошло ли модерацию")
    type: Optional[str] = Field(None, description="permanent / temporary")
    website_url: Optional[str] = Field(None, description="Сайт")
    image_url: Optional[str] = Field(None, description="Фото")
    schedules: Optional[Any] = Field(None, description="Расписание (JSON)")
    created_at: Optional[datetime] = Field(None, description="Дата добавления")


class LocationCreateDTO(BaseModel):
    """
    DTO создания места.
    Координаты принимаются только числами: строка "52.5" не подходит.
    """

    model_config = ConfigDict(populate_by_name=True)

    telegram_id: Optional[Union[int, str]] = Field(None, alias="telegramId")
    user_id: Optional[Union[int, str]] = Field(None, alias="userId")
    name: Optional[str] = None
    description: Optional[str] = None
    latitude: Optional[StrictFloat] = None
    longitude: Optional[StrictFloat] = None
    category: Optional[str] = None
    type: LocationType = LocationType.PERMANENT
    website_url: Optional[str] = Field(None, alias="websiteUrl")
    image_url: Optional[str] = Field(None, alias="imageUrl")
    schedules: Optional[Any] = None
