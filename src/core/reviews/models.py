# src/core/reviews/models.py
"""
Модели комментариев и оценок.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CommentAuthor(BaseModel):
    """Автор комментария (вложенный ресурс users)."""

    id: Union[int, str]
    nickname: Optional[str] = None
    avatar_url: Optional[str] = None


class Comment(BaseModel):
    """Комментарий к месту."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    location_id: int
    user_id: Optional[Union[int, str]] = None
    content: str
    image_url: Optional[str] = None
    is_approved: bool = True
    created_at: Optional[datetime] = None
    author: Optional[CommentAuthor] = Field(None, alias="users")


class CommentCreateDTO(BaseModel):
    """DTO создания комментария."""

    location_id: int
    user_id: Optional[Union[int, str]] = None
    content: str = ""
    image_url: Optional[str] = None


class Rating(BaseModel):
    """Оценка места пользователем."""

    id: int
    location_id: int
    user_id: Optional[Union[int, str]] = None
    stars: int
    created_at: Optional[datetime] = None


class RatingCreateDTO(BaseModel):
    """DTO оценки."""

    location_id: int
    user_id: Union[int, str]
    stars: int


class RatingSummary(BaseModel):
    """Средняя оценка (один знак после запятой) и количество оценок."""

    average: float = 0.0
    count: int = 0
