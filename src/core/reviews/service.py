# src/core/reviews/service.py
"""
Сервисы комментариев и оценок.
"""

from __future__ import annotations

from src.common.constants import MAX_RATING_STARS, MIN_RATING_STARS, TypeMsg
from src.common.logger import log_info
from src.core.errors import ValidationError
from src.core.reviews.models import (
    Comment,
    CommentCreateDTO,
    Rating,
    RatingCreateDTO,
    RatingSummary,
)
from src.core.reviews.repository import CommentRepository, RatingRepository
from src.infra.postgrest import PostgrestClient


class CommentService:
    """Сервис комментариев."""

    def __init__(self, client: PostgrestClient) -> None:
        self._repo = CommentRepository(client)

    async def list_comments(self, location_id: int) -> list[Comment]:
        """Одобренные комментарии места, новые первыми."""
        return await self._repo.list_approved(location_id)

    async def create_comment(self, dto: CommentCreateDTO) -> Comment:
        """
        Создаёт комментарий. Комментарии публикуются сразу.

        Raises:
            ValidationError: Пустой текст
        """
        content = dto.content.strip()
        if not content:
            raise ValidationError("Comment content is required")

        comment = await self._repo.create({
            "location_id": dto.location_id,
            "user_id": dto.user_id or None,
            "content": content,
            "image_url": dto.image_url,
            "is_approved": True,
        })
        await log_info(f"Комментарий {comment.id} к месту {dto.location_id}", type_msg=TypeMsg.DEBUG)
        return comment


class RatingService:
    """Сервис оценок."""

    def __init__(self, client: PostgrestClient) -> None:
        self._repo = RatingRepository(client)

    async def summary(self, location_id: int) -> RatingSummary:
        """Средняя оценка места и число оценок."""
        stars = await self._repo.list_stars(location_id)
        if not stars:
            return RatingSummary(average=0.0, count=0)
        return RatingSummary(average=round(sum(stars) / len(stars), 1), count=len(stars))

    async def rate(self, dto: RatingCreateDTO) -> tuple[Rating, bool]:
        """
        Ставит оценку. Повторная оценка того же пользователя заменяет прежнюю.

        Returns:
            (оценка, создана ли новая запись)

        Raises:
            ValidationError: Оценка вне диапазона 1..5
        """
        if not MIN_RATING_STARS <= dto.stars <= MAX_RATING_STARS:
            raise ValidationError(f"Stars must be between {MIN_RATING_STARS} and {MAX_RATING_STARS}")

        existing = await self._repo.find(dto.location_id, dto.user_id)
        if existing is not None:
            return await self._repo.update_stars(existing["id"], dto.stars), False

        rating = await self._repo.create(
            {"location_id": dto.location_id, "user_id": dto.user_id, "stars": dto.stars}
        )
        return rating, True
