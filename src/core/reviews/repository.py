# src/core/reviews/repository.py
"""
Репозитории комментариев и оценок (таблицы comments, ratings).
"""

from __future__ import annotations

from typing import Any, Optional

from src.core.reviews.models import Comment, Rating
from src.infra.postgrest import PostgrestClient, eq

COMMENTS_TABLE = "comments"
RATINGS_TABLE = "ratings"

COMMENT_COLUMNS = "*,users(id,nickname,avatar_url)"


class CommentRepository:
    """Репозиторий комментариев."""

    def __init__(self, client: PostgrestClient) -> None:
        self._client = client

    async def list_approved(self, location_id: int) -> list[Comment]:
        rows = await self._client.select(
            COMMENTS_TABLE,
            columns=COMMENT_COLUMNS,
            filters={"location_id": eq(location_id), "is_approved": eq(True)},
            order="created_at.desc",
        )
        return [Comment.model_validate(row) for row in rows]

    async def create(self, row: dict[str, Any]) -> Comment:
        data = await self._client.insert(COMMENTS_TABLE, row, columns=COMMENT_COLUMNS)
        return Comment.model_validate(data)


class RatingRepository:
    """Репозиторий оценок."""

    def __init__(self, client: PostgrestClient) -> None:
        self._client = client

    async def list_stars(self, location_id: int) -> list[int]:
        rows = await self._client.select(
            RATINGS_TABLE, columns="stars", filters={"location_id": eq(location_id)}
        )
        return [row["stars"] for row in rows]

    async def find(self, location_id: int, user_id: int | str) -> Optional[dict[str, Any]]:
        rows = await self._client.select(
            RATINGS_TABLE,
            columns="id",
            filters={"location_id": eq(location_id), "user_id": eq(user_id)},
            limit=1,
        )
        return rows[0] if rows else None

    async def update_stars(self, rating_id: int, stars: int) -> Rating:
        data = await self._client.update(RATINGS_TABLE, {"stars": stars}, filters={"id": eq(rating_id)})
        return Rating.model_validate(data)

    async def create(self, row: dict[str, Any]) -> Rating:
        data = await self._client.insert(RATINGS_TABLE, row)
        return Rating.model_validate(data)
