# tests/core/test_reviews_service.py
"""
Тесты сервисов комментариев и оценок.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from src.core.errors import ValidationError
from src.core.reviews.models import CommentCreateDTO, RatingCreateDTO
from src.core.reviews.repository import COMMENT_COLUMNS
from src.core.reviews.service import CommentService, RatingService


def rating_row(stars: int, rating_id: int = 1) -> dict[str, Any]:
    return {"id": rating_id, "location_id": 11, "user_id": 7, "stars": stars}


class TestCommentService:
    """Тесты сервиса комментариев."""

    @pytest.fixture
    def service(self, mock_postgrest: AsyncMock) -> CommentService:
        return CommentService(mock_postgrest)

    @pytest.mark.asyncio
    async def test_list_approved_with_author(
        self,
        service: CommentService,
        mock_postgrest: AsyncMock,
        sample_comment_data: dict[str, Any],
    ) -> None:
        mock_postgrest.select.return_value = [sample_comment_data]

        comments = await service.list_comments(11)

        assert comments[0].author is not None
        assert comments[0].author.nickname == "BraveFox42"
        kwargs = mock_postgrest.select.call_args.kwargs
        assert kwargs["columns"] == COMMENT_COLUMNS
        assert kwargs["filters"] == {"location_id": "eq.11", "is_approved": "eq.true"}
        assert kwargs["order"] == "created_at.desc"

    @pytest.mark.asyncio
    async def test_create_strips_content(
        self,
        service: CommentService,
        mock_postgrest: AsyncMock,
        sample_comment_data: dict[str, Any],
    ) -> None:
        mock_postgrest.insert.return_value = sample_comment_data

        await service.create_comment(CommentCreateDTO(location_id=11, user_id=7, content="  Отличный кофе  "))

        _, row = mock_postgrest.insert.call_args.args
        assert row["content"] == "Отличный кофе"
        assert row["is_approved"] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   "])
    async def test_create_empty_content(self, service: CommentService, content: str) -> None:
        with pytest.raises(ValidationError):
            await service.create_comment(CommentCreateDTO(location_id=11, content=content))


class TestRatingService:
    """Тесты сервиса оценок."""

    @pytest.fixture
    def service(self, mock_postgrest: AsyncMock) -> RatingService:
        return RatingService(mock_postgrest)

    @pytest.mark.asyncio
    async def test_summary_empty(self, service: RatingService) -> None:
        summary = await service.summary(11)

        assert summary.average == 0.0
        assert summary.count == 0

    @pytest.mark.asyncio
    async def test_summary_rounded(self, service: RatingService, mock_postgrest: AsyncMock) -> None:
        mock_postgrest.select.return_value = [{"stars": 5}, {"stars": 4}, {"stars": 4}]

        summary = await service.summary(11)

        assert summary.average == 4.3
        assert summary.count == 3

    @pytest.mark.asyncio
    async def test_rate_new(self, service: RatingService, mock_postgrest: AsyncMock) -> None:
        mock_postgrest.select.return_value = []
        mock_postgrest.insert.return_value = rating_row(5)

        rating, created = await service.rate(RatingCreateDTO(location_id=11, user_id=7, stars=5))

        assert created is True
        assert rating.stars == 5
        mock_postgrest.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_rate_again_replaces(self, service: RatingService, mock_postgrest: AsyncMock) -> None:
        mock_postgrest.select.return_value = [{"id": 3}]
        mock_postgrest.update.return_value = rating_row(2, rating_id=3)

        rating, created = await service.rate(RatingCreateDTO(location_id=11, user_id=7, stars=2))

        assert created is False
        assert rating.id == 3
        table, values = mock_postgrest.update.call_args.args
        assert table == "ratings"
        assert values == {"stars": 2}
        mock_postgrest.insert.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("stars", [0, 6, -1])
    async def test_rate_out_of_range(self, service: RatingService, mock_postgrest: AsyncMock, stars: int) -> None:
        with pytest.raises(ValidationError):
            await service.rate(RatingCreateDTO(location_id=11, user_id=7, stars=stars))
        mock_postgrest.select.assert_not_called()
