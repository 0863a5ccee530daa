# src/core/reviews/__init__.py
"""
Комментарии и оценки мест.
"""

from src.core.reviews.models import (
    Comment,
    CommentAuthor,
    CommentCreateDTO,
    Rating,
    RatingCreateDTO,
    RatingSummary,
)
from src.core.reviews.repository import CommentRepository, RatingRepository
from src.core.reviews.service import CommentService, RatingService

__all__ = [
    "Comment",
    "CommentAuthor",
    "CommentCreateDTO",
    "Rating",
    "RatingCreateDTO",
    "RatingSummary",
    "CommentRepository",
    "RatingRepository",
    "CommentService",
    "RatingService",
]
