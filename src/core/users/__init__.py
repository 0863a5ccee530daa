# src/core/users/__init__.py
"""
Домен пользователей Mini App.
"""

from src.core.users.models import User, UserCreateDTO, UserUpdateDTO
from src.core.users.identity import generate_nickname, hash_telegram_id
from src.core.users.repository import UserRepository
from src.core.users.service import UserService

__all__ = [
    "User",
    "UserCreateDTO",
    "UserUpdateDTO",
    "UserRepository",
    "UserService",
    "generate_nickname",
    "hash_telegram_id",
]
