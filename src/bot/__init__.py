# src/bot/__init__.py
"""
Транспортный слой - Telegram Bot.
Стартовое меню и кнопка Mini App на aiogram 3.x.
"""

from src.bot.app import create_bot, create_dispatcher

__all__ = [
    "create_bot",
    "create_dispatcher",
]
