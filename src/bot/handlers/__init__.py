# src/bot/handlers/__init__.py
"""
Хендлеры Telegram бота.
"""

from aiogram import Dispatcher

from src.bot.handlers.common import router as common_router
from src.bot.handlers.errors import router as errors_router


def register_routers(dp: Dispatcher) -> None:
    """
    Регистрирует все роутеры в диспетчере.

    Args:
        dp: Диспетчер
    """
    dp.include_router(common_router)
    dp.include_router(errors_router)


__all__ = [
    "register_routers",
    "common_router",
    "errors_router",
]
