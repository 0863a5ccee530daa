# src/bot/handlers/errors.py
"""
Глобальный обработчик ошибок бота.
"""

from __future__ import annotations

from aiogram import Router
from aiogram.types import ErrorEvent

from src.common.localization import get_text, resolve_language
from src.common.logger import log_error

router = Router(name="errors")


@router.errors()
async def handle_error(event: ErrorEvent) -> bool:
    """Логирует ошибку и предлагает пользователю начать заново."""
    await log_error(f"Ошибка бота: {event.exception}", exc_info=True)

    update = event.update
    message = update.message or (update.callback_query.message if update.callback_query else None)
    user = update.message.from_user if update.message else (
        update.callback_query.from_user if update.callback_query else None
    )
    if message is not None:
        lang = resolve_language(user.language_code if user else None)
        try:
            await message.answer(get_text("ERROR_GENERIC", lang))
        except Exception as e:
            await log_error(f"Не удалось отправить сообщение об ошибке: {e}")
    return True
