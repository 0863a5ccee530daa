# src/bot/middleware/logging.py
"""
Middleware для логирования входящих сообщений и callback-запросов.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject

from src.common.constants import TypeMsg
from src.common.logger import log_error, log_info


def describe_event(event: TelegramObject) -> tuple[int | None, str]:
    """Возвращает (user_id, краткое описание) события для лога."""
    if isinstance(event, Message):
        user_id = event.from_user.id if event.from_user else None
        return user_id, event.text[:50] if event.text else "[no text]"
    if isinstance(event, CallbackQuery):
        user_id = event.from_user.id if event.from_user else None
        return user_id, f"callback={event.data or '[no data]'}"
    return None, type(event).__name__


class LoggingMiddleware(BaseMiddleware):
    """Пишет в DEBUG каждое событие, в ERROR исключения хендлеров (и пробрасывает их)."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        user_id, summary = describe_event(event)
        event_type = type(event).__name__

        await log_info(f"[{event_type}] user={user_id} {summary}", type_msg=TypeMsg.DEBUG)

        try:
            return await handler(event, data)
        except Exception as e:
            await log_error(
                f"Ошибка в хендлере {event_type}: {e}",
                extra={"user_id": user_id, "event_type": event_type},
            )
            raise
