# src/bot/keyboards.py
"""
Inline клавиатуры бота.
"""

from __future__ import annotations

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup, WebAppInfo
from aiogram.utils.keyboard import InlineKeyboardBuilder

from src.common.localization import get_text


def _frontend_url(frontend_url: str | None) -> str:
    if frontend_url is None:
        from src.config import settings
        frontend_url = settings.telegram.FRONTEND_URL
    return frontend_url


def _map_button(lang: str, frontend_url: str) -> InlineKeyboardButton:
    return InlineKeyboardButton(
        text=get_text("MAP_BUTTON", lang),
        web_app=WebAppInfo(url=frontend_url),
    )


def get_start_keyboard(lang: str = "en", frontend_url: str | None = None) -> InlineKeyboardMarkup:
    """Стартовое меню: открыть карту, помощь."""
    url = _frontend_url(frontend_url)
    builder = InlineKeyboardBuilder()
    if url:
        builder.row(_map_button(lang, url))
    builder.row(
        InlineKeyboardButton(text=get_text("HELP_BUTTON", lang), callback_data="help"),
    )
    return builder.as_markup()


def get_help_keyboard(lang: str = "en", frontend_url: str | None = None) -> InlineKeyboardMarkup:
    """Клавиатура справки: открыть карту, назад."""
    url = _frontend_url(frontend_url)
    builder = InlineKeyboardBuilder()
    if url:
        builder.row(_map_button(lang, url))
    builder.row(
        InlineKeyboardButton(text=get_text("BACK_BUTTON", lang), callback_data="back_to_start"),
    )
    return builder.as_markup()


def get_map_keyboard(lang: str = "en", frontend_url: str | None = None) -> InlineKeyboardMarkup:
    """Только кнопка Mini App."""
    url = _frontend_url(frontend_url)
    builder = InlineKeyboardBuilder()
    if url:
        builder.row(_map_button(lang, url))
    return builder.as_markup()
