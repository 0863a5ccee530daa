# src/bot/handlers/common.py
"""
Общие хендлеры.
Команды /start, /help, /map и навигация по меню.
"""

from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import CallbackQuery, Message

from src.bot.keyboards import get_help_keyboard, get_map_keyboard, get_start_keyboard
from src.common.constants import TypeMsg
from src.common.localization import get_text, resolve_language
from src.common.logger import log_error, log_info

router = Router(name="common")


def _lang(event: Message | CallbackQuery) -> str:
    user = event.from_user
    return resolve_language(user.language_code if user else None)


@router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    """Обработчик команды /start."""
    lang = _lang(message)
    try:
        await log_info(
            f"Команда /start от пользователя {message.from_user.id}",
            type_msg=TypeMsg.DEBUG,
        )
        await message.answer(get_text("WELCOME", lang), reply_markup=get_start_keyboard(lang))
    except Exception as e:
        await log_error(f"Ошибка в cmd_start: {e}", exc_info=True)
        await message.answer(get_text("ERROR_GENERIC", lang))


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    """Список команд."""
    await message.answer(get_text("COMMANDS_TEXT", _lang(message)))


@router.message(Command("map"))
async def cmd_map(message: Message) -> None:
    """Кнопка открытия карты."""
    lang = _lang(message)
    await message.answer(get_text("MAP_PROMPT", lang), reply_markup=get_map_keyboard(lang))


@router.callback_query(F.data == "help")
async def show_help(callback: CallbackQuery) -> None:
    """Справка вместо стартового меню."""
    lang = _lang(callback)
    await callback.answer()
    await callback.message.edit_text(get_text("HELP_TEXT", lang), reply_markup=get_help_keyboard(lang))


@router.callback_query(F.data == "back_to_start")
async def back_to_start(callback: CallbackQuery) -> None:
    """Возврат к стартовому меню."""
    lang = _lang(callback)
    await callback.answer()
    await callback.message.edit_text(get_text("WELCOME", lang), reply_markup=get_start_keyboard(lang))
