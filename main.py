#!/usr/bin/env python3
# main.py
"""
Главная точка входа приложения Places Mini App.
Запускает Telegram Bot, Places API или Web Client в зависимости от аргументов.
"""

from __future__ import annotations

import asyncio
import signal
import sys

from src.config import settings
from src.common.logger import setup_logging, log_info, log_error
from src.common.constants import TypeMsg
from src.infra.postgrest import init_postgrest, close_postgrest


VALID_MODES = ("bot", "api", "web_client", "all")

# Глобальный флаг для graceful shutdown
_shutdown_event: asyncio.Event | None = None
_running_tasks: list[asyncio.Task] = []


def setup_signal_handlers() -> None:
    """Настраивает обработчики сигналов для graceful shutdown."""
    global _shutdown_event
    _shutdown_event = asyncio.Event()

    def signal_handler(sig: int) -> None:
        """Обработчик сигналов SIGINT и SIGTERM."""
        if _shutdown_event and not _shutdown_event.is_set():
            print(f"\nПолучен сигнал остановки (sig={sig}), завершаем работу...")
            _shutdown_event.set()
            for task in _running_tasks:
                if not task.done():
                    task.cancel()

    try:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))
    except NotImplementedError:
        # Windows не поддерживает add_signal_handler
        signal.signal(signal.SIGINT, lambda s, f: signal_handler(s))
        signal.signal(signal.SIGTERM, lambda s, f: signal_handler(s))


async def init_infrastructure() -> None:
    """Создаёт клиент PostgREST."""
    await log_info("Инициализация инфраструктуры...", type_msg=TypeMsg.INFO)
    client = await init_postgrest()
    if not await client.health_check():
        await log_info("PostgREST пока недоступен, запросы будут повторяться", type_msg=TypeMsg.WARNING)


async def close_infrastructure() -> None:
    """Закрывает подключения."""
    await close_postgrest()


async def run_bot() -> None:
    """Запускает Telegram Bot: webhook, если включён, иначе polling."""
    from aiohttp import web
    from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application

    from src.bot.app import create_bot, create_dispatcher, setup_webhook, remove_webhook

    await log_info("Запуск Telegram Bot...", type_msg=TypeMsg.INFO)

    bot = create_bot()
    dp = create_dispatcher()
    cfg = settings.telegram

    try:
        if cfg.USE_WEBHOOK and cfg.WEBHOOK_URL_MAIN:
            try:
                await setup_webhook(bot, cfg.WEBHOOK_URL_MAIN, secret=cfg.WEBHOOK_SECRET or "")

                app = web.Application()
                SimpleRequestHandler(
                    dispatcher=dp,
                    bot=bot,
                    secret_token=cfg.WEBHOOK_SECRET or None,
                ).register(app, path=f"{cfg.WEBHOOK_PATH}/{cfg.BOT_TOKEN}")
                setup_application(app, dp, bot=bot)

                runner = web.AppRunner(app)
                await runner.setup()
                await web.TCPSite(runner, host=cfg.WEBAPP_HOST, port=cfg.WEBAPP_PORT).start()
                await log_info(
                    f"Bot запущен в режиме webhook на {cfg.WEBAPP_HOST}:{cfg.WEBAPP_PORT}",
                    type_msg=TypeMsg.INFO,
                )

                try:
                    if _shutdown_event:
                        await _shutdown_event.wait()
                    else:
                        await asyncio.Event().wait()
                finally:
                    await runner.cleanup()
                return
            except asyncio.CancelledError:
                raise
            except Exception as e:
                await log_error(f"Не удалось настроить webhook: {e}")
                await log_info("Переключение на режим polling...", type_msg=TypeMsg.INFO)
                await remove_webhook(bot)

        await log_info("Bot запущен в режиме polling", type_msg=TypeMsg.INFO)
        await dp.start_polling(bot, handle_signals=False)
    except asyncio.CancelledError:
        await log_info("Bot: завершение работы...", type_msg=TypeMsg.INFO)
        raise
    finally:
        await bot.session.close()
        await log_info("Bot остановлен", type_msg=TypeMsg.INFO)


async def run_api() -> None:
    """Запускает Places API (uvicorn)."""
    import uvicorn

    await log_info(
        f"Запуск Places API на {settings.deployment.API_HOST}:{settings.deployment.API_PORT}...",
        type_msg=TypeMsg.INFO,
    )
    config = uvicorn.Config(
        "src.services.places_api.app:app",
        host=settings.deployment.API_HOST,
        port=settings.deployment.API_PORT,
        log_level=settings.logging.LOG_LEVEL.lower(),
    )
    server = uvicorn.Server(config)
    # Сигналы обрабатывает main
    server.install_signal_handlers = lambda: None
    await server.serve()


def run_web_client() -> None:
    """Запускает Web Client UI. NiceGUI сам управляет event loop."""
    from src.web_client.app import run_web_client as start_web_client

    start_web_client(
        host=settings.deployment.WEB_CLIENT_HOST,
        port=settings.deployment.WEB_CLIENT_PORT,
    )


def resolve_mode(argv: list[str]) -> str | None:
    """
    Режим запуска: аргумент командной строки, иначе COMPONENT_MODE.

    Returns:
        Режим или None, если он неизвестен
    """
    mode = argv[1] if len(argv) > 1 else settings.system.COMPONENT_MODE
    return mode if mode in VALID_MODES else None


async def main(mode: str) -> None:
    """
    Главная функция запуска асинхронных компонентов.

    Args:
        mode: bot, api или all (bot + api)
    """
    global _running_tasks

    setup_logging()
    setup_signal_handlers()

    await log_info(
        f"Places Mini App v{settings.system.VERSION} - запуск в режиме '{mode}'",
        type_msg=TypeMsg.INFO,
    )

    try:
        if mode == "bot":
            _running_tasks = [asyncio.create_task(run_bot())]
        elif mode == "api":
            _running_tasks = [asyncio.create_task(run_api())]
        elif mode == "all":
            await init_infrastructure()
            _running_tasks = [
                asyncio.create_task(run_bot()),
                asyncio.create_task(run_api()),
            ]
        else:
            await log_error(f"Неизвестный режим: {mode}")
            return

        await asyncio.gather(*_running_tasks, return_exceptions=True)
    except asyncio.CancelledError:
        await log_info("Задача отменена, выполняется graceful shutdown", type_msg=TypeMsg.INFO)
    finally:
        for task in _running_tasks:
            if not task.done():
                task.cancel()
        if _running_tasks:
            await asyncio.gather(*_running_tasks, return_exceptions=True)
            _running_tasks.clear()

        try:
            await close_infrastructure()
        except Exception as e:
            await log_error(f"Ошибка при закрытии подключений: {e}")
        await log_info("Приложение остановлено", type_msg=TypeMsg.INFO)


def print_usage() -> None:
    """Выводит справку по использованию."""
    print("""
Places Mini App - карта мест для Telegram

Использование:
    python main.py [mode]

Режимы:
    bot          - Telegram Bot (polling или webhook)
    api          - Places API (FastAPI, :3000)
    web_client   - Web Client UI (NiceGUI, :8082)
    all          - Bot + Places API в одном процессе

Без аргумента используется COMPONENT_MODE из config.json / окружения.
    """)


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] in ("-h", "--help", "help"):
        print_usage()
        sys.exit(0)

    mode = resolve_mode(sys.argv)
    if mode is None:
        print_usage()
        sys.exit(1)

    if mode == "web_client":
        setup_logging()
        run_web_client()
    else:
        try:
            asyncio.run(main(mode))
        except KeyboardInterrupt:
            pass
