# src/web_client/app.py
"""
Веб-клиент Mini App на NiceGUI: карта мест и слой POI.
"""

import os

# Локальные данные NiceGUI храним во временной папке, а не в корне проекта
os.environ.setdefault("NICEGUI_STORAGE_PATH", "/tmp/places_miniapp_nicegui")

from nicegui import app, ui

from src.common.constants import CATEGORY_FILTER_ALL, LocationCategory, TypeMsg
from src.common.localization import resolve_language
from src.common.logger import log_info
from src.config import settings
from src.web_client.components.map_component import MapComponent
from src.web_client.infra.api_clients import PlacesApiClient

CATEGORY_OPTIONS = [CATEGORY_FILTER_ALL] + [category.value for category in LocationCategory]


async def detect_language() -> str:
    """Язык пользователя из Telegram WebApp (вне Telegram fallback)."""
    try:
        code = await ui.run_javascript(
            "return window.Telegram?.WebApp?.initDataUnsafe?.user?.language_code || ''"
        )
    except TimeoutError:
        code = ""
    return resolve_language(code or None)


def create_app() -> None:

    @ui.page("/")
    async def index():
        await ui.context.client.connected()
        lang = await detect_language()
        client = PlacesApiClient()
        ui.context.client.on_disconnect(client.close)

        component = MapComponent(
            fetch_pois=client.get_pois,
            load_locations=client.get_locations,
            lang=lang,
        )

        with ui.header().classes("items-center justify-between bg-blue-600 text-white"):
            ui.label("🗺️ OpenFreeMap").classes("text-xl font-bold")
            with ui.row().classes("items-center gap-2"):
                ui.select(
                    CATEGORY_OPTIONS,
                    value=CATEGORY_FILTER_ALL,
                    on_change=lambda e: component.reload_locations(e.value),
                ).props("dense dark")
                ui.switch(
                    "POI",
                    value=settings.poi.POI_ENABLED,
                    on_change=lambda e: component.set_pois_enabled(e.value),
                )

        with ui.column().classes("w-full h-[calc(100vh-64px)] p-0 m-0"):
            component.render()
        await component.mount()

    @app.on_startup
    async def startup() -> None:
        await log_info("Web Client started", type_msg=TypeMsg.INFO)


def run_web_client(host: str = "0.0.0.0", port: int = 8082, reload: bool = False) -> None:
    create_app()
    ui.run(
        host=host,
        port=port,
        reload=reload,
        title="OpenFreeMap",
        show=False,
    )
