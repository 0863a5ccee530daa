# src/web_client/components/map_component.py
"""
Карта Leaflet с местами пользователей и слоем POI OpenStreetMap.
"""

from __future__ import annotations

import html
from typing import Any, Callable, Optional

from nicegui import events, ui

from src.common.localization import get_text
from src.common.logger import log_debug, log_error
from src.config import settings
from src.core.locations.models import Location
from src.core.poi.controller import ProximityPoiController
from src.core.poi.models import PointOfInterest, ViewportBounds
from src.core.poi.provider import get_category_color, get_category_icon


def poi_popup_html(poi: PointOfInterest, lang: str = "en") -> str:
    """Содержимое всплывающего окна POI."""
    icon = get_category_icon(poi.category)
    color = get_category_color(poi.category)
    category = get_text("POI_CATEGORY", lang, category=poi.category.replace("_", " "))
    return (
        f"<b>{icon} {html.escape(poi.name)}</b><br>"
        f'<span style="color:{color}">{category}</span>'
    )


def location_popup_html(location: Location) -> str:
    """Содержимое всплывающего окна места пользователя."""
    return f"<b>{html.escape(location.name)}</b><br>{html.escape(location.description or '')}"


class MapComponent:
    """
    Компонент карты.

    События moveend / zoomend передаются в ProximityPoiController,
    маркеры POI перерисовываются по его on_change.
    Места пользователей показываются только при zoom >= LOCATIONS_MIN_ZOOM.
    """

    def __init__(
        self,
        fetch_pois: Callable[[ViewportBounds], Any],
        load_locations: Callable[[str | None], Any],
        lang: str = "en",
        center: tuple[float, float] | None = None,
        zoom: int | None = None,
    ) -> None:
        self.center = center or (settings.map.DEFAULT_CENTER_LAT, settings.map.DEFAULT_CENTER_LON)
        self.zoom = zoom if zoom is not None else settings.map.DEFAULT_ZOOM
        self.lang = lang
        self.locations_min_zoom = settings.map.LOCATIONS_MIN_ZOOM
        self._load_locations = load_locations

        self.map: Optional[ui.leaflet] = None
        self.controller = ProximityPoiController.from_settings(fetch_pois, on_change=self._paint_pois)
        self._poi_markers: dict[str, Any] = {}
        self._location_markers: list[Any] = []
        self._locations: list[Location] = []

    def render(self) -> ui.leaflet:
        """Создаёт карту и подписывается на события."""
        self.map = ui.leaflet(center=self.center, zoom=self.zoom).classes("w-full h-full")
        self.map.on("map-moveend", self._on_viewport_event)
        self.map.on("map-zoomend", self._on_viewport_event)
        ui.context.client.on_disconnect(self.close)
        return self.map

    async def mount(self) -> None:
        """Первичная оценка масштаба и загрузка мест после инициализации карты."""
        if self.map is None:
            raise RuntimeError("Сначала вызовите render()")
        await self.map.initialized()
        self.controller.mount(self.map.zoom, await self._read_bounds())
        await self.reload_locations()

    async def close(self) -> None:
        await self.controller.close()

    # -------------------------------------------------------------------------
    # События карты
    # -------------------------------------------------------------------------

    async def _read_bounds(self) -> Optional[ViewportBounds]:
        """Границы видимой области или None, если карта их не отдала."""
        try:
            raw = await self.map.run_map_method("getBounds")
            return ViewportBounds.from_leaflet(raw)
        except Exception as e:
            await log_error(f"Не удалось получить границы карты: {e}")
            return None

    async def _on_viewport_event(self, e: events.GenericEventArguments) -> None:
        zoom = e.args.get("zoom", self.map.zoom)
        bounds = await self._read_bounds()
        await log_debug(f"Карта: {e.type} zoom={zoom}")
        self.controller.handle_viewport_change(zoom, bounds)
        self._paint_locations(zoom)

    async def set_pois_enabled(self, enabled: bool) -> None:
        """Переключатель слоя POI."""
        self.controller.set_enabled(enabled, self.map.zoom, await self._read_bounds())

    # -------------------------------------------------------------------------
    # Отрисовка
    # -------------------------------------------------------------------------

    def _paint_pois(self, pois: tuple[PointOfInterest, ...]) -> None:
        """Синхронизирует маркеры POI с видимым набором контроллера."""
        if self.map is None:
            return
        wanted = {poi.id: poi for poi in pois}

        for poi_id in list(self._poi_markers):
            if poi_id not in wanted:
                self.map.remove_layer(self._poi_markers.pop(poi_id))

        for poi_id, poi in wanted.items():
            if poi_id in self._poi_markers:
                continue
            marker = self.map.marker(latlng=(poi.latitude, poi.longitude), options={"title": poi.name})
            marker.run_method("bindPopup", poi_popup_html(poi, self.lang))
            self._poi_markers[poi_id] = marker

    async def reload_locations(self, category: str | None = None) -> None:
        """Загружает места из API и рисует их, если масштаб позволяет."""
        try:
            self._locations = await self._load_locations(category)
        except Exception as e:
            await log_error(f"Ошибка загрузки мест: {e}")
            ui.notify(get_text("LOCATIONS_LOAD_FAILED", self.lang), type="warning")
            return
        self._clear_location_markers()
        self._paint_locations(self.map.zoom if self.map else self.zoom)

    def _clear_location_markers(self) -> None:
        for marker in self._location_markers:
            self.map.remove_layer(marker)
        self._location_markers = []

    def _paint_locations(self, zoom: float) -> None:
        if self.map is None:
            return
        if zoom < self.locations_min_zoom:
            self._clear_location_markers()
            return
        if self._location_markers:
            return
        for location in self._locations:
            marker = self.map.marker(
                latlng=(location.latitude, location.longitude),
                options={"title": location.name},
            )
            marker.run_method("bindPopup", location_popup_html(location))
            self._location_markers.append(marker)
