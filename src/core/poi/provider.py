# src/core/poi/provider.py
"""
Провайдер POI на базе Overpass API (OpenStreetMap).
Запрашивает именованные точки amenity/shop/tourism в видимой области.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from src.common.logger import log_debug, log_warning
from src.core.poi.models import PointOfInterest, ViewportBounds


# Теги OSM, по которым ищутся POI (порядок определяет категорию)
POI_TAG_KEYS: tuple[str, ...] = ("amenity", "shop", "tourism")

DEFAULT_CATEGORY_ICON = "📍"
DEFAULT_CATEGORY_COLOR = "#6b7280"

CATEGORY_ICONS: dict[str, str] = {
    "restaurant": "🍽️",
    "cafe": "☕",
    "bar": "🍸",
    "pub": "🍺",
    "fast_food": "🍔",
    "bakery": "🥐",
    "supermarket": "🛒",
    "convenience": "🏪",
    "pharmacy": "💊",
    "hotel": "🏨",
    "hostel": "🛏️",
    "museum": "🏛️",
    "attraction": "📸",
    "viewpoint": "🌄",
    "artwork": "🎨",
}

CATEGORY_COLORS: dict[str, str] = {
    "restaurant": "#ef4444",
    "cafe": "#a16207",
    "bar": "#8b5cf6",
    "pub": "#8b5cf6",
    "fast_food": "#f97316",
    "bakery": "#f59e0b",
    "supermarket": "#22c55e",
    "convenience": "#16a34a",
    "pharmacy": "#10b981",
    "hotel": "#3b82f6",
    "hostel": "#3b82f6",
    "museum": "#0ea5e9",
    "attraction": "#ec4899",
    "viewpoint": "#14b8a6",
    "artwork": "#d946ef",
}


def get_category_icon(category: str) -> str:
    """Иконка маркера для категории POI."""
    return CATEGORY_ICONS.get(category, DEFAULT_CATEGORY_ICON)


def get_category_color(category: str) -> str:
    """Цвет маркера для категории POI."""
    return CATEGORY_COLORS.get(category, DEFAULT_CATEGORY_COLOR)


class PoiProviderError(Exception):
    """Ошибка получения POI у провайдера."""


class OverpassPoiProvider:
    """
    Клиент Overpass API.

    Любая ошибка сети, статуса или формата ответа превращается
    в PoiProviderError. Решение о том, что с ней делать, принимает вызывающий.
    """

    DEFAULT_URL = "https://overpass-api.de/api/interpreter"

    def __init__(
        self,
        url: str | None = None,
        *,
        timeout: float = 25.0,
        max_results: int = 200,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Args:
            url: Адрес интерпретатора Overpass
            timeout: Таймаут запроса (секунды), передаётся и в сам запрос QL
            max_results: Максимум точек в ответе
            client: Готовый HTTP клиент (для тестов)
        """
        self._url = url or self.DEFAULT_URL
        self._timeout = timeout
        self._max_results = max_results
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls) -> "OverpassPoiProvider":
        """Создаёт провайдер с параметрами из конфига."""
        from src.config import settings

        return cls(
            settings.poi.OVERPASS_URL,
            timeout=settings.poi.OVERPASS_TIMEOUT,
            max_results=settings.poi.POI_MAX_RESULTS,
        )

    async def close(self) -> None:
        """Закрывает HTTP клиент, если он создан провайдером."""
        if self._owns_client:
            await self._client.aclose()

    def build_query(self, bounds: ViewportBounds) -> str:
        """Собирает запрос Overpass QL для области."""
        bbox = bounds.as_overpass_bbox()
        selectors = "".join(f'node["{key}"]["name"]({bbox});' for key in POI_TAG_KEYS)
        return f"[out:json][timeout:{int(self._timeout)}];({selectors});out body {self._max_results};"

    async def fetch_pois(self, bounds: ViewportBounds) -> list[PointOfInterest]:
        """
        Загружает POI в заданной области.

        Raises:
            PoiProviderError: Сеть, статус ответа или неожиданный формат
        """
        query = self.build_query(bounds)
        try:
            response = await self._client.post(self._url, data={"data": query})
        except httpx.HTTPError as e:
            raise PoiProviderError(f"Overpass недоступен: {e}") from e

        if response.status_code != 200:
            raise PoiProviderError(f"Overpass вернул статус {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise PoiProviderError("Overpass вернул не JSON") from e

        elements = payload.get("elements") if isinstance(payload, dict) else None
        if not isinstance(elements, list):
            raise PoiProviderError("В ответе Overpass нет списка elements")

        pois: list[PointOfInterest] = []
        for element in elements:
            poi = self._parse_element(element)
            if poi is None:
                continue
            pois.append(poi)
            if len(pois) >= self._max_results:
                break

        skipped = len(elements) - len(pois)
        if skipped > 0 and len(pois) < self._max_results:
            await log_warning(f"Overpass: пропущено {skipped} элементов без координат или имени")
        await log_debug(f"Overpass: получено {len(pois)} POI для bbox {bounds.as_overpass_bbox()}")
        return pois

    @staticmethod
    def _parse_element(element: Any) -> PointOfInterest | None:
        """Преобразует элемент Overpass в POI. Неполные элементы пропускаются."""
        if not isinstance(element, dict):
            return None
        tags = element.get("tags") or {}
        name = tags.get("name")
        lat = element.get("lat")
        lon = element.get("lon")
        if not name or lat is None or lon is None:
            return None

        category = next((tags[key] for key in POI_TAG_KEYS if tags.get(key)), "other")
        try:
            return PointOfInterest(
                id=f"{element.get('type', 'node')}/{element.get('id')}",
                name=name,
                category=category,
                latitude=lat,
                longitude=lon,
            )
        except ValueError:
            return None
