# src/web_client/infra/api_clients.py
"""
HTTP клиенты веб-клиента к Places API.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from src.config import settings
from src.core.locations.models import Location
from src.core.poi.models import PointOfInterest, ViewportBounds


class BaseClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self.client.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self.client.get(path, params=params)
        response.raise_for_status()
        return response.json()


class PlacesApiClient(BaseClient):
    """Клиент Places API: места и POI."""

    def __init__(
        self,
        base_url: str | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(
            base_url or settings.deployment.API_BASE_URL,
            timeout=settings.poi.OVERPASS_TIMEOUT + 5.0,
            transport=transport,
        )

    async def get_locations(self, category: str | None = None) -> list[Location]:
        params = {"category": category} if category else None
        data = await self._get("/api/locations", params=params)
        return [Location.model_validate(item) for item in data]

    async def get_pois(self, bounds: ViewportBounds) -> list[PointOfInterest]:
        """
        POI в области через прокси Places API.

        Raises:
            httpx.HTTPStatusError: API вернул ошибку (например, 502 от провайдера)
        """
        data = await self._get("/api/pois", params=bounds.model_dump())
        return [PointOfInterest.model_validate(item) for item in data]
