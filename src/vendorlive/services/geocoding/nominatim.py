"""Async HTTP client for Nominatim reverse geocoding."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ...config import settings

logger = logging.getLogger(__name__)


class NominatimClient:
    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.nominatim_base_url).rstrip("/")
        if not self.base_url:
            raise ValueError("Nominatim base URL is not configured.")
        self.user_agent = user_agent or settings.nominatim_user_agent
        self.timeout = timeout if timeout is not None else settings.geocode_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    async def reverse(self, lat: float, lon: float, *, zoom: int = 18) -> Optional[dict[str, Any]]:
        """Raw reverse lookup; None when Nominatim has no match."""

        params = {
            "format": "jsonv2",
            "lat": lat,
            "lon": lon,
            "zoom": zoom,
            "addressdetails": 1,
        }
        async with self._get_client() as client:
            response = await client.get("/reverse", params=params)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()

        if not isinstance(data, dict):
            raise ValueError("Nominatim reverse returned an unexpected payload.")
        if "error" in data:
            logger.debug("Nominatim reverse had no result for %s,%s: %s", lat, lon, data["error"])
            return None
        return data

    async def reverse_address(self, lat: float, lon: float) -> Optional[str]:
        data = await self.reverse(lat, lon)
        if data is None:
            return None
        return format_address(data.get("address") or {})


def format_address(address: dict[str, Any]) -> Optional[str]:
    """Render "{street} {city}, {region}" from a Nominatim address block."""

    street = " ".join(
        part for part in (address.get("house_number"), address.get("road")) if part
    )
    city = address.get("city") or address.get("town") or address.get("village") or ""
    region = address.get("state") or address.get("region") or ""
    head = " ".join(part for part in (street, city) if part)
    return ", ".join(part for part in (head, region) if part) or None
