"""Async client for the SPAS power-data API.

Used by dashboards and scripts. Failures are logged and reported as empty
results so a flaky backend degrades the view instead of breaking it.
"""

import logging

import httpx
from pydantic import TypeAdapter

from spas.config import settings
from spas.schemas.region import Region, RegionOutageListing
from spas.schemas.trend import TrendPoint
from spas.services.trends import ALL_REGIONS

logger = logging.getLogger(__name__)

_regions_adapter = TypeAdapter(list[Region])
_trends_adapter = TypeAdapter(list[TrendPoint])


class SpasClient:
    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.client_timeout_seconds

    async def _get_json(self, path: str, params: dict | None = None):
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout) as client:
            resp = await client.get(path, params=params)
            resp.raise_for_status()
            return resp.json()

    async def load_power_data(self) -> list[Region]:
        try:
            return _regions_adapter.validate_python(await self._get_json("/power-data/"))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Power data fetch failed: %s", e)
            return []

    async def get_region(self, name: str) -> Region | None:
        wanted = name.lower()
        for region in await self.load_power_data():
            if region.name.lower() == wanted:
                return region
        return None

    async def get_all_regions(self) -> list[str]:
        return [r.name for r in await self.load_power_data()]

    async def get_outages(self) -> RegionOutageListing:
        try:
            return RegionOutageListing.model_validate(await self._get_json("/power-data/outages"))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Outage data fetch failed: %s", e)
            return RegionOutageListing()

    async def get_trends(self, region: str | None = None, period: str = "24h") -> list[TrendPoint]:
        params = {"period": period}
        if region and region != ALL_REGIONS:
            params["region"] = region
        try:
            return _trends_adapter.validate_python(await self._get_json("/power-data/trends", params))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Trend data fetch failed: %s", e)
            return []
