"""
Address geocoding through a Nominatim-compatible search endpoint.
"""
from typing import Optional
import httpx
import structlog

from ..config import settings
from ..schemas.location import GeoPoint

logger = structlog.get_logger(__name__)


class NominatimGeocoder:
    """Resolve a postal address to coordinates; a miss is returned as None."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.geocoder_url
        self.timeout = timeout if timeout is not None else settings.geocoder_timeout_seconds
        self.transport = transport

    async def geocode(self, address: str) -> Optional[GeoPoint]:
        params = {"format": "json", "q": address, "limit": 1}
        headers = {"Accept-Language": "pt-BR"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.base_url, params=params, headers=headers)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("geocode_failed", address=address, error=str(e))
            return None

        if not data:
            logger.info("geocode_miss", address=address)
            return None
        try:
            return GeoPoint(latitude=float(data[0]["lat"]), longitude=float(data[0]["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("geocode_bad_payload", address=address, error=str(e))
            return None
