"""
Position Provider

Resolves the current position used as the reference point for ordering
candidate places. Either a fixed, configured coordinate or an IP based
geolocation lookup.
"""

import logging
from typing import Optional, Protocol

import httpx
from pydantic import ValidationError

from app.core.config import Settings
from app.schemas.geo import Coordinates

logger = logging.getLogger(__name__)


class PositionUnavailableError(Exception):
    """Raised when the current position cannot be determined."""


class PositionProvider(Protocol):
    async def get_position(self) -> Coordinates: ...


class StaticPositionProvider:
    """Yields a configured position, or fails when none is configured."""

    def __init__(self, coordinates: Optional[Coordinates] = None):
        self._coordinates = coordinates

    async def get_position(self) -> Coordinates:
        if self._coordinates is None:
            raise PositionUnavailableError("No device position is configured")
        return self._coordinates


class IpGeolocationPositionProvider:
    """
    Looks up the position of the host through an IP geolocation endpoint.

    The endpoint must answer with a JSON object carrying either ``lat``/``lon``
    or ``latitude``/``longitude``.
    """

    def __init__(self, url: str, timeout: float = 5.0):
        self._url = url
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def get_position(self) -> Coordinates:
        try:
            client = self._get_client()
            response = await client.get(self._url)
        except httpx.HTTPError as e:
            logger.warning("Geolocation lookup failed: %s", str(e))
            raise PositionUnavailableError(f"Geolocation lookup failed: {str(e)}") from e

        if response.status_code != 200:
            logger.warning("Geolocation service returned status %s", response.status_code)
            raise PositionUnavailableError(
                f"Geolocation service returned status {response.status_code}"
            )

        try:
            data = response.json()
            return Coordinates(
                latitude=data.get("lat", data.get("latitude")),
                longitude=data.get("lon", data.get("longitude")),
            )
        except (ValueError, AttributeError, ValidationError) as e:
            logger.warning("Failed to parse geolocation response: %s", str(e))
            raise PositionUnavailableError("Geolocation service returned no position") from e

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def build_position_provider(settings: Settings) -> PositionProvider:
    """
    Pick the position provider matching the configuration.

    A configured device position wins over the geolocation endpoint. With
    neither configured the provider always reports the position as
    unavailable.
    """
    if settings.DEVICE_LATITUDE is not None and settings.DEVICE_LONGITUDE is not None:
        return StaticPositionProvider(
            Coordinates(latitude=settings.DEVICE_LATITUDE, longitude=settings.DEVICE_LONGITUDE)
        )
    if settings.GEOLOCATION_API_URL:
        return IpGeolocationPositionProvider(
            settings.GEOLOCATION_API_URL, timeout=settings.GEOLOCATION_API_TIMEOUT
        )
    logger.warning("Neither a device position nor a geolocation service is configured")
    return StaticPositionProvider()
