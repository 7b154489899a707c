"""
Places Store Service

Client for the remote places store. The store exposes the list of all
available places and a single "user places" resource that is always read
and written as a whole.

Endpoints:
    GET /places          -> {"places": [...]}
    GET /user-places     -> {"places": [...]}
    PUT /user-places     <- {"places": [...]}
"""

import logging
from typing import Any, List, Optional, Protocol, Sequence, Tuple

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.schemas.health import ServiceHealth
from app.schemas.place import AvailablePlacesPayload, Place, UserPlacesPayload

logger = logging.getLogger(__name__)

USER_PLACES_PATH = "/user-places"
PLACES_PATH = "/places"


class PlacesStoreError(Exception):
    """Base exception for places store errors."""


class TransportError(PlacesStoreError):
    """Raised when the store cannot be reached or answers with a non-success status."""


class DecodeError(PlacesStoreError):
    """Raised when the store answers with a malformed body."""


class PersistenceGateway(Protocol):
    """Reads and writes the full user collection as a unit."""

    async def read_all(self) -> Tuple[Place, ...]: ...

    async def write_all(self, places: Sequence[Place]) -> None: ...


class CandidateSource(Protocol):
    """Read-only listing of every place a user can pick."""

    async def list_places(self) -> List[Place]: ...


class PlacesStoreClient:
    """
    HTTP client for the places store.

    Implements both PersistenceGateway and CandidateSource.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self._api_url = base_url or settings.PLACES_API_URL
        self._timeout = timeout if timeout is not None else settings.PLACES_API_TIMEOUT
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Get or create the HTTP client for the places store.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self._api_url, timeout=self._timeout)
        return self._client

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            TransportError: On network failure, timeout or non-success status
            DecodeError: If the body is not valid JSON
        """
        try:
            client = self._get_client()
            response = await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("Request to places store timed out: %s %s", method, path)
            raise TransportError("Request to places store timed out") from e
        except httpx.HTTPError as e:
            logger.error("Network error while contacting places store: %s", str(e))
            raise TransportError(f"Network error: {str(e)}") from e

        if not 200 <= response.status_code < 300:
            logger.error(
                "Places store returned status %s for %s %s", response.status_code, method, path
            )
            raise TransportError(f"Places store returned status {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            logger.error("Places store returned a non-JSON body for %s %s", method, path)
            raise DecodeError(f"Invalid response body: {str(e)}") from e

    async def read_all(self) -> Tuple[Place, ...]:
        """
        Fetch the user's full collection of places.

        Returns:
            The collection in stored order

        Raises:
            TransportError: If the request fails
            DecodeError: If the payload does not describe a list of places
        """
        data = await self._request("GET", USER_PLACES_PATH)
        try:
            payload = UserPlacesPayload.model_validate(data)
        except ValidationError as e:
            logger.error("Failed to parse user places: %s", str(e))
            raise DecodeError(f"Invalid user places payload: {str(e)}") from e
        return tuple(payload.places)

    async def write_all(self, places: Sequence[Place]) -> None:
        """
        Replace the user's collection in the store with ``places``.

        The request body always carries the complete collection.

        Raises:
            TransportError: If the request fails
            DecodeError: If the store's answer is malformed
        """
        body = UserPlacesPayload(places=list(places)).model_dump(mode="json", exclude_none=True)
        data = await self._request("PUT", USER_PLACES_PATH, json=body)
        if not isinstance(data, dict):
            raise DecodeError("Invalid response body: expected a JSON object")
        logger.debug("Stored %d user places", len(places))

    async def list_places(self) -> List[Place]:
        """
        Fetch every available place.

        Raises:
            TransportError: If the request fails
            DecodeError: If the payload does not describe a list of places
        """
        data = await self._request("GET", PLACES_PATH)
        try:
            payload = AvailablePlacesPayload.model_validate(data)
        except ValidationError as e:
            logger.error("Failed to parse available places: %s", str(e))
            raise DecodeError(f"Invalid places payload: {str(e)}") from e
        return payload.places

    async def health_check(self) -> ServiceHealth:
        """
        Perform a health check of the places store.
        """
        try:
            client = self._get_client()
            response = await client.get(PLACES_PATH)

            if response.status_code == 200:
                return ServiceHealth(healthy=True, message="Places store is responding")
            return ServiceHealth(
                healthy=False,
                message=f"Places store returned status code: {response.status_code}",
            )

        except httpx.TimeoutException:
            return ServiceHealth(healthy=False, message="Places store request timed out")
        except Exception as e:  # pylint: disable=broad-except
            return ServiceHealth(healthy=False, message=f"Places store check failed: {str(e)}")

    async def close(self):
        """
        Close the HTTP client.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Singleton instance for dependency injection
places_store = PlacesStoreClient()
