"""
PlacePicker Session

Wires the collection controller and the removal flow to their
collaborators. One session lives for the whole process and is handed to
the API through the ``get_session`` dependency, which reads it from ``app.state``.
"""

import logging

from fastapi import Request

from app.core.config import Settings, settings
from app.services.collection_controller import CollectionController
from app.services.places_store import PlacesStoreClient, places_store
from app.services.position_provider import PositionProvider, build_position_provider
from app.services.removal_confirmation import RemovalConfirmationFlow

logger = logging.getLogger(__name__)


class PlacePickerSession:
    def __init__(self, store: PlacesStoreClient, position_provider: PositionProvider):
        self.store = store
        self.position_provider = position_provider
        self.controller = CollectionController(
            gateway=store, candidate_source=store, position_provider=position_provider
        )
        self.removal = RemovalConfirmationFlow(self.controller)

    async def start(self) -> None:
        logger.info("Starting session against places store %s", settings.PLACES_API_URL)
        await self.controller.start()

    async def close(self) -> None:
        await self.store.close()
        close = getattr(self.position_provider, "close", None)
        if close is not None:
            await close()


def build_session(config: Settings = settings) -> PlacePickerSession:
    return PlacePickerSession(store=places_store, position_provider=build_position_provider(config))


def get_session(request: Request) -> PlacePickerSession:
    """Dependency returning the session created at application startup."""
    return request.app.state.session
