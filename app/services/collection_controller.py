"""
Collection Controller

Owns the user's ordered collection of places and keeps it synchronized with
the places store.

Mutations are applied to the local collection immediately and then the
entire resulting collection is written to the store. When a write fails the
collection is restored to the snapshot taken by that same call and the
failure is recorded as a sync error. Overlapping writes are not serialized;
whichever write reaches the store last wins there.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

from app.schemas.collection import ErrorInfo, ErrorPhase
from app.schemas.place import Place
from app.services.distance import sort_places_by_distance
from app.services.places_store import CandidateSource, PersistenceGateway, PlacesStoreError
from app.services.position_provider import PositionProvider, PositionUnavailableError

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Could not fetch user places, please try again later."
ADD_ERROR_MESSAGE = "Failed to update places."
REMOVE_ERROR_MESSAGE = "Failed to delete place."
CANDIDATES_ERROR_MESSAGE = "Could not fetch places, please try again later."


def _error_info(error: Exception, phase: ErrorPhase, default_message: str) -> ErrorInfo:
    return ErrorInfo(message=str(error) or default_message, phase=phase)


class CollectionController:
    """
    Single writer of the user's collection.

    Gateway and position failures never propagate out of this class; they
    are stored in ``load_error``, ``sync_error`` and ``candidates_error``.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        candidate_source: CandidateSource,
        position_provider: PositionProvider,
    ):
        self._gateway = gateway
        self._candidate_source = candidate_source
        self._position_provider = position_provider

        self.places: Tuple[Place, ...] = ()
        self._loads_in_flight = 0
        self.load_error: Optional[ErrorInfo] = None
        self.sync_error: Optional[ErrorInfo] = None
        self._writes_in_flight = 0

        self.candidates: List[Place] = []
        self._candidate_fetches_in_flight = 0
        self.candidates_error: Optional[ErrorInfo] = None

    @property
    def is_loading(self) -> bool:
        return self._loads_in_flight > 0

    @property
    def is_syncing(self) -> bool:
        return self._writes_in_flight > 0

    @property
    def is_fetching_candidates(self) -> bool:
        return self._candidate_fetches_in_flight > 0

    def contains(self, place_id: str) -> bool:
        return any(place.id == place_id for place in self.places)

    def find_place(self, place_id: str) -> Optional[Place]:
        return next((place for place in self.places if place.id == place_id), None)

    def find_candidate(self, place_id: str) -> Optional[Place]:
        return next((place for place in self.candidates if place.id == place_id), None)

    async def start(self) -> None:
        """
        Load the user's collection and the sorted candidates side by side.
        """
        await asyncio.gather(self.load(), self.refresh_candidates())

    async def load(self) -> None:
        """
        Replace the local collection with the one held by the store.

        ``is_loading`` stays true while any load is in flight. On failure the
        collection is left empty and ``load_error`` is set.
        """
        self._loads_in_flight += 1
        try:
            places = await self._gateway.read_all()
        except PlacesStoreError as e:
            logger.warning("Loading user places failed: %s", str(e))
            self.places = ()
            self.load_error = _error_info(e, ErrorPhase.LOAD, LOAD_ERROR_MESSAGE)
        else:
            self.places = self._unique(places)
            self.load_error = None
            logger.info("Loaded %d user places", len(self.places))
        finally:
            self._loads_in_flight -= 1

    async def add_place(self, place: Place) -> Tuple[Place, ...]:
        """
        Prepend ``place`` to the collection and store the result.

        Adding a place whose id is already present changes nothing and sends
        no write.

        Returns:
            The collection once the write has settled
        """
        if self.contains(place.id):
            return self.places

        snapshot = self.places
        self.places = (place,) + snapshot
        logger.info("Added place %s, syncing %d places", place.id, len(self.places))
        await self._sync(self.places, snapshot, ADD_ERROR_MESSAGE)
        return self.places

    async def remove_place(self, place_id: str) -> Tuple[Place, ...]:
        """
        Drop the place with ``place_id`` from the collection and store the result.

        Removing an id that is not present changes nothing and sends no write.

        Returns:
            The collection once the write has settled
        """
        if not self.contains(place_id):
            return self.places

        snapshot = self.places
        self.places = tuple(place for place in snapshot if place.id != place_id)
        logger.info("Removed place %s, syncing %d places", place_id, len(self.places))
        await self._sync(self.places, snapshot, REMOVE_ERROR_MESSAGE)
        return self.places

    def clear_error(self) -> None:
        """Dismiss the last sync error. The collection is left as is."""
        self.sync_error = None

    async def refresh_candidates(self) -> None:
        """
        Fetch the available places and order them by distance to the current position.

        If the position or the listing cannot be obtained, ``candidates`` is
        left empty and ``candidates_error`` is set; an unsorted listing is
        never shown in its place.
        """
        self._candidate_fetches_in_flight += 1
        try:
            position = await self._position_provider.get_position()
            places = await self._candidate_source.list_places()
        except (PositionUnavailableError, PlacesStoreError) as e:
            logger.warning("Fetching available places failed: %s", str(e))
            self.candidates = []
            self.candidates_error = _error_info(e, ErrorPhase.CANDIDATES, CANDIDATES_ERROR_MESSAGE)
        else:
            self.candidates = sort_places_by_distance(places, position)
            self.candidates_error = None
            logger.info("Sorted %d available places around %s", len(self.candidates), position)
        finally:
            self._candidate_fetches_in_flight -= 1

    async def _sync(
        self, places: Tuple[Place, ...], snapshot: Tuple[Place, ...], default_message: str
    ) -> None:
        self._writes_in_flight += 1
        try:
            await self._gateway.write_all(places)
        except PlacesStoreError as e:
            logger.warning("Syncing user places failed, rolling back: %s", str(e))
            self.places = snapshot
            self.sync_error = _error_info(e, ErrorPhase.SYNC, default_message)
        finally:
            self._writes_in_flight -= 1

    @staticmethod
    def _unique(places) -> Tuple[Place, ...]:
        seen = set()
        unique = []
        for place in places:
            if place.id in seen:
                logger.warning("Dropping duplicate place %s from stored collection", place.id)
                continue
            seen.add(place.id)
            unique.append(place)
        return tuple(unique)
