"""
Removal Confirmation

Gates removal of a place from the user's collection behind an explicit
confirm or cancel step.
"""

import logging
from typing import Optional

from app.schemas.collection import RemovalState, RemovalStatus
from app.schemas.place import Place
from app.services.collection_controller import CollectionController

logger = logging.getLogger(__name__)


class RemovalConfirmationFlow:
    """
    Two-state machine: ``idle`` with no target, ``pending`` with one target.

    Only one removal can be pending; a new request replaces the current
    target. Confirming or cancelling while idle does nothing.
    """

    def __init__(self, controller: CollectionController):
        self._controller = controller
        self.target: Optional[Place] = None

    @property
    def state(self) -> RemovalState:
        return RemovalState.IDLE if self.target is None else RemovalState.PENDING

    def status(self) -> RemovalStatus:
        return RemovalStatus(state=self.state, target=self.target)

    def request_removal(self, place: Place) -> None:
        if self.target is not None and self.target.id != place.id:
            logger.debug("Replacing pending removal of %s with %s", self.target.id, place.id)
        self.target = place

    def cancel(self) -> None:
        self.target = None

    async def confirm(self) -> None:
        """
        Close the flow and remove the pending target from the collection.
        """
        target = self.target
        if target is None:
            return
        self.target = None
        await self._controller.remove_place(target.id)
