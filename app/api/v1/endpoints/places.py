"""
Places API Endpoint

Lists the available places, nearest to the current position first.
"""

from fastapi import APIRouter, Depends

from app.schemas.collection import AvailablePlacesState
from app.services.session import PlacePickerSession, get_session

router = APIRouter()


def _available_places_state(session: PlacePickerSession) -> AvailablePlacesState:
    controller = session.controller
    return AvailablePlacesState(
        places=list(controller.candidates),
        is_fetching=controller.is_fetching_candidates,
        error=controller.candidates_error,
    )


@router.get("", response_model=AvailablePlacesState)
async def list_available_places(session: PlacePickerSession = Depends(get_session)):
    """
    Get the available places sorted by distance.

    When the current position could not be resolved the list is empty and
    ``error`` explains why.
    """
    return _available_places_state(session)


@router.post("/refresh", response_model=AvailablePlacesState)
async def refresh_available_places(session: PlacePickerSession = Depends(get_session)):
    """
    Resolve the position again and re-fetch the available places.
    """
    await session.controller.refresh_candidates()
    return _available_places_state(session)
