"""
User Places API Endpoint

Exposes the user's collection of places: reading it, adding a place,
dismissing a failed save and the confirm-before-remove flow.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas.collection import RemovalStatus, SelectPlaceRequest, UserPlacesState
from app.services.session import PlacePickerSession, get_session

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_places_state(session: PlacePickerSession) -> UserPlacesState:
    controller = session.controller
    return UserPlacesState(
        places=list(controller.places),
        is_loading=controller.is_loading,
        is_syncing=controller.is_syncing,
        load_error=controller.load_error,
        sync_error=controller.sync_error,
    )


@router.get("", response_model=UserPlacesState)
async def get_user_places(session: PlacePickerSession = Depends(get_session)):
    """
    Get the user's places, most recently added first.
    """
    return _user_places_state(session)


@router.post("/reload", response_model=UserPlacesState)
async def reload_user_places(session: PlacePickerSession = Depends(get_session)):
    """
    Fetch the user's places from the store again, replacing the local collection.
    """
    await session.controller.load()
    return _user_places_state(session)


@router.post("", response_model=UserPlacesState)
async def select_place(
    request: SelectPlaceRequest, session: PlacePickerSession = Depends(get_session)
):
    """
    Add an available place to the front of the user's collection.

    If saving fails the collection is returned unchanged and ``sync_error``
    is set.

    Raises:
        HTTPException: If the place is not among the available places
    """
    place = session.controller.find_candidate(request.place_id)
    if place is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Place {request.place_id} is not an available place",
        )

    await session.controller.add_place(place)
    return _user_places_state(session)


@router.delete("/error", response_model=UserPlacesState)
async def clear_sync_error(session: PlacePickerSession = Depends(get_session)):
    """
    Dismiss the last failed save.
    """
    session.controller.clear_error()
    return _user_places_state(session)


@router.get("/removal", response_model=RemovalStatus)
async def get_removal_status(session: PlacePickerSession = Depends(get_session)):
    return session.removal.status()


@router.post("/removal/confirm", response_model=UserPlacesState)
async def confirm_removal(session: PlacePickerSession = Depends(get_session)):
    """
    Remove the place awaiting confirmation. Does nothing if none is pending.
    """
    await session.removal.confirm()
    return _user_places_state(session)


@router.post("/removal/cancel", response_model=RemovalStatus)
async def cancel_removal(session: PlacePickerSession = Depends(get_session)):
    session.removal.cancel()
    return session.removal.status()


@router.post("/{place_id}/removal", response_model=RemovalStatus)
async def request_removal(place_id: str, session: PlacePickerSession = Depends(get_session)):
    """
    Ask for confirmation before removing a place from the user's collection.

    Raises:
        HTTPException: If the place is not in the collection
    """
    place = session.controller.find_place(place_id)
    if place is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Place {place_id} is not in the collection",
        )

    session.removal.request_removal(place)
    logger.info("Removal of place %s awaiting confirmation", place_id)
    return session.removal.status()
