"""
Collection State Schemas

Error values recorded by the collection controller and the views of its
state returned by the API.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.place import Place


class ErrorPhase(str, Enum):
    """Lifecycle phase an error originated in."""

    LOAD = "load"
    SYNC = "sync"
    CANDIDATES = "candidates"


class ErrorInfo(BaseModel):
    """A failure converted into a value for the caller to display."""

    model_config = ConfigDict(frozen=True)

    message: str
    phase: ErrorPhase


class RemovalState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"


class UserPlacesState(BaseModel):
    """Snapshot of the user's collection and its synchronization status."""

    places: List[Place]
    is_loading: bool
    is_syncing: bool
    load_error: Optional[ErrorInfo] = None
    sync_error: Optional[ErrorInfo] = None


class AvailablePlacesState(BaseModel):
    """Candidate places, nearest first."""

    places: List[Place]
    is_fetching: bool
    error: Optional[ErrorInfo] = None


class RemovalStatus(BaseModel):
    state: RemovalState
    target: Optional[Place] = None


class SelectPlaceRequest(BaseModel):
    """Request to add a candidate place to the user's collection."""

    place_id: str = Field(..., min_length=1, description="Id of the candidate place to add")
