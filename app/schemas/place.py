"""
Place Schemas

Pydantic models for the places offered as candidates and the places kept
in the user's collection, in the JSON shape used by the places store.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.geo import Coordinates


class PlaceImage(BaseModel):
    """Image reference for a place. Opaque to the collection logic."""

    model_config = ConfigDict(frozen=True)

    src: str = Field(..., description="Image file name or URL")
    alt: str = Field("", description="Alternative text for the image")


class Place(BaseModel):
    """
    A place a user can pick.

    Identity is the ``id`` field; the display attributes are carried along
    untouched. Instances are immutable once constructed.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1, description="Unique place identifier")
    title: str = Field(..., description="Display name of the place")
    image: Optional[PlaceImage] = Field(None, description="Image shown for the place")
    description: Optional[str] = Field(None, description="Free-form description")
    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in decimal degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in decimal degrees")

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.lat, longitude=self.lon)


class UserPlacesPayload(BaseModel):
    """Body of the user places resource, both when read and when written."""

    places: List[Place] = Field(default_factory=list, description="Full user collection")


class AvailablePlacesPayload(BaseModel):
    """Body of the candidate places listing."""

    places: List[Place] = Field(default_factory=list, description="All available places")
