"""
Coordinate type used as the reference point when ordering places by distance.
"""

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """A position in decimal degrees. Immutable."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180.0, le=180.0, description="Longitude in decimal degrees")

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"
