"""
School Schemas

Pydantic schemas for request validation and response serialization.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SchoolCreate(BaseModel):
    """Request body for POST /addSchool."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def reject_booleans(cls, value):
        """JSON true/false are not coordinates."""
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value


class SchoolCreateResponse(BaseModel):
    """Response after adding a school."""

    message: str = "School added successfully"
    id: int


class BaseCoords(BaseModel):
    """Reference point distances were measured from."""

    lat: float
    lng: float


class RankedSchool(BaseModel):
    """A stored school annotated with its distance from the reference point."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str
    latitude: float | None
    longitude: float | None
    created_at: datetime | None = None
    distance_km: float | None


class SchoolListResponse(BaseModel):
    """Response for GET /listSchools.

    ``base_coords`` is left unset when the store is empty.
    """

    success: bool = True
    count: int
    base_coords: BaseCoords | None = None
    data: list[RankedSchool]


class ErrorResponse(BaseModel):
    """Flat error body used by POST /addSchool."""

    error: str


class ListErrorResponse(BaseModel):
    """Error body used by GET /listSchools."""

    success: bool = False
    message: str = "Server error"
    error: str
