"""
Schools Service Layer

Business logic for registering schools and listing them by distance.

This module implements:
1. Add School:
   - Reject case-insensitive duplicates of (name, address)
   - Insert the record and return it with its assigned id

2. List Schools By Distance:
   - Resolve the reference point (caller coordinate, first stored school, or 0,0)
   - Compute haversine distances and order nearest first
   - Schools with unusable coordinates are listed last with a null distance

Store failures (SQLAlchemy errors and connection-level OSErrors raised by
the driver) are wrapped in StoreError carrying the underlying message.
The duplicate check and insert are not one transaction; the unique index
on (lower(name), lower(address)) turns a lost race into DuplicateSchoolError.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.schools import geo
from app.modules.schools.geo import Coordinate
from app.modules.schools.models import School
from app.modules.schools.repository import SchoolRepository
from app.modules.schools.schemas import (
    BaseCoords,
    RankedSchool,
    SchoolCreate,
    SchoolListResponse,
)

logger = logging.getLogger(__name__)


class SchoolServiceError(Exception):
    """Base exception for school service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class DuplicateSchoolError(SchoolServiceError):
    """Raised when a school with the same name and address already exists."""

    def __init__(self, message: str = "School already exists"):
        super().__init__(
            message=message,
            error_code="DUPLICATE_SCHOOL",
            status_code=400,
        )


class StoreError(SchoolServiceError):
    """Raised when the database fails. Carries the underlying message."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="STORE_ERROR",
            status_code=500,
        )


def _store_message(exc: Exception) -> str:
    """Extract the driver's message from a SQLAlchemy or connection error."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


async def add_school(db: AsyncSession, data: SchoolCreate) -> School:
    """
    Register a new school.

    Args:
        db: Database session
        data: Validated school payload

    Returns:
        The created School

    Raises:
        DuplicateSchoolError: If (name, address) already exists, ignoring case
        StoreError: If the database fails
    """
    try:
        existing = await SchoolRepository.get_by_name_and_address(db, data.name, data.address)
        if existing is not None:
            raise DuplicateSchoolError()

        return await SchoolRepository.create(
            db,
            name=data.name,
            address=data.address,
            latitude=data.latitude,
            longitude=data.longitude,
        )
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Unique index rejected school insert: name={data.name}")
        raise DuplicateSchoolError() from e
    except (SQLAlchemyError, OSError) as e:
        await db.rollback()
        logger.exception("Database error while adding school")
        raise StoreError(_store_message(e)) from e


def _to_ranked(school: School, distance_km: float | None) -> RankedSchool:
    return RankedSchool(
        id=school.id,
        name=school.name,
        address=school.address,
        latitude=geo.parse_coordinate(school.latitude),
        longitude=geo.parse_coordinate(school.longitude),
        created_at=school.created_at,
        distance_km=distance_km,
    )


async def list_schools_by_distance(
    db: AsyncSession,
    requested: Coordinate | None = None,
) -> SchoolListResponse:
    """
    List every school ordered by distance from a reference point.

    Args:
        db: Database session
        requested: Caller-supplied reference point, if valid

    Returns:
        Count, resolved reference point and the ranked schools. On an
        empty store, base_coords is left unset.

    Raises:
        StoreError: If the database fails
    """
    try:
        schools = await SchoolRepository.list_all(db)
    except (SQLAlchemyError, OSError) as e:
        logger.exception("Database error while listing schools")
        raise StoreError(_store_message(e)) from e

    origin = geo.resolve_reference_point(requested, schools)
    if not schools or origin is None:
        return SchoolListResponse(success=True, count=0, data=[])

    ranked = geo.rank_by_distance(origin, schools)

    return SchoolListResponse(
        success=True,
        count=len(ranked),
        base_coords=BaseCoords(lat=origin.lat, lng=origin.lng),
        data=[_to_ranked(school, distance) for school, distance in ranked],
    )
