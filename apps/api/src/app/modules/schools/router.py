"""
Schools Router

Endpoints:
- POST /addSchool - Register a school with its coordinates
- GET /listSchools - List schools ordered by distance from a reference point

Error bodies are flat JSON objects rather than FastAPI's ``detail``
envelope. Request validation failures are rendered by the application's
RequestValidationError handler as 400 ``{"errors": [...]}``.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.modules.schools import service
from app.modules.schools.geo import first_present, parse_reference_point
from app.modules.schools.schemas import (
    ErrorResponse,
    ListErrorResponse,
    SchoolCreate,
    SchoolCreateResponse,
    SchoolListResponse,
)
from app.modules.schools.service import DuplicateSchoolError, StoreError

logger = logging.getLogger(__name__)

router = APIRouter()

GENERIC_STORE_MESSAGE = "Database error"


def _client_store_message(e: StoreError) -> str:
    """Raw driver message, unless the deployment opts out of exposing it."""
    return e.message if settings.expose_store_errors else GENERIC_STORE_MESSAGE


@router.post(
    "/addSchool",
    response_model=SchoolCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add School",
    responses={
        400: {
            "description": "Validation error or duplicate school",
            "content": {
                "application/json": {
                    "examples": {
                        "duplicate": {"value": {"error": "School already exists"}},
                        "validation": {
                            "value": {
                                "errors": [
                                    {
                                        "type": "less_than_equal",
                                        "msg": "Input should be less than or equal to 90",
                                        "path": "latitude",
                                        "location": "body",
                                        "value": 95,
                                    }
                                ]
                            }
                        },
                    }
                }
            },
        },
        500: {"description": "Database error", "model": ErrorResponse},
    },
)
async def add_school(
    data: SchoolCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new school.

    Names and addresses are compared case-insensitively against existing
    schools; a match is rejected with 400.
    """
    try:
        school = await service.add_school(db, data)
    except DuplicateSchoolError as e:
        logger.warning(f"Duplicate school rejected: name={data.name}, address={data.address}")
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except StoreError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": _client_store_message(e)},
        )

    logger.info(f"School added: id={school.id}, name={school.name}")
    return SchoolCreateResponse(id=school.id)


@router.get(
    "/listSchools",
    response_model=SchoolListResponse,
    response_model_exclude_unset=True,
    summary="List Schools By Distance",
    responses={
        500: {"description": "Database error", "model": ListErrorResponse},
    },
)
async def list_schools(
    lat: str | None = Query(None, description="Reference latitude"),
    latitude: str | None = Query(None, description="Alias for lat"),
    lng: str | None = Query(None, description="Reference longitude"),
    longitude: str | None = Query(None, description="Alias for lng"),
    lon: str | None = Query(None, description="Alias for lng"),
    db: AsyncSession = Depends(get_db),
):
    """
    List all schools ordered by great-circle distance.

    Without a valid reference point, distances are measured from the first
    stored school, or from (0, 0) if its coordinates are unusable. Schools
    with unusable coordinates are listed last with ``distance_km: null``.
    """
    requested = parse_reference_point(
        first_present(lat, latitude),
        first_present(lng, longitude, lon),
    )

    try:
        return await service.list_schools_by_distance(db, requested)
    except StoreError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ListErrorResponse(error=_client_store_message(e)).model_dump(),
        )
