"""
School Repository

Database operations for school records.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.schools.models import School

logger = logging.getLogger(__name__)


class SchoolRepository:
    """Repository for school database operations."""

    @staticmethod
    async def get_by_name_and_address(
        db: AsyncSession,
        name: str,
        address: str,
    ) -> School | None:
        """
        Find a school by name and address, ignoring case.

        Args:
            db: Database session
            name: School name
            address: School address

        Returns:
            School instance or None if not found
        """
        result = await db.execute(
            select(School)
            .where(
                func.lower(School.name) == name.lower(),
                func.lower(School.address) == address.lower(),
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        name: str,
        address: str,
        latitude: float,
        longitude: float,
    ) -> School:
        """
        Insert a new school and commit.

        Args:
            db: Database session
            name: School name
            address: Street address
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            Created School instance with its assigned id
        """
        school = School(
            name=name,
            address=address,
            latitude=latitude,
            longitude=longitude,
        )

        db.add(school)
        await db.commit()
        await db.refresh(school)

        logger.info(f"Created school: {school.id} - {school.name}")
        return school

    @staticmethod
    async def list_all(db: AsyncSession) -> list[School]:
        """Return every school in insertion order."""
        result = await db.execute(select(School).order_by(School.id))
        return list(result.scalars().all())
