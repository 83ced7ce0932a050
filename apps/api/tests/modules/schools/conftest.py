"""
Fixtures for schools tests.
"""

import itertools
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.core.database import get_db
from app.main import app
from app.modules.schools.models import School
from app.modules.schools.schemas import SchoolCreate


class InMemorySchoolStore:
    """Stand-in for SchoolRepository that keeps schools in a list."""

    def __init__(self, schools: list[School] | None = None):
        self.schools: list[School] = list(schools or [])
        self._ids = itertools.count(len(self.schools) + 1)

    async def get_by_name_and_address(self, db, name: str, address: str) -> School | None:
        for school in self.schools:
            if school.name.lower() == name.lower() and school.address.lower() == address.lower():
                return school
        return None

    async def create(self, db, *, name: str, address: str, latitude: float, longitude: float):
        school = make_school(next(self._ids), name, address, latitude, longitude)
        self.schools.append(school)
        return school

    async def list_all(self, db) -> list[School]:
        return list(self.schools)


def make_school(
    id: int,
    name: str,
    address: str,
    latitude: float,
    longitude: float,
) -> School:
    """Build a detached School instance."""
    school = School(name=name, address=address, latitude=latitude, longitude=longitude)
    school.id = id
    school.created_at = datetime(2026, 1, 1, tzinfo=UTC)
    return school


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.rollback = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def store():
    """Empty in-memory school store."""
    return InMemorySchoolStore()


@pytest.fixture
def school_at_10_10():
    return make_school(1, "Lakeside School", "1 Lake Road", 10.0, 10.0)


@pytest.fixture
def school_without_coords():
    """A stored school whose coordinates are not finite."""
    return make_school(2, "Nowhere School", "Unknown", float("nan"), float("nan"))


@pytest.fixture
def sample_school_create():
    """Create a sample add-school request."""
    return SchoolCreate(
        name="Test School",
        address="123 Test Street",
        latitude=12.9716,
        longitude=77.5946,
    )


@pytest.fixture
def client(mock_db):
    """Test client with the database dependency overridden (lifespan not run)."""

    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def school_factory():
    """Factory for detached School instances."""
    return make_school


@pytest.fixture
def store_factory():
    """Factory for in-memory stores pre-loaded with schools."""
    return InMemorySchoolStore
