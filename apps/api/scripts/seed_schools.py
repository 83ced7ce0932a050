"""
Seed Sample Schools

Inserts a few sample schools so /listSchools has something to rank.
Schools that already exist (same name and address, ignoring case) are skipped.

Usage:
    cd apps/api
    python scripts/seed_schools.py
"""

import asyncio
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from app.core.config import settings
from app.core.database import create_database
from app.modules.schools.repository import SchoolRepository

SAMPLE_SCHOOLS = [
    {
        "name": "Greenwood High School",
        "address": "12 Park Lane, Bengaluru",
        "latitude": 12.9716,
        "longitude": 77.5946,
    },
    {
        "name": "Riverside Public School",
        "address": "4 River Road, Mysuru",
        "latitude": 12.2958,
        "longitude": 76.6394,
    },
    {
        "name": "Hillview Academy",
        "address": "88 Hill Street, Chennai",
        "latitude": 13.0827,
        "longitude": 80.2707,
    },
]


async def seed_schools() -> None:
    """Create the sample schools that don't exist yet."""
    database = create_database(settings)

    async with database.session_maker() as db:
        for sample in SAMPLE_SCHOOLS:
            existing = await SchoolRepository.get_by_name_and_address(
                db, sample["name"], sample["address"]
            )
            if existing:
                print(f"School already exists: {sample['name']} (ID: {existing.id})")
                continue

            school = await SchoolRepository.create(db, **sample)
            print(f"Created school: {school.name}")
            print(f"  ID: {school.id}")
            print(f"  Coordinates: {school.latitude}, {school.longitude}")

    await database.dispose()


if __name__ == "__main__":
    asyncio.run(seed_schools())
