"""
Schools module - Registration and distance-ranked listing of schools.
"""

from app.modules.schools.models import School
from app.modules.schools.repository import SchoolRepository
from app.modules.schools.router import router

__all__ = ["School", "SchoolRepository", "router"]
