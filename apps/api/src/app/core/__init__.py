"""
Core module - Configuration and database.
"""

from app.core.config import Settings, get_settings, settings
from app.core.database import Base, Database, close_db, create_database, get_db, init_db

__all__ = [
    # Config
    "settings",
    "Settings",
    "get_settings",
    # Database
    "Base",
    "Database",
    "create_database",
    "get_db",
    "init_db",
    "close_db",
]
