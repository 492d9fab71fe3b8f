"""Core app configuration, database, security and errors."""

from nutricare.core.config import get_settings, settings
from nutricare.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
