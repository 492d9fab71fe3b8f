"""SQLAlchemy ORM models."""

from nutricare.models.base import Base
from nutricare.models.header import Header
from nutricare.models.user import User

__all__ = ["Base", "Header", "User"]
