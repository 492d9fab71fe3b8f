"""Declarative Base shared by the users and headers tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
