"""ORM model for user accounts (credential storage)."""

import uuid

from sqlalchemy import Column, String

from nutricare.models.base import Base


def new_account_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """
    User account for JWT authentication.

    username is unique at the storage layer (ix_users_username); the application
    never checks for an existing username before inserting.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_account_id)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
