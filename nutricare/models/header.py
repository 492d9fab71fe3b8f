"""ORM model for the site header (contact details, logo, social links)."""

import uuid

from sqlalchemy import JSON, Column, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB

from nutricare.models.base import Base


class Header(Base):
    """
    Contact block shown at the top of the marketing site.

    social_links is a list of URLs.
    """

    __tablename__ = "headers"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    phone = Column(String(64), nullable=False)
    whatsapp = Column(String(64), nullable=False)
    email = Column(String(255), nullable=False)
    logo = Column(String(2048), nullable=False)
    social_links = Column(
        JSON().with_variant(JSONB, "postgresql"),
        nullable=False,
        default=list,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
