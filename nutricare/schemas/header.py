"""Request/response schemas for the site header resource."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HeaderCreate(BaseModel):
    """Header fields; phone, whatsapp, email and logo are required."""

    phone: str = Field(..., min_length=1, max_length=64, description="Contact phone")
    whatsapp: str = Field(..., min_length=1, max_length=64, description="WhatsApp number")
    email: str = Field(..., min_length=3, max_length=255, description="Contact e-mail")
    logo: str = Field(..., min_length=1, max_length=2048, description="Logo URL")
    social_links: list[str] = Field(default_factory=list, description="Social network links")


class HeaderUpdate(BaseModel):
    """Partial update; omitted fields keep their value."""

    phone: str | None = Field(default=None, min_length=1, max_length=64)
    whatsapp: str | None = Field(default=None, min_length=1, max_length=64)
    email: str | None = Field(default=None, min_length=3, max_length=255)
    logo: str | None = Field(default=None, min_length=1, max_length=2048)
    social_links: list[str] | None = None


class HeaderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    phone: str
    whatsapp: str
    email: str
    logo: str
    social_links: list[str]
    created_at: datetime | None = None
