"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from nutricare.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class RegisterRequest(BaseModel):
    """New account credentials."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )


class RegisterResponse(BaseModel):
    """Created account (never includes the password hash)."""

    success: bool = True
    id: str
    username: str


class LoginRequest(BaseModel):
    """Credentials for login. Lengths are not checked so every failure looks the same."""

    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")


class ChangePasswordRequest(BaseModel):
    """Current password plus the replacement."""

    current_password: str = Field(..., description="Current password")
    new_password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="New password"
    )


class CurrentUser(BaseModel):
    """Authenticated identity (id, username) attached to protected requests."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str


class ErrorResponse(BaseModel):
    """Structured error body for authentication failures."""

    error: str = Field(..., description="Error category")
    detail: str = Field(..., description="Human-readable message")
