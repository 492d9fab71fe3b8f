"""Pydantic request/response schemas."""

from nutricare.schemas.auth import (
    ChangePasswordRequest,
    CurrentUser,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from nutricare.schemas.header import HeaderCreate, HeaderResponse, HeaderUpdate
from nutricare.schemas.health import HealthResponse

__all__ = [
    "ChangePasswordRequest",
    "CurrentUser",
    "ErrorResponse",
    "HeaderCreate",
    "HeaderResponse",
    "HeaderUpdate",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "RegisterResponse",
    "TokenResponse",
]
