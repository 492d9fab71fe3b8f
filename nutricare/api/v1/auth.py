"""Registration, JWT login and the auth dependency (get_current_user)."""

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from nutricare.core.config import get_settings
from nutricare.core.database import get_db
from nutricare.core.security import (
    PasswordHasher,
    TokenIssuer,
    build_password_hasher,
    build_token_issuer,
)
from nutricare.schemas.auth import (
    ChangePasswordRequest,
    CurrentUser,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from nutricare.services.auth import AuthService
from nutricare.services.credential_store import CredentialStore

router = APIRouter()
# Only documents the scheme in OpenAPI; AuthService.authenticate reads the header itself.
security = HTTPBearer(auto_error=False)

AUTH_ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing bearer token"},
    403: {"model": ErrorResponse, "description": "Invalid or expired token"},
    503: {"model": ErrorResponse, "description": "Authentication unavailable"},
}


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return build_password_hasher(get_settings())


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return build_token_issuer(get_settings())


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthService:
    return AuthService(
        store=CredentialStore(db),
        hasher=hasher,
        issuer=issuer,
        resolve_live_account=get_settings().AUTH_RESOLVE_LIVE_ACCOUNT,
    )


def get_current_user(
    request: Request,
    service: Annotated[AuthService, Depends(get_auth_service)],
    _credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT and return the current user."""
    return service.authenticate(request.headers)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}, 422: {"description": "Invalid input"}},
)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> RegisterResponse:
    """Create an account. Usernames are unique."""
    account = service.register(body.username, body.password)
    return RegisterResponse(success=True, id=account.id, username=account.username)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}},
)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    token = service.login(body.username, body.password)
    return TokenResponse(access_token=token, token_type="bearer", expires_in=issuer.expires_in)


@router.get("/me", response_model=CurrentUser, responses=AUTH_ERROR_RESPONSES)
def read_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    return current_user


@router.put(
    "/password",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=AUTH_ERROR_RESPONSES,
)
def change_password(
    body: ChangePasswordRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> Response:
    """Change the caller's password. Existing tokens stay valid until they expire."""
    service.change_password(current_user, body.current_password, body.new_password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT, responses=AUTH_ERROR_RESPONSES)
def delete_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> Response:
    """Delete the caller's account."""
    service.delete_account(current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
