"""Registration, login and bearer-token authentication."""

import logging
from collections.abc import Mapping

from nutricare.core.errors import (
    InvalidCredentials,
    InvalidToken,
    MissingToken,
    ValidationError,
)
from nutricare.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    PasswordHasher,
    TokenIssuer,
)
from nutricare.schemas.auth import CurrentUser
from nutricare.services.credential_store import CredentialStore, UserAccount

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def normalize_username(username: str) -> str:
    """Strip surrounding whitespace and check length; no whitespace inside the name."""
    name = (username or "").strip()
    if not (USERNAME_MIN_LEN <= len(name) <= USERNAME_MAX_LEN):
        raise ValidationError("Invalid username length.")
    if any(ch.isspace() for ch in name):
        raise ValidationError("Username must not contain whitespace.")
    return name


def validate_password(password: str) -> None:
    if not isinstance(password, str) or not (
        PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN
    ):
        raise ValidationError("Invalid password length.")


def extract_bearer_token(headers: Mapping[str, str]) -> str:
    """Return the token from an `Authorization: Bearer <token>` header or raise MissingToken."""
    authorization = headers.get("authorization") or headers.get("Authorization")
    if not authorization:
        raise MissingToken()
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token or " " in token:
        raise MissingToken()
    return token


class AuthService:
    """
    Account registration, password login and request authentication.

    When resolve_live_account is True every authenticated request re-reads the
    account from the store; otherwise the token claims are trusted as issued.
    """

    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
        resolve_live_account: bool = True,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.issuer = issuer
        self.resolve_live_account = resolve_live_account

    def register(self, username: str, password: str) -> UserAccount:
        """Create an account. Raises ValidationError or DuplicateUsername."""
        name = normalize_username(username)
        validate_password(password)
        account = self.store.create_account(name, self.hasher.hash(password))
        logger.info("Registered account id=%s", account.id)
        return UserAccount(id=account.id, username=account.username)

    def login(self, username: str, password: str) -> str:
        """Return a signed access token, or raise InvalidCredentials."""
        account = self._check_password(username, password)
        logger.info("Login succeeded for account id=%s", account.id)
        return self.issuer.issue(account)

    def authenticate(self, headers: Mapping[str, str]) -> CurrentUser:
        """
        Resolve request headers to an identity.
        Raises MissingToken, InvalidToken, or AuthenticationUnavailable.
        """
        token = extract_bearer_token(headers)
        claims = self.issuer.decode(token)
        if not self.resolve_live_account:
            return CurrentUser(id=claims.subject_id, username=claims.username)

        account = self.store.find_by_id(claims.subject_id)
        if account is None:
            logger.info("Token subject %s no longer exists", claims.subject_id)
            raise InvalidToken()
        return CurrentUser(id=account.id, username=account.username)

    def change_password(
        self, identity: CurrentUser, current_password: str, new_password: str
    ) -> None:
        """Replace the password after checking the current one."""
        validate_password(new_password)
        account = self.store.find_by_id(identity.id, include_password_hash=True)
        if account is None or not self.hasher.verify(current_password, account.password_hash):
            raise InvalidCredentials()
        if not self.store.update_password_hash(account.id, self.hasher.hash(new_password)):
            raise InvalidCredentials()
        logger.info("Password changed for account id=%s", account.id)

    def delete_account(self, identity: CurrentUser) -> None:
        """Delete the caller's account. Outstanding tokens stop resolving once it is gone."""
        if not self.store.delete_account(identity.id):
            raise InvalidToken()
        logger.info("Deleted account id=%s", identity.id)

    def _check_password(self, username: str, password: str) -> UserAccount:
        name = (username or "").strip()
        account = self.store.find_by_username(name) if name else None
        if account is None:
            self.hasher.dummy_verify(password or "")
            logger.info("Login failed")
            raise InvalidCredentials()
        if not self.hasher.verify(password or "", account.password_hash):
            logger.info("Login failed")
            raise InvalidCredentials()
        return account
