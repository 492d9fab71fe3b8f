"""Password hashing and JWT creation/verification for authentication."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from nutricare.core.errors import InvalidHashFormat, InvalidToken

if TYPE_CHECKING:
    from nutricare.core.config import Settings
    from nutricare.services.credential_store import UserAccount

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72
BCRYPT_PREFIXES = (b"$2a$", b"$2b$", b"$2y$")
BCRYPT_HASH_LEN = 60

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

REQUIRED_CLAIMS = ("sub", "username", "iat", "exp")


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _decode_hash(hashed: str) -> bytes:
    """Return the stored hash as bytes, or raise InvalidHashFormat if it is not bcrypt."""
    if not isinstance(hashed, str):
        raise InvalidHashFormat()
    raw = hashed.encode("utf-8")
    if len(raw) != BCRYPT_HASH_LEN or not raw.startswith(BCRYPT_PREFIXES):
        raise InvalidHashFormat()
    return raw


class PasswordHasher:
    """Salted one-way bcrypt hashing with a fixed cost factor."""

    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds
        # Used by dummy_verify so unknown users cost one full bcrypt check.
        self._dummy_hash = bcrypt.hashpw(b"nutricare-dummy", bcrypt.gensalt(rounds=rounds))

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Each call uses a fresh salt."""
        return bcrypt.hashpw(
            _password_bytes(plain_password), bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash. Malformed hashes never match."""
        try:
            return bcrypt.checkpw(_password_bytes(plain_password), _decode_hash(hashed))
        except InvalidHashFormat:
            logger.warning("Stored password hash is malformed; treating as mismatch.")
            return False
        except (ValueError, TypeError):
            logger.warning("bcrypt rejected stored password hash; treating as mismatch.")
            return False

    def dummy_verify(self, plain_password: str) -> bool:
        """Spend the same work as verify() when there is no account to check against."""
        bcrypt.checkpw(_password_bytes(plain_password), self._dummy_hash)
        return False


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims from an access token."""

    subject_id: str
    username: str
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """Signs and verifies stateless HMAC JWT access tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 60) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self.expire_minutes * 60

    def issue(self, account: "UserAccount", now: datetime | None = None) -> str:
        """Create a JWT with sub (account id), username, iat and exp."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(account.id),
            "username": account.username,
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry and return the claims.
        Raises InvalidToken on any failure; the cause is only logged.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise InvalidToken()
        except jwt.PyJWTError as e:
            logger.info("Rejected token: %s", type(e).__name__)
            raise InvalidToken()

        sub = payload.get("sub")
        username = payload.get("username")
        if not isinstance(sub, str) or not sub or not isinstance(username, str):
            raise InvalidToken()
        return TokenClaims(
            subject_id=sub,
            username=username,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


def build_password_hasher(settings: "Settings") -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


def build_token_issuer(settings: "Settings") -> TokenIssuer:
    return TokenIssuer(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )
