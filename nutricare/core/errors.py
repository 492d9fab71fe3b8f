"""Authentication errors raised by the core and mapped to HTTP responses in main."""


class AuthError(Exception):
    """Base for authentication failures. `message` is safe to return to clients."""

    code = "auth_error"
    status_code = 400
    default_message = "Authentication failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthError):
    code = "validation_error"
    status_code = 422
    default_message = "Invalid input."


class DuplicateUsername(AuthError):
    code = "duplicate_username"
    status_code = 409
    default_message = "Username is already taken."


class InvalidCredentials(AuthError):
    """Wrong username or wrong password; the two cases are indistinguishable."""

    code = "invalid_credentials"
    status_code = 401
    default_message = "Invalid username or password."


class MissingToken(AuthError):
    code = "missing_token"
    status_code = 401
    default_message = "Not authenticated"


class InvalidToken(AuthError):
    """Bad signature, expired, or unusable claims."""

    code = "invalid_token"
    status_code = 403
    default_message = "Invalid or expired token"


class AuthenticationUnavailable(AuthError):
    """The credential store could not be reached."""

    code = "authentication_unavailable"
    status_code = 503
    default_message = "Authentication is temporarily unavailable."


class InvalidHashFormat(AuthError):
    """Stored password hash is not a bcrypt hash. Never returned to clients."""

    code = "invalid_hash_format"
    status_code = 500
    default_message = "Stored password hash is malformed."
