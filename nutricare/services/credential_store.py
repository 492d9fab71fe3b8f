"""Persistence for user accounts: one row per username with its password hash."""

import logging
from dataclasses import dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from nutricare.core.errors import AuthenticationUnavailable, DuplicateUsername
from nutricare.models import User
from nutricare.models.user import new_account_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserAccount:
    """
    Account as seen by the auth service.

    password_hash is None unless the caller asked for it explicitly.
    """

    id: str
    username: str
    password_hash: str | None = None


class CredentialStore:
    """
    Account storage backed by the users table.

    Username uniqueness is enforced by the unique index, so concurrent
    registrations of the same name cannot both succeed.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create_account(self, username: str, password_hash: str) -> UserAccount:
        """Insert a new account. Raises DuplicateUsername if the name is taken."""
        account = UserAccount(id=new_account_id(), username=username, password_hash=password_hash)
        self.session.add(
            User(id=account.id, username=account.username, password_hash=account.password_hash)
        )
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise DuplicateUsername()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Credential store write failed: %s", type(e).__name__)
            raise AuthenticationUnavailable() from e
        return account

    def find_by_username(self, username: str) -> UserAccount | None:
        """Return the account with its password hash, or None."""
        row = self._fetch_one(
            select(User.id, User.username, User.password_hash).where(User.username == username)
        )
        if row is None:
            return None
        return UserAccount(id=row.id, username=row.username, password_hash=row.password_hash)

    def find_by_id(self, account_id: str, include_password_hash: bool = False) -> UserAccount | None:
        """Return the account, selecting the hash column only when asked to."""
        columns = [User.id, User.username]
        if include_password_hash:
            columns.append(User.password_hash)
        row = self._fetch_one(select(*columns).where(User.id == account_id))
        if row is None:
            return None
        return UserAccount(
            id=row.id,
            username=row.username,
            password_hash=row.password_hash if include_password_hash else None,
        )

    def update_password_hash(self, account_id: str, password_hash: str) -> bool:
        """Replace the stored hash. Returns False if the account does not exist."""
        stmt = update(User).where(User.id == account_id).values(password_hash=password_hash)
        return self._write(stmt) > 0

    def delete_account(self, account_id: str) -> bool:
        """Delete the account. Returns False if it did not exist."""
        return self._write(delete(User).where(User.id == account_id)) > 0

    def _fetch_one(self, stmt):
        try:
            return self.session.execute(stmt).first()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Credential store read failed: %s", type(e).__name__)
            raise AuthenticationUnavailable() from e

    def _write(self, stmt) -> int:
        try:
            result = self.session.execute(stmt)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Credential store write failed: %s", type(e).__name__)
            raise AuthenticationUnavailable() from e
        return result.rowcount
