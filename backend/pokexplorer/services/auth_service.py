"""Registration and login."""

from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .base import BaseService
from pokexplorer.core.exceptions import AuthError, ConflictError, InfraError, ValidationError
from pokexplorer.core.security import create_access_token, hash_password, verify_password
from pokexplorer.models.user import User

MISSING_FIELDS_MESSAGE = "Username and password are required"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AuthService(BaseService):
    """Creates accounts and exchanges credentials for session tokens."""

    def __init__(self, db: Session):
        super().__init__()
        self.db = db

    def register(self, username: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        """
        Create a user and issue its first token.

        Args:
            username: Requested account name, trimmed before use
            password: Plain-text password, stored only as a salted hash

        Returns:
            Dictionary with ``id``, ``username`` and ``token``

        Raises:
            ValidationError: If either field is empty
            ConflictError: If the username is taken
            InfraError: If the database write fails
        """
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError(MISSING_FIELDS_MESSAGE)

        if self._find_user(username) is not None:
            raise ConflictError("User already exists")

        user = User(username=username)
        user.hashed_password = hash_password(password)

        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same name
            self.db.rollback()
            raise ConflictError("User already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Failed to create user {username}: {e}")
            raise InfraError("Error creating user", error=str(e)) from e

        self.logger.info(f"Registered user {user.id} ({user.username})")
        return self._session_payload(user)

    def login(self, username: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        """
        Verify credentials and issue a token.

        An unknown username and a wrong password raise the same AuthError so
        that responses do not reveal which usernames exist.
        """
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError(MISSING_FIELDS_MESSAGE)

        user = self._find_user(username)
        if user is None or not verify_password(password, user.hashed_password):
            self.logger.info(f"Failed login for {username}")
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)

        return self._session_payload(user)

    def _find_user(self, username: str) -> Optional[User]:
        try:
            return self.db.execute(
                select(User).where(User.username == username)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise InfraError("Server error", error=str(e)) from e

    @staticmethod
    def _session_payload(user: User) -> Dict[str, Any]:
        return {
            "id": user.id,
            "username": user.username,
            "token": create_access_token(user.id),
        }
