"""
==============================================================================
User Service Module
==============================================================================

Credential store backed by the users table.

This module implements:
- UserService: registration of credentials and their verification
- Lookups by id and email

Security:
--------
- Passwords are hashed with bcrypt before storage and never logged
- Verification fails closed: an unknown email and a wrong password are
  indistinguishable to the caller

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import exceptions
from app.core.security import SecurityManager, get_security_manager
from app.db.models import User


# Module logger
logger = logging.getLogger(__name__)


class UserService:
    """
    Credential store for user accounts.

    Attributes:
        _db: Database session
        _security: SecurityManager for password hashing

    Example:
        >>> users = UserService(db_session)
        >>> user = users.create_user("Ann", "ann@example.com", "secret123")
        >>> users.verify_credentials("ann@example.com", "secret123") is not None
        True
    """

    def __init__(
        self,
        db: Session,
        security: Optional[SecurityManager] = None
    ) -> None:
        self._db = db
        self._security = security or get_security_manager()

    # =========================================================================
    # CREATE OPERATIONS
    # =========================================================================

    def create_user(self, name: str, email: str, password: str) -> User:
        """
        Create a new user account.

        Args:
            name: Display name
            email: Login email (exact, case-sensitive)
            password: Plain text password, hashed before storage

        Returns:
            Created User model

        Raises:
            AppException: EMAIL_EXISTS if the email is already registered
        """
        if self.get_by_email(email) is not None:
            logger.warning("Registration rejected: email already in use")
            raise exceptions.email_exists(email)

        user = User(
            name=name,
            email=email,
            password_hash=self._security.hash_password(password),
        )

        try:
            self._db.add(user)
            self._db.commit()
            self._db.refresh(user)
        except IntegrityError:
            self._db.rollback()
            logger.warning("Registration rejected: email inserted concurrently")
            raise exceptions.email_exists(email)

        logger.info(f"✅ User registered: id={user.id}")
        return user

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by id, or None."""
        return self._db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by exact email, or None."""
        return self._db.query(User).filter(User.email == email).first()

    # =========================================================================
    # VERIFICATION
    # =========================================================================

    def verify_credentials(self, email: str, password: str) -> Optional[User]:
        """
        Check an email/password pair.

        Returns:
            The matching User, or None on unknown email or wrong password
        """
        user = self.get_by_email(email)

        if user is None:
            return None

        if not self._security.verify_password(password, user.password_hash):
            return None

        return user
