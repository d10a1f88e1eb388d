"""
==============================================================================
Authentication Service Module
==============================================================================

Registration, login and current-user resolution.

Authentication Flow:
-------------------
    ┌─────────────┐
    │   Login     │
    │  Request    │
    └──────┬──────┘
           │
    ┌──────▼──────┐     ┌─────────────┐
    │  Required   │────▶│  Missing    │ → MISSING_FIELDS
    │  Fields     │     │  Field      │
    └──────┬──────┘     └─────────────┘
           │
    ┌──────▼──────┐     ┌─────────────┐
    │   Verify    │────▶│ Unknown or  │ → INVALID_CREDENTIALS
    │ Credentials │     │ Wrong Pass  │
    └──────┬──────┘     └─────────────┘
           │
    ┌──────▼──────┐
    │   Issue     │  (session cookie set by the route)
    │  Session    │
    └─────────────┘

Sessions are stateless signed tokens. Logging out clears the cookie only.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core import exceptions
from app.core.security import SessionIdentity
from app.db.models import User
from app.services.user_service import UserService


# Module logger
logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service.

    Attributes:
        _users: Credential store

    Example:
        >>> auth = AuthService(db_session)
        >>> user = auth.register("Ann", "ann@example.com", "secret123")
        >>> user = auth.login("ann@example.com", "secret123")
    """

    def __init__(
        self,
        db: Session,
        users: Optional[UserService] = None
    ) -> None:
        self._users = users or UserService(db)

    def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str]
    ) -> User:
        """
        Register a new account. Does not log the user in.

        Raises:
            AppException: MISSING_FIELDS if any field is blank
            AppException: EMAIL_EXISTS if the email is taken
        """
        if not name or not email or not password:
            raise exceptions.missing_fields()

        return self._users.create_user(name, email, password)

    def login(self, email: Optional[str], password: Optional[str]) -> User:
        """
        Verify credentials.

        Raises:
            AppException: MISSING_FIELDS if email or password is blank
            AppException: INVALID_CREDENTIALS on unknown email or wrong password
        """
        if not email or not password:
            raise exceptions.missing_fields()

        user = self._users.verify_credentials(email, password)

        if user is None:
            logger.warning("Login failed: invalid credentials")
            raise exceptions.invalid_credentials()

        logger.info(f"✅ User authenticated: id={user.id}")
        return user

    def resolve_user(self, identity: Optional[SessionIdentity]) -> Optional[User]:
        """
        Re-read the user named by a verified session.

        Returns:
            The User, or None if there is no session or the user is gone
        """
        if identity is None:
            return None

        user = self._users.get_by_id(identity.user_id)

        if user is None:
            logger.warning(f"Session refers to missing user: {identity.user_id}")

        return user
