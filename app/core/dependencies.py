"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for sessions and cookie-based authentication.

This module implements:
- AuthenticationManager: resolves the current user from the session cookie
- FastAPI dependencies for optional and required authentication

Dependency Hierarchy:
--------------------
                    ┌─────────────────┐
                    │    get_db()     │
                    └────────┬────────┘
                             │
              ┌──────────────▼──────────────┐
              │ get_current_user_optional() │  → User | None
              └──────────────┬──────────────┘
                             │
                  ┌──────────▼──────────┐
                  │ get_current_user()  │  → User or 401
                  └─────────────────────┘

Usage Examples:
--------------
    # Anonymous allowed
    @router.get("/me")
    async def me(user: Optional[User] = Depends(get_current_user_optional)):
        ...

    # Authentication required
    @router.post("/products")
    async def create(user: User = Depends(get_current_user)):
        ...

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core import exceptions
from app.core.session import SessionCookieManager, get_session_manager
from app.db.database import get_db
from app.db.models import User
from app.services.auth_service import AuthService


# Module logger
logger = logging.getLogger(__name__)


class AuthenticationManager:
    """
    Resolves the current user from a request.

    The cookie is verified cryptographically, then the user row is re-read so
    a deleted user stops resolving immediately.

    Attributes:
        _sessions: SessionCookieManager reading and verifying the cookie
        _auth: AuthService re-reading the user row
    """

    def __init__(
        self,
        sessions: SessionCookieManager,
        db: Session
    ) -> None:
        self._sessions = sessions
        self._auth = AuthService(db)

    def get_current_user_optional(self, request: Request) -> Optional[User]:
        """Current user, or None when there is no valid session."""
        identity = self._sessions.resolve(request)
        return self._auth.resolve_user(identity)

    def get_current_user(self, request: Request) -> User:
        """
        Current user.

        Raises:
            AppException: UNAUTHENTICATED if there is no valid session
        """
        user = self.get_current_user_optional(request)

        if user is None:
            logger.debug(f"Unauthenticated request to {request.url.path}")
            raise exceptions.unauthenticated()

        return user


# =============================================================================
# FASTAPI DEPENDENCY FUNCTIONS
# =============================================================================

async def get_current_user_optional(
    request: Request,
    db: Session = Depends(get_db),
    sessions: SessionCookieManager = Depends(get_session_manager)
) -> Optional[User]:
    """
    FastAPI dependency returning the current user or None.

    Never raises for a missing, malformed, forged or expired cookie.
    """
    return AuthenticationManager(sessions, db).get_current_user_optional(request)


async def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    sessions: SessionCookieManager = Depends(get_session_manager)
) -> User:
    """
    FastAPI dependency requiring an authenticated user.

    Raises:
        AppException: UNAUTHENTICATED (401)
    """
    return AuthenticationManager(sessions, db).get_current_user(request)
