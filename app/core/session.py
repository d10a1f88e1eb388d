"""
==============================================================================
Session Cookie Module
==============================================================================

Carries signed session tokens in an HTTP cookie.

Cookie attributes:
-----------------
- HttpOnly
- SameSite=Lax
- Path=/
- Max-Age = SESSION_EXPIRE_DAYS
- Secure only in production (or when SESSION_COOKIE_SECURE is set)

Logout deletes the cookie. There is no server-side session table, so a copy
of the token kept by a client remains valid until it expires.

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Request, Response

from app.config import Settings, get_settings
from app.core.security import SecurityManager, SessionIdentity, get_security_manager


# Module logger
logger = logging.getLogger(__name__)


class SessionCookieManager:
    """
    Issues, reads and revokes the session cookie.

    Example:
        >>> sessions = SessionCookieManager()
        >>> sessions.issue(response, user.id, user.email)
        >>> identity = sessions.resolve(request)
        >>> sessions.revoke(response)
    """

    def __init__(
        self,
        security: Optional[SecurityManager] = None,
        settings: Optional[Settings] = None
    ) -> None:
        self._settings = settings or get_settings()
        self._security = security or get_security_manager()

    @property
    def cookie_name(self) -> str:
        """Name of the session cookie."""
        return self._settings.session_cookie_name

    def issue(self, response: Response, user_id: int, email: str) -> str:
        """
        Sign a session token and attach it to the response as a cookie.

        Returns:
            The issued token
        """
        token = self._security.create_session_token(user_id, email)

        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self._settings.session_expire_seconds,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self._settings.cookie_secure,
        )

        logger.debug(f"Session cookie issued for user {user_id}")
        return token

    def resolve(self, request: Request) -> Optional[SessionIdentity]:
        """Read the cookie from a request and verify its token."""
        token = request.cookies.get(self.cookie_name)
        return self._security.verify_session_token(token)

    def revoke(self, response: Response) -> None:
        """Delete the session cookie. Safe to call without a session."""
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self._settings.cookie_secure,
        )


@lru_cache(maxsize=1)
def get_session_manager() -> SessionCookieManager:
    """Get the global SessionCookieManager instance."""
    return SessionCookieManager(get_security_manager(), get_settings())
