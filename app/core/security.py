"""
==============================================================================
Security Module - Authentication & Cryptography
==============================================================================

Password hashing and session token signing for the marketplace.

This module implements:
- SecurityManager: Singleton class for all security operations
- Password hashing using bcrypt (cost factor from settings, default 10)
- Session token generation and verification (signed JWT)
- SessionIdentity: the verified contents of a session token

Token Structure:
---------------
{
    "sub": "42",                  # Subject (user ID, as string)
    "email": "ann@example.com",   # Email for convenience
    "type": "session",            # Token type
    "exp": 1234567890,            # Expiration timestamp
    "iat": 1234567890             # Issued at timestamp
}

Tokens are stateless: nothing is stored server side, so a token stays valid
until it expires even after the cookie holding it is cleared.

==============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from app.config import Settings, get_settings


# Module logger
logger = logging.getLogger(__name__)


class SessionIdentity(BaseModel):
    """Identity asserted by a verified session token."""

    user_id: int
    email: str
    expires_at: datetime


class SecurityManager:
    """
    Centralized security manager for authentication operations.

    Attributes:
        _pwd_context: Passlib context for password hashing
        _settings: Application settings (signing secret, expiry, rounds)

    Example:
        >>> security = SecurityManager()
        >>> hashed = security.hash_password("secret123")
        >>> security.verify_password("secret123", hashed)
        True
        >>> token = security.create_session_token(1, "ann@example.com")
        >>> security.verify_session_token(token).user_id
        1
    """

    # =========================================================================
    # CLASS CONSTANTS
    # =========================================================================

    TOKEN_TYPE_SESSION = "session"

    BCRYPT_SCHEMES = ["bcrypt"]
    BCRYPT_DEPRECATED = "auto"

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """
        Initialize the security manager.

        Args:
            settings: Settings carrying the signing secret (global settings if None)
        """
        self._settings = settings or get_settings()

        self._pwd_context = CryptContext(
            schemes=self.BCRYPT_SCHEMES,
            deprecated=self.BCRYPT_DEPRECATED,
            bcrypt__rounds=self._settings.bcrypt_rounds,
        )

        logger.debug("SecurityManager initialized")

    # =========================================================================
    # PASSWORD HASHING METHODS
    # =========================================================================

    def hash_password(self, plain_password: str) -> str:
        """
        Hash a plain text password using bcrypt.

        Bcrypt generates a random salt and embeds it in the resulting hash.

        Raises:
            ValueError: If the password is empty
        """
        if not plain_password:
            raise ValueError("Password cannot be empty")

        return self._pwd_context.hash(plain_password)

    def verify_password(
        self,
        plain_password: str,
        hashed_password: str
    ) -> bool:
        """
        Verify a plain text password against a bcrypt hash.

        Returns:
            True if password matches, False otherwise (including malformed hashes)
        """
        try:
            return self._pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.warning(f"Password verification error: {type(e).__name__}")
            return False

    # =========================================================================
    # SESSION TOKEN METHODS
    # =========================================================================

    def create_session_token(
        self,
        user_id: int,
        email: str,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create a signed session token for a user.

        Args:
            user_id: Numeric user identifier
            email: User email, carried for convenience
            expires_delta: Custom lifetime (defaults to SESSION_EXPIRE_DAYS)

        Returns:
            Encoded JWT string
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(days=self._settings.session_expire_days))

        payload = {
            "sub": str(user_id),
            "email": email,
            "type": self.TOKEN_TYPE_SESSION,
            "exp": expire,
            "iat": now,
        }

        token = jwt.encode(
            payload,
            self._settings.session_secret_key,
            algorithm=self._settings.jwt_algorithm
        )

        logger.debug(f"Created session token, expires: {expire.isoformat()}")
        return token

    def verify_session_token(self, token: Optional[str]) -> Optional[SessionIdentity]:
        """
        Verify and decode a session token.

        Validates signature, expiration, token type and required claims.
        Every failure yields None so callers can fall back to "anonymous".

        Args:
            token: The JWT string (may be None or empty)

        Returns:
            SessionIdentity if valid, None otherwise
        """
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self._settings.session_secret_key,
                algorithms=[self._settings.jwt_algorithm]
            )
        except ExpiredSignatureError:
            logger.debug("Session token rejected: expired")
            return None
        except JWTError as e:
            logger.warning(f"Session token rejected: {e}")
            return None

        if payload.get("type") != self.TOKEN_TYPE_SESSION:
            logger.warning(f"Session token rejected: wrong type {payload.get('type')!r}")
            return None

        try:
            return SessionIdentity(
                user_id=int(payload["sub"]),
                email=payload["email"],
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError):
            logger.warning("Session token rejected: missing or malformed claims")
            return None


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_security_manager() -> SecurityManager:
    """
    Get the global SecurityManager instance (singleton pattern).

    Returns:
        Global SecurityManager instance
    """
    return SecurityManager(get_settings())
