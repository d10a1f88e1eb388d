"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

Modules:
--------
- exceptions: AppException class, factory functions and handlers
- security: SecurityManager for password hashing and session tokens
- session: SessionCookieManager carrying tokens in a cookie
- dependencies: FastAPI dependencies resolving the current user

Usage:
------
    from app.core import AppException, get_security_manager
    from app.core.dependencies import get_current_user

    from app.core import exceptions
    raise exceptions.product_not_found(product_id)

==============================================================================
"""

from .exceptions import (
    AppException,
    register_exception_handlers,
)
from .security import SecurityManager, SessionIdentity, get_security_manager
from .session import SessionCookieManager, get_session_manager

__all__ = [
    # Exceptions
    "AppException",
    "register_exception_handlers",
    # Security
    "SecurityManager",
    "SessionIdentity",
    "get_security_manager",
    # Session cookie
    "SessionCookieManager",
    "get_session_manager",
]
