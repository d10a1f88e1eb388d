"""
==============================================================================
Authentication Endpoints
==============================================================================

Signup, login, logout and current-user lookup. The session travels in an
HTTP-only cookie set on login and cleared on logout.

==============================================================================
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.core.dependencies import get_current_user_optional
from app.core.session import SessionCookieManager, get_session_manager
from app.db.database import get_db
from app.db.models import User
from app.services.auth_service import AuthService
from app.schemas.auth import (
    LoginRequest,
    SignupRequest,
    UserResponse,
    CurrentUserResponse,
)
from app.schemas.common import SuccessResponse
from app.schemas.user import PublicUser


router = APIRouter(prefix="/auth", tags=["Authentication"])


class AuthController:
    """Controller for authentication operations."""

    def __init__(self, db: Session, sessions: SessionCookieManager):
        self._service = AuthService(db)
        self._sessions = sessions

    def signup(self, request: SignupRequest) -> UserResponse:
        """Register a new account."""
        user = self._service.register(request.name, request.email, request.password)
        return UserResponse(user=PublicUser.model_validate(user))

    def login(self, request: LoginRequest, response: Response) -> UserResponse:
        """Verify credentials and issue the session cookie."""
        user = self._service.login(request.email, request.password)
        self._sessions.issue(response, user.id, user.email)
        return UserResponse(user=PublicUser.model_validate(user))

    def logout(self, response: Response) -> SuccessResponse:
        """Clear the session cookie."""
        self._sessions.revoke(response)
        return SuccessResponse()


@router.post("/signup", response_model=UserResponse)
async def signup(
    request: SignupRequest,
    db: Session = Depends(get_db),
    sessions: SessionCookieManager = Depends(get_session_manager)
):
    """Create an account. Does not log in."""
    controller = AuthController(db, sessions)
    return controller.signup(request)


@router.post("/login", response_model=UserResponse)
async def login(
    request: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    sessions: SessionCookieManager = Depends(get_session_manager)
):
    """Authenticate and set the session cookie."""
    controller = AuthController(db, sessions)
    return controller.login(request, response)


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    response: Response,
    db: Session = Depends(get_db),
    sessions: SessionCookieManager = Depends(get_session_manager)
):
    """Clear the session cookie. Always succeeds."""
    controller = AuthController(db, sessions)
    return controller.logout(response)


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(
    user: Optional[User] = Depends(get_current_user_optional)
):
    """Current user, or null when not logged in."""
    return CurrentUserResponse(
        user=PublicUser.model_validate(user) if user else None
    )
