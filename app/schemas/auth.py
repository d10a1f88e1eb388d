"""
==============================================================================
Authentication Schemas Module
==============================================================================

Request and response schemas for authentication endpoints.

Request fields are optional at the schema level so that blank or absent
values reach the service, which answers with "Missing fields".

==============================================================================
"""

from typing import Optional

from pydantic import BaseModel, field_validator

from .user import PublicUser


class SignupRequest(BaseModel):
    """Registration payload."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else None


class LoginRequest(BaseModel):
    """Login credentials."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Single user response."""
    user: PublicUser


class CurrentUserResponse(BaseModel):
    """Current user, or null when anonymous."""
    user: Optional[PublicUser] = None
