"""
==============================================================================
User Schemas Module
==============================================================================

Public representations of user accounts. Password hashes never leave the
service layer.

==============================================================================
"""

from .common import CamelModel


class PublicUser(CamelModel):
    """User record stripped of its credential hash."""
    id: int
    name: str
    email: str


class UserBrief(CamelModel):
    """Identity shown next to products and bids."""
    id: int
    name: str
