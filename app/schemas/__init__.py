"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Common: camelCase base model, Money type, success response
- User: Public user representations
- Auth: Signup/login payloads and responses
- Product: Product payloads and summaries
- Bid: Bid payloads and listings

==============================================================================
"""

from .common import CamelModel, Money, SuccessResponse
from .user import PublicUser, UserBrief
from .auth import SignupRequest, LoginRequest, UserResponse, CurrentUserResponse
from .product import (
    ProductCreate,
    ProductRecord,
    ProductSummary,
    HighestBid,
    ProductResponse,
    ProductDetailResponse,
    ProductListResponse,
)
from .bid import BidCreate, BidRecord, BidDetail, BidResponse, BidListResponse

__all__ = [
    # Common
    "CamelModel",
    "Money",
    "SuccessResponse",
    # User
    "PublicUser",
    "UserBrief",
    # Auth
    "SignupRequest",
    "LoginRequest",
    "UserResponse",
    "CurrentUserResponse",
    # Product
    "ProductCreate",
    "ProductRecord",
    "ProductSummary",
    "HighestBid",
    "ProductResponse",
    "ProductDetailResponse",
    "ProductListResponse",
    # Bid
    "BidCreate",
    "BidRecord",
    "BidDetail",
    "BidResponse",
    "BidListResponse",
]
