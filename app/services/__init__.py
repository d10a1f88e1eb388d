"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing the marketplace's business logic.

This package provides:
- UserService: Credential store (registration, credential verification)
- AuthService: Registration, login and current-user resolution
- ProductService: Product creation and listing with highest bids
- BiddingService: Bid listing and the strictly-higher acceptance rule

Architecture Pattern: Service Layer
----------------------------------
    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← Business Logic
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │   SQLAlchemy    │  ← Data Access (via ORM)
    └─────────────────┘

Services receive the request-scoped session in their constructor, commit
their own transactions and raise AppException for rejected operations.

==============================================================================
"""

from .user_service import UserService
from .auth_service import AuthService
from .product_service import ProductService
from .bidding_service import BiddingService

__all__ = [
    "UserService",
    "AuthService",
    "ProductService",
    "BiddingService",
]
