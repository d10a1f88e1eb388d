"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- auth: Signup, login, logout and current user
- products: Product listing
- bids: Bid listing and placement

==============================================================================
"""

from . import health, auth, products, bids

__all__ = ["health", "auth", "products", "bids"]
