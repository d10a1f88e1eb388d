"""
==============================================================================
Product Schemas Module
==============================================================================

Request and response schemas for product listing.

JSON keys are camelCase (``startingBid``, ``imageUrl``, ``highestBid``).

==============================================================================
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from app.db.models import Bid, Product
from .common import CamelModel, Money
from .user import UserBrief


# =============================================================================
# CREATE SCHEMAS
# =============================================================================

class ProductCreate(CamelModel):
    """Product creation payload."""
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    starting_bid: Optional[Any] = None
    image_url: Optional[str] = Field(default=None, max_length=2048)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class HighestBid(CamelModel):
    """Highest bid attached to a product."""
    id: int
    amount: Money
    user: UserBrief


class ProductRecord(CamelModel):
    """Product row as stored."""
    id: int
    title: str
    description: str
    starting_bid: Money
    image_url: Optional[str] = None
    owner_id: int
    created_at: datetime


class ProductSummary(CamelModel):
    """Product with its owner and current highest bid."""
    id: int
    title: str
    description: str
    starting_bid: Money
    image_url: Optional[str] = None
    created_at: datetime
    owner: UserBrief
    highest_bid: Optional[HighestBid] = None

    @classmethod
    def from_model(cls, product: Product, highest_bid: Optional[Bid]) -> "ProductSummary":
        """Build a summary from a product row and its highest bid row."""
        return cls(
            id=product.id,
            title=product.title,
            description=product.description,
            starting_bid=product.starting_bid,
            image_url=product.image_url,
            created_at=product.created_at,
            owner=UserBrief.model_validate(product.owner),
            highest_bid=HighestBid.model_validate(highest_bid) if highest_bid else None,
        )


class ProductResponse(BaseModel):
    """Single created product."""
    product: ProductRecord


class ProductDetailResponse(BaseModel):
    """Single product with highest bid annotation."""
    product: ProductSummary


class ProductListResponse(BaseModel):
    """All products, newest first."""
    products: List[ProductSummary]
