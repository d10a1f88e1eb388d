"""
==============================================================================
Bid Schemas Module
==============================================================================

Request and response schemas for bidding.

==============================================================================
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel

from .common import CamelModel, Money
from .user import UserBrief


class BidCreate(BaseModel):
    """Bid payload. The amount is checked by the bidding service."""
    amount: Optional[Any] = None


class BidRecord(CamelModel):
    """Bid row as stored."""
    id: int
    amount: Money
    product_id: int
    user_id: int
    created_at: datetime


class BidDetail(BidRecord):
    """Bid with the bidder's public identity."""
    user: UserBrief


class BidResponse(BaseModel):
    """Single accepted bid."""
    bid: BidRecord


class BidListResponse(BaseModel):
    """Bids for a product, highest first."""
    bids: List[BidDetail]
