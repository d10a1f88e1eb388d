"""
==============================================================================
Bid Endpoints
==============================================================================

Bid listing and placement for a product.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core import exceptions
from app.core.dependencies import get_current_user
from app.db.database import get_db
from app.db.models import User
from app.services.bidding_service import BiddingService
from app.schemas.bid import (
    BidCreate,
    BidDetail,
    BidRecord,
    BidResponse,
    BidListResponse,
)
from app.utils.validators import parse_product_id


router = APIRouter(prefix="/products/{product_id}/bids", tags=["Bids"])


class BidController:
    """Controller for bid operations."""

    def __init__(self, db: Session):
        self._service = BiddingService(db)

    @staticmethod
    def _product_id(raw_id: str) -> int:
        product_id = parse_product_id(raw_id)
        if product_id is None:
            raise exceptions.invalid_product_id(raw_id)
        return product_id

    def list_bids(self, raw_id: str) -> BidListResponse:
        """List bids, highest first."""
        bids = self._service.list_bids(self._product_id(raw_id))
        return BidListResponse(bids=[BidDetail.model_validate(b) for b in bids])

    def place(self, raw_id: str, data: BidCreate, user: User) -> BidResponse:
        """Place a bid as the current user."""
        bid = self._service.place_bid(self._product_id(raw_id), user.id, data.amount)
        return BidResponse(bid=BidRecord.model_validate(bid))


@router.get("", response_model=BidListResponse)
async def list_bids(product_id: str, db: Session = Depends(get_db)):
    """List bids for a product. Unknown products have no bids."""
    controller = BidController(db)
    return controller.list_bids(product_id)


@router.post("", response_model=BidResponse, status_code=201)
async def place_bid(
    product_id: str,
    data: BidCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Place a bid. Must be strictly higher than the current highest."""
    controller = BidController(db)
    return controller.place(product_id, data, user)
