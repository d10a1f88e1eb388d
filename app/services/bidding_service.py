"""
==============================================================================
Bidding Service Module
==============================================================================

Bid listing and bid placement.

Acceptance Rule:
---------------
A bid is accepted only if its amount is strictly greater than the product's
effective current highest bid:

    effective_highest = max(bid.amount for bid in product.bids)
                        if product has bids else product.starting_bid

Equal amounts are rejected, so accepted bids on a product form a strictly
increasing sequence starting above the starting bid.

Placement Flow:
--------------
    ┌─────────────┐
    │ place_bid() │
    └──────┬──────┘
           │ no user               → UNAUTHENTICATED (401)
           │ bad amount            → INVALID_AMOUNT (400)
    ┌──────▼──────────────┐
    │ SELECT product      │ no row → PRODUCT_NOT_FOUND (404)
    │ FOR UPDATE          │
    └──────┬──────────────┘
    ┌──────▼──────────────┐
    │ read highest bid    │ amount <= highest → BID_TOO_LOW (400)
    └──────┬──────────────┘
    ┌──────▼──────────────┐
    │ INSERT bid, COMMIT  │ lost race → BID_CONFLICT (409)
    └─────────────────────┘

The lock, the read and the insert share one transaction. On PostgreSQL and
MySQL the product row lock serializes bidders on the same product; on SQLite
the database write lock does, and the losing writer's statement fails.

==============================================================================
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, joinedload

from app.core import exceptions
from app.core.exceptions import AppException
from app.db.models import Bid, Product
from app.utils.validators import AmountValidator, format_amount


# Module logger
logger = logging.getLogger(__name__)


class BiddingService:
    """
    Service enforcing the monotonic highest-bid rule.

    Attributes:
        _db: Database session
        _amount_validator: Validator for bid amounts

    Example:
        >>> service = BiddingService(db_session)
        >>> bid = service.place_bid(product.id, user.id, 12.5)
        >>> [b.amount for b in service.list_bids(product.id)]
        [Decimal('12.500000')]
    """

    def __init__(self, db: Session) -> None:
        self._db = db
        self._amount_validator = AmountValidator()

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def list_bids(self, product_id: int) -> List[Bid]:
        """
        All bids for a product, highest amount first.

        Equal amounts keep arrival order. An unknown product yields an empty
        list.
        """
        return (
            self._db.query(Bid)
            .options(joinedload(Bid.user))
            .filter(Bid.product_id == product_id)
            .order_by(Bid.amount.desc(), Bid.id.asc())
            .all()
        )

    def current_highest(self, product: Product) -> Decimal:
        """Effective current highest bid of a product."""
        top = (
            self._db.query(Bid.amount)
            .filter(Bid.product_id == product.id)
            .order_by(Bid.amount.desc(), Bid.id.asc())
            .first()
        )
        return top[0] if top is not None else product.starting_bid

    # =========================================================================
    # BID PLACEMENT
    # =========================================================================

    def place_bid(
        self,
        product_id: int,
        user_id: Optional[int],
        amount: object
    ) -> Bid:
        """
        Place a bid on a product.

        Args:
            product_id: Product to bid on
            user_id: Authenticated bidder (None if anonymous)
            amount: Raw amount from the request

        Returns:
            The accepted Bid

        Raises:
            AppException: UNAUTHENTICATED, INVALID_AMOUNT, PRODUCT_NOT_FOUND,
                BID_TOO_LOW or BID_CONFLICT
        """
        if user_id is None:
            raise exceptions.unauthenticated()

        value = self._amount_validator.parse(amount)
        if value is None:
            raise exceptions.invalid_amount()

        try:
            product = (
                self._db.query(Product)
                .filter(Product.id == product_id)
                .with_for_update()
                .first()
            )

            if product is None:
                raise exceptions.product_not_found(product_id)

            highest = self.current_highest(product)

            if value <= highest:
                logger.warning(
                    f"Bid rejected on product {product_id}: "
                    f"{format_amount(value)} <= {format_amount(highest)}"
                )
                raise exceptions.bid_too_low(format_amount(highest))

            bid = Bid(amount=value, product_id=product.id, user_id=user_id)
            self._db.add(bid)
            self._db.commit()

        except AppException:
            self._db.rollback()
            raise

        except OperationalError as e:
            self._db.rollback()
            logger.warning(f"Bid on product {product_id} lost a concurrent write: {e.orig}")
            raise exceptions.bid_conflict()

        self._db.refresh(bid)

        logger.info(
            f"✅ Bid accepted: id={bid.id} product={product_id} "
            f"user={user_id} amount={format_amount(value)}"
        )
        return bid
