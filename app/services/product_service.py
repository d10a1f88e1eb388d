"""
==============================================================================
Product Service Module
==============================================================================

Product listing: creation, listing and single-product lookup, each product
annotated with its current highest bid.

Highest bid selection:
---------------------
For every product the highest bid is the one with the largest amount; among
equal amounts the earliest (lowest id) wins. The lookup is a single query
using ROW_NUMBER() partitioned by product.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from app.core import exceptions
from app.db.models import Bid, Product
from app.schemas.product import ProductSummary
from app.utils.validators import AmountValidator


# Module logger
logger = logging.getLogger(__name__)


class ProductService:
    """
    Service for listing products.

    Attributes:
        _db: Database session
        _amount_validator: Validator for the starting bid

    Example:
        >>> service = ProductService(db_session)
        >>> product = service.create_product(user.id, "Lamp", "Brass", 10)
        >>> service.list_products()[0].title
        'Lamp'
    """

    def __init__(self, db: Session) -> None:
        self._db = db
        self._amount_validator = AmountValidator()

    # =========================================================================
    # CREATE OPERATIONS
    # =========================================================================

    def create_product(
        self,
        owner_id: Optional[int],
        title: Optional[str],
        description: Optional[str],
        starting_bid: object,
        image_url: Optional[str] = None
    ) -> Product:
        """
        Create a product owned by an authenticated user.

        Raises:
            AppException: UNAUTHENTICATED if there is no owner
            AppException: MISSING_FIELDS if title, description or starting bid is absent
            AppException: INVALID_INPUT if the starting bid is not a positive amount
        """
        if owner_id is None:
            raise exceptions.unauthenticated()

        title = (title or "").strip()
        description = (description or "").strip()

        # bool is a subclass of int
        is_number = (
            isinstance(starting_bid, (int, float))
            and not isinstance(starting_bid, bool)
        )
        if not title or not description or not is_number:
            raise exceptions.missing_fields()

        is_valid, amount, error = self._amount_validator.validate(starting_bid)
        if not is_valid:
            logger.warning(f"Product rejected: {error}")
            raise exceptions.invalid_input("Starting bid must be a positive number")

        product = Product(
            title=title,
            description=description,
            starting_bid=amount,
            image_url=(image_url or "").strip() or None,
            owner_id=owner_id,
        )

        self._db.add(product)
        self._db.commit()
        self._db.refresh(product)

        logger.info(f"✅ Product listed: id={product.id} by user {owner_id}")
        return product

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def list_products(self) -> List[ProductSummary]:
        """All products, newest first, each with its highest bid."""
        products = (
            self._db.query(Product)
            .options(joinedload(Product.owner))
            .order_by(Product.created_at.desc(), Product.id.desc())
            .all()
        )

        highest = self._highest_bids(p.id for p in products)

        return [ProductSummary.from_model(p, highest.get(p.id)) for p in products]

    def get_product(self, product_id: int) -> Optional[ProductSummary]:
        """Single product with its highest bid, or None if not found."""
        product = (
            self._db.query(Product)
            .options(joinedload(Product.owner))
            .filter(Product.id == product_id)
            .first()
        )

        if product is None:
            return None

        highest = self._highest_bids([product.id])
        return ProductSummary.from_model(product, highest.get(product.id))

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _highest_bids(self, product_ids: Iterable[int]) -> Dict[int, Bid]:
        """Map product id to its highest bid for the given products."""
        product_ids = list(product_ids)
        if not product_ids:
            return {}

        ranked = (
            select(
                Bid.id.label("bid_id"),
                func.row_number().over(
                    partition_by=Bid.product_id,
                    order_by=(Bid.amount.desc(), Bid.id.asc()),
                ).label("rank"),
            )
            .where(Bid.product_id.in_(product_ids))
            .subquery()
        )

        bids = (
            self._db.query(Bid)
            .options(joinedload(Bid.user))
            .join(ranked, ranked.c.bid_id == Bid.id)
            .filter(ranked.c.rank == 1)
            .all()
        )

        return {bid.product_id: bid for bid in bids}
