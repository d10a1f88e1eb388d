"""
==============================================================================
Product Endpoints
==============================================================================

Listing, creation and lookup of products with their highest bid.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core import exceptions
from app.core.dependencies import get_current_user
from app.db.database import get_db
from app.db.models import User
from app.services.product_service import ProductService
from app.schemas.product import (
    ProductCreate,
    ProductRecord,
    ProductResponse,
    ProductDetailResponse,
    ProductListResponse,
)
from app.utils.validators import parse_product_id


router = APIRouter(prefix="/products", tags=["Products"])


class ProductController:
    """Controller for product operations."""

    def __init__(self, db: Session):
        self._service = ProductService(db)

    def list_products(self) -> ProductListResponse:
        """List all products, newest first."""
        return ProductListResponse(products=self._service.list_products())

    def create(self, data: ProductCreate, user: User) -> ProductResponse:
        """Create a product owned by the current user."""
        product = self._service.create_product(
            owner_id=user.id,
            title=data.title,
            description=data.description,
            starting_bid=data.starting_bid,
            image_url=data.image_url,
        )
        return ProductResponse(product=ProductRecord.model_validate(product))

    def get(self, raw_id: str) -> ProductDetailResponse:
        """Get one product."""
        product_id = parse_product_id(raw_id)
        if product_id is None:
            raise exceptions.invalid_product_id(raw_id)

        summary = self._service.get_product(product_id)
        if summary is None:
            raise exceptions.product_not_found(product_id)

        return ProductDetailResponse(product=summary)


@router.get("", response_model=ProductListResponse)
async def list_products(db: Session = Depends(get_db)):
    """List all products with their current highest bid."""
    controller = ProductController(db)
    return controller.list_products()


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    data: ProductCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List a new product. Requires a session."""
    controller = ProductController(db)
    return controller.create(data, user)


@router.get("/{product_id}", response_model=ProductDetailResponse)
async def get_product(product_id: str, db: Session = Depends(get_db)):
    """Get a product with its current highest bid."""
    controller = ProductController(db)
    return controller.get(product_id)
