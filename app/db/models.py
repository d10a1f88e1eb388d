"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

ORM models for the marketplace.

This module defines:
- User: Registered account
- Product: Item listed for bidding
- Bid: Offer placed on a product

Database Schema:
---------------

    ┌─────────────────────────────────────────────────────────────────┐
    │                           users                                  │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (INTEGER, PK)                                                │
    │ name (VARCHAR, NOT NULL)                                        │
    │ email (VARCHAR, UNIQUE, NOT NULL)                               │
    │ password_hash (VARCHAR, NOT NULL)                               │
    │ created_at (DATETIME, DEFAULT now)                              │
    └─────────────────────────────────────────────────────────────────┘
                 │ 1:N (owner_id)                 │ 1:N (user_id)
                 ▼                                │
    ┌──────────────────────────────────────┐     │
    │              products                 │     │
    ├──────────────────────────────────────┤     │
    │ id (INTEGER, PK)                     │     │
    │ title (VARCHAR, NOT NULL)            │     │
    │ description (TEXT, NOT NULL)         │     │
    │ starting_bid (NUMERIC(12,2))         │     │
    │ image_url (VARCHAR, NULLABLE)        │     │
    │ owner_id (INTEGER, FK → users.id)    │     │
    │ created_at (DATETIME)                │     │
    └──────────────────────────────────────┘     │
                 │ 1:N (product_id)               │
                 ▼                                ▼
    ┌─────────────────────────────────────────────────────────────────┐
    │                            bids                                  │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (INTEGER, PK)                                                │
    │ amount (NUMERIC(12,2), NOT NULL)                                │
    │ product_id (INTEGER, FK → products.id)                          │
    │ user_id (INTEGER, FK → users.id)                                │
    │ created_at (DATETIME)                                           │
    └─────────────────────────────────────────────────────────────────┘

Rows are never updated or deleted by the application.

=============================================================================
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.database import Base


MONEY = Numeric(15, 6)


# =============================================================================
# USER MODEL
# =============================================================================

class User(Base):
    """
    User account model.

    Attributes:
        id: Numeric identifier
        name: Display name
        email: Unique login email (case-sensitive exact match)
        password_hash: Bcrypt hashed password
        created_at: Account creation timestamp

    Relationships:
        products: Products listed by this user
        bids: Bids placed by this user
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        doc="Unique login email"
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Bcrypt hashed password"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=func.now(),
        nullable=False
    )

    products: Mapped[List["Product"]] = relationship(
        "Product",
        back_populates="owner"
    )

    bids: Mapped[List["Bid"]] = relationship(
        "Bid",
        back_populates="user"
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


# =============================================================================
# PRODUCT MODEL
# =============================================================================

class Product(Base):
    """
    Product listed for bidding.

    Attributes:
        id: Numeric identifier
        title: Short title
        description: Free-form description
        starting_bid: Minimum price; the first bid must exceed it
        image_url: Optional image reference
        owner_id: User who listed the product
        created_at: Listing timestamp
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    starting_bid: Mapped[Decimal] = mapped_column(MONEY, nullable=False)

    image_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=func.now(),
        nullable=False,
        index=True
    )

    owner: Mapped["User"] = relationship("User", back_populates="products")

    bids: Mapped[List["Bid"]] = relationship(
        "Bid",
        back_populates="product"
    )

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, title={self.title!r})"


# =============================================================================
# BID MODEL
# =============================================================================

class Bid(Base):
    """
    Bid placed on a product.

    Attributes:
        id: Numeric identifier (arrival order)
        amount: Offered price
        product_id: Product bid on
        user_id: Bidder
        created_at: Acceptance timestamp
    """

    __tablename__ = "bids"
    __table_args__ = (
        Index("ix_bids_product_amount", "product_id", "amount"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)

    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id"),
        nullable=False
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=func.now(),
        nullable=False
    )

    product: Mapped["Product"] = relationship("Product", back_populates="bids")

    user: Mapped["User"] = relationship("User", back_populates="bids")

    def __repr__(self) -> str:
        return (
            f"Bid(id={self.id!r}, product_id={self.product_id!r}, "
            f"amount={self.amount!r})"
        )
