"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy database infrastructure and ORM models.

This package provides:
- DatabaseManager: Singleton class for database connections
- ORM models: User, Product, Bid
- Database initialization utilities

Architecture:
------------
├── database.py   - DatabaseManager class, session factory, SQLite hooks
├── models.py     - SQLAlchemy ORM model classes
└── init_db.py    - DatabaseInitializer for setup

Usage:
------
    from app.db import DatabaseManager, Product, init_db

    init_db()
    with DatabaseManager().session_scope() as session:
        products = session.query(Product).all()

==============================================================================
"""

from .database import DatabaseManager, Base, configure_sqlite_engine, get_db
from .models import User, Product, Bid
from .init_db import DatabaseInitializer, init_db

__all__ = [
    # Database management
    "DatabaseManager",
    "Base",
    "configure_sqlite_engine",
    "get_db",
    # Models
    "User",
    "Product",
    "Bid",
    # Initialization
    "DatabaseInitializer",
    "init_db",
]
