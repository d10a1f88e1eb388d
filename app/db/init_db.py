"""
==============================================================================
Database Initialization Module
==============================================================================

Startup schema creation plus the row counts reported by /health.

Startup Sequence:
----------------
    create_all() → SELECT 1 → one SELECT per table → log

A failed connection or table check is logged but does not abort startup;
the health endpoint reports the database as unhealthy instead.

Usage:
------
    from app.db import init_db, DatabaseInitializer

    init_db()

    DatabaseInitializer(session=db).get_stats()
    # {"users": 3, "products": 5, "bids": 12}

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.database import DatabaseManager
from app.db.models import Bid, Product, User


# Module logger
logger = logging.getLogger(__name__)

# Tables reported by get_stats, keyed by their stats name
COUNTED_MODELS = {
    "users": User,
    "products": Product,
    "bids": Bid,
}


class DatabaseInitializer:
    """
    Creates the marketplace schema and reads table statistics.

    When given a session (for example the request-scoped one) it reads through
    it and leaves it open; otherwise each read opens its own short
    transactional scope.

    Example:
        >>> DatabaseInitializer().initialize()
    """

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        session: Optional[Session] = None
    ) -> None:
        self._db_manager = db_manager or DatabaseManager()
        self._session = session

    @contextmanager
    def _reader(self) -> Iterator[Session]:
        if self._session is not None:
            yield self._session
        else:
            with self._db_manager.session_scope() as session:
                yield session

    def create_tables(self) -> None:
        """Create users, products and bids if they do not exist."""
        self._db_manager.create_tables()
        logger.info(f"✅ Tables ready: {', '.join(COUNTED_MODELS)}")

    def verify_tables(self) -> bool:
        """True if every marketplace table can be queried."""
        try:
            with self._reader() as session:
                for model in COUNTED_MODELS.values():
                    session.query(model).first()
        except SQLAlchemyError as e:
            logger.error(f"❌ Table verification failed: {e}")
            return False

        return True

    def initialize(self) -> None:
        """Create tables and check that the database answers."""
        self.create_tables()

        if not self._db_manager.verify_connection():
            logger.warning("⚠️ Database connection check failed")
        elif not self.verify_tables():
            logger.warning("⚠️ Database tables are not readable")
        else:
            logger.info("✅ Database initialized")

    def get_stats(self) -> Dict[str, int]:
        """Row count per marketplace table."""
        with self._reader() as session:
            return {
                name: session.query(model).count()
                for name, model in COUNTED_MODELS.items()
            }


def init_db() -> None:
    """Initialize the application database."""
    DatabaseInitializer().initialize()
