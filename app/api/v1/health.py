"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.db.database import get_db
from app.db.init_db import DatabaseInitializer


router = APIRouter(prefix="/health", tags=["Health"])

logger = logging.getLogger(__name__)


class HealthController:
    """Controller for health check operations."""

    def __init__(self, db: Session):
        self._db = db

    def check_database(self) -> str:
        """Check database connectivity."""
        try:
            self._db.execute(text("SELECT 1"))
            return "healthy"
        except SQLAlchemyError as e:
            logger.error(f"❌ Health check query failed: {e}")
            return "unhealthy"

    def get_health(self) -> dict:
        """Get full health status."""
        db_status = self.check_database()

        overall = "healthy" if db_status == "healthy" else "degraded"
        stats = {}
        if db_status == "healthy":
            stats = DatabaseInitializer(session=self._db).get_stats()

        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "database": db_status
            },
            "details": stats
        }


@router.get("")
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns API and database status with row counts.
    """
    controller = HealthController(db)
    return controller.get_health()


@router.get("/ready")
async def readiness_check(db: Session = Depends(get_db)):
    """Readiness probe: ready once the database answers."""
    controller = HealthController(db)
    return {"ready": controller.check_database() == "healthy"}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
