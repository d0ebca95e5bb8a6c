import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.database.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health")
async def health(db: Session = Depends(get_db)):
    """Comprobación de funcionamiento"""
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.warning("Base de datos no disponible: %s", e)
        database = "disconnected"

    return {
        "status": "healthy" if database == "connected" else "unhealthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "database": database
    }
