"""Service status and statistics routes."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.file_record import FileRecord
from app.models.user import User
from app.schemas.common import StatsResponse, StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
async def get_status(db: AsyncSession = Depends(get_db)):
    """Verify database connectivity."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return {"db": False}
    return {"db": True}


@router.get("/stats", response_model=StatsResponse)
async def get_stats(db: AsyncSession = Depends(get_db)):
    """Count users and file records."""
    users = await db.scalar(select(func.count()).select_from(User))
    files = await db.scalar(select(func.count()).select_from(FileRecord))
    return {"users": users or 0, "files": files or 0}
