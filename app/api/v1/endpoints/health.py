"""Liveness and readiness checks."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db
from app.models.report import Report
from app.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def health():
    settings = get_settings()
    return {"status": "ok", "app": settings.app_name, "competition_days": settings.competition_days}


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: measurement store reachable. Reports participant and pending-report counts."""
    try:
        participants = await db.scalar(select(func.count(User.id)).where(User.is_demo.is_(False)))
        pending = await db.scalar(select(func.count(Report.id)).where(Report.confirmed.is_(False)))
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": str(e)},
        )
    return {
        "status": "ok",
        "database": db.bind.dialect.name,
        "participants": participants,
        "pending_reports": pending,
    }
