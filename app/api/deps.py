"""Shared endpoint dependencies."""

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.user import User
from app.services.measurement_store import MeasurementStore


async def get_store(db: AsyncSession = Depends(get_db)) -> MeasurementStore:
    return MeasurementStore(db)


async def get_user_or_404(user_id: int, db: AsyncSession = Depends(get_db)) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
