"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import health, leaderboard, reports, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(leaderboard.router, prefix="/leaderboard", tags=["leaderboard"])
