"""Leaderboards: measured metric change, and projected body-fat change at competition end."""

from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.core.enums import LeaderboardMetric, LeaderboardPeriod
from app.schemas.leaderboard import MetricLeaderboard
from app.schemas.prediction import Leaderboard
from app.services.measurement_store import MeasurementStore
from app.services.metric_leaderboard import metric_leaderboard
from app.services.ranking import RankingEngine

router = APIRouter()


@router.get("", response_model=MetricLeaderboard)
async def change_leaderboard(
    metric: LeaderboardMetric = LeaderboardMetric.BODY_FAT_PCT,
    period: LeaderboardPeriod = LeaderboardPeriod.DAYS_90,
    store: MeasurementStore = Depends(get_store),
):
    """Non-demo users ranked by last - first of the metric within the last `period` days."""
    return await metric_leaderboard(store, metric, period)


@router.get("/predictions", response_model=Leaderboard)
async def prediction_leaderboard(store: MeasurementStore = Depends(get_store)):
    """
    Non-demo users with at least 2 body-fat readings, most predicted fat loss first.
    Top min(3, n/2) are the winner band; the same number at the bottom are in danger.
    """
    return await RankingEngine(store).leaderboard()
