"""Metric-change leaderboard schemas."""

from pydantic import BaseModel

from app.core.enums import LeaderboardMetric, LeaderboardPeriod


class MetricEntry(BaseModel):
    rank: int  # 1-based
    user_id: int
    name: str
    first_value: float
    last_value: float
    change: float  # last - first, rounded to 0.1
    data_points: int
    badge_count: int


class MetricLeaderboard(BaseModel):
    metric: LeaderboardMetric
    period: LeaderboardPeriod
    lower_is_better: bool
    entries: list[MetricEntry]
