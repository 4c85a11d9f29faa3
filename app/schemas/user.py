"""User schemas: registration, admin competition override, dashboard summary."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.core.enums import Goal
from app.schemas.badge import BadgeRead
from app.schemas.goals import GoalTargets
from app.schemas.prediction import Prediction, Unavailable
from app.schemas.report import SeriesPoint


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    goal: Goal = Goal.MAINTAIN
    is_demo: bool = False


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    goal: Goal
    competition_start: Optional[date] = None
    competition_end: Optional[date] = None
    is_demo: bool
    created_at: datetime


class CompetitionUpdate(BaseModel):
    competition_start: date
    competition_end: Optional[date] = None

    @model_validator(mode="after")
    def check_window(self) -> "CompetitionUpdate":
        if self.competition_end is not None and self.competition_end < self.competition_start:
            raise ValueError("competition_end must not be before competition_start")
        return self


class Unlocks(BaseModel):
    trend: bool  # charts + prediction
    advice: bool  # full comparison / advice-adjacent features


class Dashboard(BaseModel):
    user: UserRead
    confirmed_reports: int
    unlocks: Unlocks
    series: list[SeriesPoint]
    prediction: Prediction | Unavailable
    rank: Optional[int] = None  # 1-based
    total_ranked: int
    badges: list[BadgeRead]
    badge_count: int
    targets: Optional[GoalTargets] = None  # target line on the trend chart
