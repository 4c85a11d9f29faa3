"""Prediction and leaderboard schemas. Predictions are computed on demand, never stored."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel

from app.core.enums import Band, UnavailableReason


class Prediction(BaseModel):
    user_id: int
    name: str
    first_fat_pct: float
    current_fat_pct: float
    predicted_fat_pct: float
    predicted_change: float  # predicted - first (negative = fat lost)
    data_points: int
    competition_end: date


class Unavailable(BaseModel):
    """No prediction yet; the trend feature stays locked."""

    user_id: int
    reason: UnavailableReason


class RankedPrediction(Prediction):
    rank: int  # 1-based
    band: Optional[Band] = None


class Matchup(BaseModel):
    """By current trend, `loser` owes `winner`."""

    winner: RankedPrediction
    loser: RankedPrediction


class Leaderboard(BaseModel):
    total: int
    winner_count: int
    loser_start: int  # 0-based index where the danger band starts
    entries: list[RankedPrediction]
    matchups: list[Matchup]
