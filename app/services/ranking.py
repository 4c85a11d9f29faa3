"""Prediction ranking across all participants.

Every non-demo user with a fittable body-fat trend is ranked by
predicted_change ascending (most fat lost first). Ties keep store order.
"""

from __future__ import annotations

import logging

from app.core.constants import MAX_BAND_SIZE
from app.core.enums import Band, UnavailableReason
from app.core.exceptions import PredictionUnavailable, UserNotFound
from app.models.user import User
from app.schemas.prediction import Leaderboard, Matchup, Prediction, RankedPrediction, Unavailable
from app.services.measurement_store import MeasurementStore
from app.services.trend import predict_trend

logger = logging.getLogger(__name__)


def winner_count(total: int) -> int:
    """Size of the winner band (and, symmetrically, the danger band)."""
    return min(MAX_BAND_SIZE, total // 2)


def loser_start(total: int) -> int:
    """0-based index where the danger band begins."""
    return total - winner_count(total)


def band_for(index: int, total: int) -> Band | None:
    if index < winner_count(total):
        return Band.WINNER
    if index >= loser_start(total):
        return Band.DANGER
    return None


def sort_predictions(predictions: list[Prediction]) -> list[Prediction]:
    # sorted() is stable: equal changes keep input order
    return sorted(predictions, key=lambda p: p.predicted_change)


class RankingEngine:
    def __init__(self, store: MeasurementStore):
        self.store = store

    async def _predict(self, user: User) -> Prediction | Unavailable:
        if user.competition_end is None:
            return Unavailable(user_id=user.id, reason=UnavailableReason.NO_COMPETITION_END)

        series = await self.store.get_confirmed_series(user.id)
        try:
            trend = predict_trend(
                [(p.measured_at, p.body_fat_pct) for p in series], user.competition_end
            )
        except PredictionUnavailable as e:
            logger.debug("No prediction for user %s: %s", user.id, e)
            return Unavailable(user_id=user.id, reason=e.reason)

        return Prediction(
            user_id=user.id,
            name=user.name,
            first_fat_pct=trend.first_value,
            current_fat_pct=trend.last_value,
            predicted_fat_pct=trend.predicted,
            predicted_change=trend.predicted_change,
            data_points=trend.data_points,
            competition_end=user.competition_end,
        )

    async def predict_user(self, user_id: int) -> Prediction | Unavailable:
        """Prediction for one user, or Unavailable when no line can be fitted."""
        user = await self.store.get_user(user_id)
        if user is None:
            raise UserNotFound(user_id)
        return await self._predict(user)

    async def rank_all(self) -> list[Prediction]:
        """All eligible predictions, most negative change first. Empty when nobody qualifies."""
        predictions = []
        for user in await self.store.list_rankable_users():
            outcome = await self._predict(user)
            if isinstance(outcome, Prediction):
                predictions.append(outcome)
        return sort_predictions(predictions)

    async def rank_of(self, user_id: int) -> tuple[int | None, int]:
        """(0-based index or None, total ranked)."""
        ranking = await self.rank_all()
        index = next((i for i, p in enumerate(ranking) if p.user_id == user_id), None)
        return index, len(ranking)

    async def leaderboard(self) -> Leaderboard:
        ranking = await self.rank_all()
        total = len(ranking)
        entries = [
            RankedPrediction(**p.model_dump(), rank=i + 1, band=band_for(i, total))
            for i, p in enumerate(ranking)
        ]
        wc = winner_count(total)
        matchups = [
            Matchup(winner=entries[i], loser=entries[total - 1 - i]) for i in range(wc)
        ]
        return Leaderboard(
            total=total,
            winner_count=wc,
            loser_start=loser_start(total),
            entries=entries,
            matchups=matchups,
        )
