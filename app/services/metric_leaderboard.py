"""Metric-change leaderboard.

Ranks non-demo users by last - first of one measurement over a look-back
window. Body fat ranks the biggest drop first; muscle and InBody score rank
the biggest gain first. Unlike the prediction ranking, no line is fitted.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from app.core.constants import LOWER_IS_BETTER_METRICS, MIN_PREDICTION_POINTS
from app.core.enums import LeaderboardMetric, LeaderboardPeriod
from app.schemas.leaderboard import MetricEntry, MetricLeaderboard
from app.services.measurement_store import MeasurementStore
from app.services.trend import parse_timestamp, round_one


def period_cutoff(period: LeaderboardPeriod, now: datetime) -> datetime | None:
    if period is LeaderboardPeriod.ALL:
        return None
    return now - timedelta(days=int(period.value))


async def metric_leaderboard(
    store: MeasurementStore,
    metric: LeaderboardMetric,
    period: LeaderboardPeriod,
    now: datetime | None = None,
) -> MetricLeaderboard:
    """Users need two confirmed reports inside the window, with the metric set
    on both the first and the last of them."""
    cutoff = period_cutoff(period, now or datetime.now(timezone.utc))
    lower_is_better = metric.value in LOWER_IS_BETTER_METRICS

    rows = []
    for user in await store.list_rankable_users():
        series = await store.get_confirmed_series(user.id)
        if cutoff is not None:
            series = [p for p in series if parse_timestamp(p.measured_at) >= cutoff]
        if len(series) < MIN_PREDICTION_POINTS:
            continue
        first = getattr(series[0], metric.value)
        last = getattr(series[-1], metric.value)
        if first is None or last is None:
            continue
        rows.append(
            {
                "user_id": user.id,
                "name": user.name,
                "first_value": first,
                "last_value": last,
                "change": round_one(last - first),
                "data_points": len(series),
                "badge_count": await store.count_badges(user.id),
            }
        )

    # stable: ties keep user id order in both directions
    rows.sort(key=lambda r: r["change"] if lower_is_better else -r["change"])
    return MetricLeaderboard(
        metric=metric,
        period=period,
        lower_is_better=lower_is_better,
        entries=[MetricEntry(rank=i + 1, **r) for i, r in enumerate(rows)],
    )
