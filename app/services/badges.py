"""Achievement badges: a fixed catalogue of rules and an idempotent award pass.

A badge moves from not-earned to earned exactly once and is never revoked,
even if later data would no longer satisfy its rule. Re-running a pass that
crashed midway is safe: owned badges are skipped and duplicate inserts are
ignored by the store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from app.core.enums import BadgeType, RuleKind
from app.schemas.badge import BadgeAward
from app.schemas.report import SeriesPoint
from app.services.measurement_store import MeasurementStore
from app.services.ranking import RankingEngine, winner_count

logger = logging.getLogger(__name__)

# Rank rules need at least this many ranked users
MIN_RANKED_FOR_RANK_BADGE = 2


@dataclass(frozen=True)
class BadgeRule:
    """One catalogue entry.

    UPLOAD_COUNT: count >= threshold.
    METRIC_DELTA: last - first of the metric's non-null series, compared with
      threshold (<= when threshold is negative, >= otherwise).
    RANK: 0-based rank index < threshold and inside the winner band.
    """

    badge_type: BadgeType
    label: str
    kind: RuleKind
    threshold: float
    metric: Optional[str] = None


BADGE_RULES: tuple[BadgeRule, ...] = (
    BadgeRule(BadgeType.FIRST_UPLOAD, "🎯 起步", RuleKind.UPLOAD_COUNT, 1),
    BadgeRule(BadgeType.SECOND_UPLOAD, "📊 有跡可循", RuleKind.UPLOAD_COUNT, 2),
    BadgeRule(BadgeType.FOUR_UPLOADS, "🔬 數據控", RuleKind.UPLOAD_COUNT, 4),
    BadgeRule(BadgeType.FAT_DOWN_1, "🔥 初見成效", RuleKind.METRIC_DELTA, -1.0, "body_fat_pct"),
    BadgeRule(BadgeType.FAT_DOWN_3, "💪 穩定燃脂", RuleKind.METRIC_DELTA, -3.0, "body_fat_pct"),
    BadgeRule(BadgeType.MUSCLE_UP_05, "🏋️ 增肌有感", RuleKind.METRIC_DELTA, 0.5, "skeletal_muscle"),
    BadgeRule(BadgeType.MUSCLE_UP_1, "💎 肌肉雕刻", RuleKind.METRIC_DELTA, 1.0, "skeletal_muscle"),
    BadgeRule(BadgeType.TOP_3, "🏆 前三強", RuleKind.RANK, 3),
)


@dataclass
class BadgeContext:
    series: list[SeriesPoint]
    rank_index: Optional[int] = None  # 0-based, None if unranked
    total_ranked: int = 0


def metric_delta(series: list[SeriesPoint], metric: str) -> float | None:
    """last - first over the non-null values of one metric; None with fewer than two."""
    values = [getattr(p, metric) for p in series if getattr(p, metric) is not None]
    if len(values) < 2:
        return None
    return values[-1] - values[0]


def rule_satisfied(rule: BadgeRule, ctx: BadgeContext) -> bool:
    if rule.kind is RuleKind.UPLOAD_COUNT:
        return len(ctx.series) >= rule.threshold

    if rule.kind is RuleKind.METRIC_DELTA:
        delta = metric_delta(ctx.series, rule.metric)
        if delta is None:
            return False
        if rule.threshold < 0:
            return delta <= rule.threshold
        return delta >= rule.threshold

    if rule.kind is RuleKind.RANK:
        if ctx.total_ranked < MIN_RANKED_FOR_RANK_BADGE or ctx.rank_index is None:
            return False
        return ctx.rank_index < min(rule.threshold, winner_count(ctx.total_ranked))

    raise ValueError(f"Unknown rule kind: {rule.kind}")


class BadgeEngine:
    def __init__(self, store: MeasurementStore, ranking: RankingEngine | None = None):
        self.store = store
        self.ranking = ranking or RankingEngine(store)

    async def evaluate_badges(self, user_id: int) -> list[BadgeAward]:
        """Award every newly satisfied badge once; return only those awarded by this call."""
        owned = await self.store.get_badge_types(user_id)
        pending = [r for r in BADGE_RULES if r.badge_type.value not in owned]
        if not pending:
            return []

        ctx = BadgeContext(series=await self.store.get_confirmed_series(user_id))
        if any(r.kind is RuleKind.RANK for r in pending):
            ctx.rank_index, ctx.total_ranked = await self.ranking.rank_of(user_id)

        awarded: list[BadgeAward] = []
        for rule in pending:
            if not rule_satisfied(rule, ctx):
                continue
            if await self.store.award_badge(user_id, rule.badge_type.value, rule.label):
                awarded.append(BadgeAward(type=rule.badge_type.value, label=rule.label))
            else:
                logger.info("Badge %s for user %s already awarded concurrently", rule.badge_type.value, user_id)

        if awarded:
            logger.info("User %s earned %s", user_id, ", ".join(b.type for b in awarded))
        return awarded
