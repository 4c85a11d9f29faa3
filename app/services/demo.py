"""Demo accounts: a guest user with a pre-seeded journey, excluded from rankings."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import get_settings
from app.core.enums import Goal
from app.models.report import Measurement, Report
from app.models.user import User
from app.models.user_goals import UserGoals
from app.services.badges import BadgeEngine
from app.services.measurement_store import MeasurementStore

logger = logging.getLogger(__name__)

DEMO_NAME = "Demo Guest"

# (day offset, weight, skeletal muscle, body fat mass, body fat %, bmi,
#  total body water, visceral fat level, BMR, InBody score)
DEMO_JOURNEY = [
    (0, 75.3, 31.8, 16.5, 21.9, 24.7, 40.5, 8, 1585, 73),
    (12, 74.6, 32.0, 15.6, 20.9, 24.5, 40.7, 8, 1592, 75),
    (25, 73.8, 32.2, 14.6, 19.8, 24.2, 40.9, 7, 1600, 77),
    (38, 73.2, 32.4, 13.9, 19.0, 24.0, 41.1, 7, 1608, 78),
    (48, 72.5, 32.5, 13.1, 18.1, 23.8, 41.3, 7, 1615, 80),
]

DEMO_TARGETS = {"target_weight": 70.0, "target_body_fat_pct": 17.0, "target_skeletal_muscle": 33.0}


def _measurement(row: tuple) -> Measurement:
    _, weight, muscle, fat_mass, fat_pct, bmi, water, visceral, bmr, score = row
    return Measurement(
        weight=weight,
        skeletal_muscle=muscle,
        body_fat_mass=fat_mass,
        body_fat_pct=fat_pct,
        bmi=bmi,
        total_body_water=water,
        visceral_fat_level=visceral,
        basal_metabolic_rate=bmr,
        inbody_score=score,
    )


def _seed_journey(user: User, start: date, journey: list[tuple]) -> None:
    """Confirmed reports on start + day offset, plus the competition window from start."""
    user.competition_start = start
    user.competition_end = start + timedelta(days=get_settings().competition_days)
    for row in journey:
        user.reports.append(
            Report(
                measured_at=(start + timedelta(days=row[0])).isoformat(),
                confirmed=True,
                measurement=_measurement(row),
            )
        )


async def seed_user(
    db: AsyncSession,
    name: str,
    goal: Goal,
    start: date,
    journey: list[tuple],
    *,
    is_demo: bool = False,
) -> User:
    """Create a user with a confirmed journey, then award badges."""
    user = User(name=name, goal=goal, is_demo=is_demo, reports=[], badges=[], goals=None)
    _seed_journey(user, start, journey)
    db.add(user)
    await db.flush()
    await BadgeEngine(MeasurementStore(db)).evaluate_badges(user.id)
    return user


async def reset_demo_user(db: AsyncSession, today: date | None = None) -> User:
    """Reset the demo guest so its journey ends today.

    An existing demo guest keeps its id; its reports, badges and goals are
    replaced.
    """
    today = today or date.today()
    start = today - timedelta(days=DEMO_JOURNEY[-1][0])

    result = await db.execute(
        select(User)
        .where(User.is_demo.is_(True), User.name == DEMO_NAME)
        .options(
            selectinload(User.reports).selectinload(Report.measurement),
            selectinload(User.badges),
            selectinload(User.goals),
        )
        .order_by(User.id)
        .execution_options(populate_existing=True)
    )
    user = result.scalars().first()
    if user is None:
        user = await seed_user(db, DEMO_NAME, Goal.CUT, start, DEMO_JOURNEY, is_demo=True)
    else:
        user.goal = Goal.CUT
        user.reports.clear()
        user.badges.clear()
        await db.flush()
        _seed_journey(user, start, DEMO_JOURNEY)
        await db.flush()
        await BadgeEngine(MeasurementStore(db)).evaluate_badges(user.id)

    if user.goals is None:
        user.goals = UserGoals()
    for field, value in DEMO_TARGETS.items():
        setattr(user.goals, field, value)
    await db.flush()

    logger.info("Demo user %s reset (start %s)", user.id, start)
    return user
