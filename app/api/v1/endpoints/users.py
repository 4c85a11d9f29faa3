"""Participant endpoints: registration, admin overrides, dashboard, series, prediction, badges."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_store, get_user_or_404
from app.core.constants import ADVICE_UNLOCK_REPORTS, TREND_UNLOCK_REPORTS
from app.db.session import get_db
from app.models.report import Report
from app.models.user import User
from app.models.user_goals import UserGoals
from app.schemas.badge import BadgeAward, BadgeRead
from app.schemas.goals import GoalTargets, SettingsRead, SettingsUpdate
from app.schemas.prediction import Prediction, Unavailable
from app.schemas.report import ReportCreate, ReportRead, SeriesPoint
from app.schemas.user import CompetitionUpdate, Dashboard, Unlocks, UserCreate, UserRead
from app.services.badges import BadgeEngine
from app.services.demo import reset_demo_user
from app.services.measurement_store import MeasurementStore
from app.services.ranking import RankingEngine

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=UserRead, status_code=201)
async def register_user(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    """Register a participant. Competition dates stay empty until the first confirmed report."""
    user = User(name=payload.name, goal=payload.goal, is_demo=payload.is_demo)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@router.post("/demo", response_model=UserRead, status_code=201)
async def reset_demo(db: AsyncSession = Depends(get_db)):
    """Recreate the demo guest with a pre-seeded journey ending today."""
    user = await reset_demo_user(db)
    await db.refresh(user)
    return user


@router.get("", response_model=list[UserRead])
async def list_users(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(User).order_by(User.id))
    return result.scalars().all()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user: User = Depends(get_user_or_404)):
    return user


@router.put("/{user_id}/competition", response_model=UserRead)
async def update_competition(
    payload: CompetitionUpdate,
    user: User = Depends(get_user_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Admin override of the competition window."""
    user.competition_start = payload.competition_start
    user.competition_end = payload.competition_end
    await db.flush()
    logger.info("Competition window overridden for user %s: %s ~ %s", user.id, user.competition_start, user.competition_end)
    return user


@router.delete("/{user_id}", status_code=204)
async def delete_user(user: User = Depends(get_user_or_404), db: AsyncSession = Depends(get_db)):
    """Delete a user with their reports, measurements and badges."""
    await db.delete(user)
    return None


# ── Settings ─────────────────────────────────────────────────────────────

def _settings(user: User, goals: UserGoals | None) -> SettingsRead:
    targets = GoalTargets.model_validate(goals) if goals else GoalTargets()
    return SettingsRead(user_id=user.id, goal=user.goal, **targets.model_dump())


@router.get("/{user_id}/settings", response_model=SettingsRead)
async def get_settings_for_user(user: User = Depends(get_user_or_404), store: MeasurementStore = Depends(get_store)):
    return _settings(user, await store.get_goals(user.id))


@router.put("/{user_id}/settings", response_model=SettingsRead)
async def update_settings(
    payload: SettingsUpdate,
    user: User = Depends(get_user_or_404),
    store: MeasurementStore = Depends(get_store),
    db: AsyncSession = Depends(get_db),
):
    """Set the competition goal and numeric targets. Creates the goals row on first save."""
    user.goal = payload.goal
    targets = payload.model_dump(exclude={"goal"})
    goals = await store.get_goals(user.id)
    if goals:
        for field, value in targets.items():
            setattr(goals, field, value)
    else:
        goals = UserGoals(user_id=user.id, **targets)
        db.add(goals)

    await db.flush()
    return _settings(user, goals)


# ── Reports ──────────────────────────────────────────────────────────────

@router.post("/{user_id}/reports", response_model=ReportRead, status_code=201)
async def create_report(
    payload: ReportCreate,
    user: User = Depends(get_user_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Create a pending (unconfirmed) report holding the extracted fields."""
    report = Report(
        user_id=user.id,
        measured_at=payload.measured_at,
        raw_json=payload.raw_json,
        confirmed=False,
        measurement=None,
    )
    db.add(report)
    await db.flush()
    return report


@router.get("/{user_id}/reports", response_model=list[ReportRead])
async def list_reports(user: User = Depends(get_user_or_404), db: AsyncSession = Depends(get_db)):
    """All reports, confirmed and pending, newest first."""
    result = await db.execute(
        select(Report)
        .where(Report.user_id == user.id)
        .options(selectinload(Report.measurement))
        .order_by(Report.measured_at.desc(), Report.id.desc())
    )
    return result.scalars().all()


@router.get("/{user_id}/series", response_model=list[SeriesPoint])
async def get_series(user: User = Depends(get_user_or_404), store: MeasurementStore = Depends(get_store)):
    """Confirmed measurements in chronological order."""
    return await store.get_confirmed_series(user.id)


# ── Prediction / badges ──────────────────────────────────────────────────

@router.get("/{user_id}/prediction", response_model=Prediction | Unavailable)
async def get_prediction(user: User = Depends(get_user_or_404), store: MeasurementStore = Depends(get_store)):
    return await RankingEngine(store).predict_user(user.id)


@router.get("/{user_id}/badges", response_model=list[BadgeRead])
async def list_badges(user: User = Depends(get_user_or_404), store: MeasurementStore = Depends(get_store)):
    return await store.list_badges(user.id)


@router.post("/{user_id}/badges/evaluate", response_model=list[BadgeAward])
async def evaluate_badges(user: User = Depends(get_user_or_404), store: MeasurementStore = Depends(get_store)):
    """Run a badge pass; returns only badges newly earned by this call."""
    return await BadgeEngine(store).evaluate_badges(user.id)


@router.get("/{user_id}/dashboard", response_model=Dashboard)
async def get_dashboard(user: User = Depends(get_user_or_404), store: MeasurementStore = Depends(get_store)):
    """Series, prediction, rank, badges and feature unlocks for one user."""
    ranking = RankingEngine(store)
    series = await store.get_confirmed_series(user.id)
    index, total = await ranking.rank_of(user.id)
    goals = await store.get_goals(user.id)
    return Dashboard(
        user=UserRead.model_validate(user),
        confirmed_reports=len(series),
        unlocks=Unlocks(
            trend=len(series) >= TREND_UNLOCK_REPORTS,
            advice=len(series) >= ADVICE_UNLOCK_REPORTS,
        ),
        series=series,
        prediction=await ranking.predict_user(user.id),
        rank=index + 1 if index is not None else None,
        total_ranked=total,
        badges=await store.list_badges(user.id),
        badge_count=await store.count_badges(user.id),
        targets=GoalTargets.model_validate(goals) if goals else None,
    )
