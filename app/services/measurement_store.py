"""Read/write accessor over the measurement store.

One MeasurementStore wraps one AsyncSession; the engine behind it is opened
once per process (app.db.session) and disposed at shutdown.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.badge import Badge
from app.models.report import Measurement, Report
from app.models.user import User
from app.models.user_goals import UserGoals
from app.schemas.badge import BadgeRead
from app.schemas.report import SeriesPoint


class MeasurementStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user(self, user_id: int) -> User | None:
        return await self.session.get(User, user_id)

    async def list_rankable_users(self) -> list[User]:
        """Non-demo users in id order (the ranking's tie order)."""
        result = await self.session.execute(
            select(User).where(User.is_demo.is_(False)).order_by(User.id)
        )
        return list(result.scalars().all())

    async def get_confirmed_series(self, user_id: int) -> list[SeriesPoint]:
        """Confirmed reports with their measurement, ascending by measured_at."""
        result = await self.session.execute(
            select(
                Report.id.label("report_id"),
                Report.measured_at,
                Measurement.weight,
                Measurement.skeletal_muscle,
                Measurement.body_fat_pct,
                Measurement.bmi,
                Measurement.inbody_score,
                Measurement.basal_metabolic_rate,
            )
            .join(Measurement, Measurement.report_id == Report.id)
            .where(Report.user_id == user_id, Report.confirmed.is_(True))
            .order_by(Report.measured_at.asc(), Report.id.asc())
        )
        return [SeriesPoint.model_validate(row) for row in result.all()]

    async def get_goals(self, user_id: int) -> UserGoals | None:
        result = await self.session.execute(
            select(UserGoals).where(UserGoals.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_badge_types(self, user_id: int) -> set[str]:
        result = await self.session.execute(
            select(Badge.badge_type).where(Badge.user_id == user_id)
        )
        return set(result.scalars().all())

    async def list_badges(self, user_id: int) -> list[BadgeRead]:
        result = await self.session.execute(
            select(Badge).where(Badge.user_id == user_id).order_by(Badge.earned_at, Badge.id)
        )
        return [
            BadgeRead(type=b.badge_type, label=b.badge_label, earned_at=b.earned_at)
            for b in result.scalars().all()
        ]

    async def count_badges(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Badge.id)).where(Badge.user_id == user_id)
        )
        return int(result.scalar() or 0)

    async def award_badge(self, user_id: int, badge_type: str, label: str) -> bool:
        """Insert a badge row; a concurrent duplicate is a no-op.

        Returns True only if this call inserted the row.
        """
        dialect = self.session.bind.dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert
        stmt = (
            insert(Badge)
            .values(
                user_id=user_id,
                badge_type=badge_type,
                badge_label=label,
                earned_at=datetime.now(timezone.utc),
            )
            .on_conflict_do_nothing(index_elements=["user_id", "badge_type"])
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
