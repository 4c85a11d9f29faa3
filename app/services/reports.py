"""Report confirmation: persist the corrected measurement, open the competition window, award badges."""

from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import get_settings
from app.models.report import Measurement, Report
from app.models.user import User
from app.schemas.badge import BadgeAward
from app.schemas.report import ReportConfirm
from app.services.badges import BadgeEngine
from app.services.measurement_store import MeasurementStore
from app.services.trend import parse_timestamp

logger = logging.getLogger(__name__)


class ReportAlreadyConfirmed(Exception):
    pass


async def get_report(db: AsyncSession, report_id: int) -> Report | None:
    result = await db.execute(
        select(Report).where(Report.id == report_id).options(selectinload(Report.measurement))
    )
    return result.scalar_one_or_none()


def open_competition_window(user: User, measured_at: str, days: int) -> bool:
    """Set start/end from the first confirmed report. Existing dates are never moved."""
    if user.competition_start is not None:
        return False
    start = parse_timestamp(measured_at).date()
    user.competition_start = start
    user.competition_end = start + timedelta(days=days)
    return True


async def confirm_report(
    db: AsyncSession,
    report: Report,
    payload: ReportConfirm,
) -> list[BadgeAward]:
    """Confirm a pending report (loaded via get_report) with corrected fields.

    Returns the badges newly earned by this confirmation.
    """
    if report.confirmed or report.measurement is not None:
        raise ReportAlreadyConfirmed(f"Report {report.id} is already confirmed")

    if payload.measured_at:
        report.measured_at = payload.measured_at
    report.confirmed = True
    report.measurement = Measurement(**payload.model_dump(exclude={"measured_at"}))

    user = await db.get(User, report.user_id)
    if open_competition_window(user, report.measured_at, get_settings().competition_days):
        logger.info(
            "Competition window for user %s: %s ~ %s",
            user.id, user.competition_start, user.competition_end,
        )
    await db.flush()

    return await BadgeEngine(MeasurementStore(db)).evaluate_badges(report.user_id)
