"""Factories for users, reports and measurements."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Measurement, Report, User


async def add_user(
    session: AsyncSession,
    name: str = "Test User",
    *,
    is_demo: bool = False,
    competition_start: date | None = date(2024, 1, 1),
    competition_end: date | None = date(2024, 3, 1),
) -> User:
    user = User(
        name=name,
        is_demo=is_demo,
        competition_start=competition_start,
        competition_end=competition_end,
    )
    session.add(user)
    await session.flush()
    return user


async def add_report(
    session: AsyncSession,
    user: User,
    measured_at: str,
    *,
    confirmed: bool = True,
    **fields,
) -> Report:
    """Add a report; confirmed reports get a Measurement with the given fields."""
    report = Report(user_id=user.id, measured_at=measured_at, confirmed=confirmed)
    if confirmed:
        report.measurement = Measurement(**fields)
    session.add(report)
    await session.flush()
    return report


async def add_competitor(session: AsyncSession, name: str, first: float, last: float, **kwargs) -> User:
    """User whose predicted change is exactly last - first.

    Two samples 10 days apart and a competition ending on the second sample.
    """
    user = await add_user(
        session, name, competition_start=date(2024, 1, 1), competition_end=date(2024, 1, 11), **kwargs
    )
    await add_report(session, user, "2024-01-01", body_fat_pct=first)
    await add_report(session, user, "2024-01-11", body_fat_pct=last)
    return user
