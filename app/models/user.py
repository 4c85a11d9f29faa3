"""User model: a competition participant."""

from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Date, DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import Goal
from app.db.base import Base


class User(Base):
    """A participant. Competition dates are set on the first confirmed report.

    Demo users are excluded from rankings and leaderboards.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    goal: Mapped[Goal] = mapped_column(
        Enum(Goal, name="goal", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Goal.MAINTAIN,
    )
    competition_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    competition_end: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_demo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    reports: Mapped[list["Report"]] = relationship(
        "Report", back_populates="user", cascade="all, delete-orphan"
    )
    badges: Mapped[list["Badge"]] = relationship(
        "Badge", back_populates="user", cascade="all, delete-orphan"
    )
    goals: Mapped["UserGoals"] = relationship(
        "UserGoals", back_populates="user", cascade="all, delete-orphan", uselist=False
    )
