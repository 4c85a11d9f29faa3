"""Report and Measurement models."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

JSONType = JSON().with_variant(JSONB(), "postgresql")


class Report(Base):
    """One measurement event. Only confirmed reports carry a Measurement.

    raw_json holds the extracted fields awaiting the user's review.
    """

    __tablename__ = "reports"
    __table_args__ = (Index("ix_reports_user_measured", "user_id", "measured_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    measured_at: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO date or datetime
    confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    raw_json: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    user: Mapped["User"] = relationship("User", back_populates="reports")
    measurement: Mapped["Measurement"] = relationship(
        "Measurement", back_populates="report", cascade="all, delete-orphan", uselist=False
    )


class Measurement(Base):
    """Numeric payload of a confirmed report. Any field may be null (illegible source)."""

    __tablename__ = "measurements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    report_id: Mapped[int] = mapped_column(
        ForeignKey("reports.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    skeletal_muscle: Mapped[float | None] = mapped_column(Float, nullable=True)
    body_fat_mass: Mapped[float | None] = mapped_column(Float, nullable=True)
    body_fat_pct: Mapped[float | None] = mapped_column(Float, nullable=True)
    bmi: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_body_water: Mapped[float | None] = mapped_column(Float, nullable=True)
    visceral_fat_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    basal_metabolic_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    inbody_score: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # {"right_arm": 3.1, "left_arm": 3.0, "trunk": 24.5, "right_leg": 9.2, "left_leg": 9.1}
    segmental_lean: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    segmental_fat: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    report: Mapped["Report"] = relationship("Report", back_populates="measurement")
