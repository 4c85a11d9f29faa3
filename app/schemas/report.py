"""Report, measurement and series schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.constants import SEGMENT_KEYS
from app.schemas.badge import BadgeAward
from app.services.trend import canonical_timestamp


def _check_timestamp(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        return canonical_timestamp(value)
    except ValueError as e:
        raise ValueError(f"measured_at must be an ISO date or datetime: {value!r}") from e


class ReportCreate(BaseModel):
    """A pending report: extracted fields wait for the user's confirmation."""

    measured_at: str = Field(..., description="ISO date or datetime of the measurement")
    raw_json: Optional[dict[str, Any]] = Field(None, description="Fields extracted from the photo")

    @field_validator("measured_at")
    @classmethod
    def check_measured_at(cls, v):
        return _check_timestamp(v)


class MeasurementFields(BaseModel):
    weight: Optional[float] = None
    skeletal_muscle: Optional[float] = None
    body_fat_mass: Optional[float] = None
    body_fat_pct: Optional[float] = None
    bmi: Optional[float] = None
    total_body_water: Optional[float] = None
    visceral_fat_level: Optional[int] = None
    basal_metabolic_rate: Optional[int] = None
    inbody_score: Optional[int] = None
    segmental_lean: Optional[dict[str, Optional[float]]] = None
    segmental_fat: Optional[dict[str, Optional[float]]] = None

    @field_validator("segmental_lean", "segmental_fat")
    @classmethod
    def check_segments(cls, v: Optional[dict[str, Optional[float]]]):
        if v is None:
            return v
        unknown = set(v) - set(SEGMENT_KEYS)
        if unknown:
            raise ValueError(f"unknown segments: {sorted(unknown)}")
        if all(val is None for val in v.values()):
            return None
        return {k: v.get(k) for k in SEGMENT_KEYS}


class ReportConfirm(MeasurementFields):
    """Corrected fields submitted on confirmation; measured_at may be corrected too."""

    measured_at: Optional[str] = None

    @field_validator("measured_at")
    @classmethod
    def check_measured_at(cls, v):
        return _check_timestamp(v)


class MeasurementRead(MeasurementFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    report_id: int


class ReportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    measured_at: str
    confirmed: bool
    raw_json: Optional[dict[str, Any]] = None
    created_at: datetime
    measurement: Optional[MeasurementRead] = None


class ReportConfirmed(BaseModel):
    report: ReportRead
    new_badges: list[BadgeAward]


class SeriesPoint(BaseModel):
    """One confirmed measurement in a user's chronological series."""

    model_config = ConfigDict(from_attributes=True)

    report_id: int
    measured_at: str
    weight: Optional[float] = None
    skeletal_muscle: Optional[float] = None
    body_fat_pct: Optional[float] = None
    bmi: Optional[float] = None
    inbody_score: Optional[int] = None
    basal_metabolic_rate: Optional[int] = None
