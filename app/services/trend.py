"""Body-fat trend prediction.

Fits an ordinary least-squares line through one user's body-fat series
(x = days since first sample, y = body fat %) and extrapolates it to the
competition end date. The result is deliberately unbounded: no clamping to a
plausible physiological range.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from app.core.constants import MIN_PREDICTION_POINTS, SECONDS_PER_DAY
from app.core.exceptions import DegenerateRegression, InsufficientData


@dataclass(frozen=True)
class Line:
    slope: float
    intercept: float

    def at(self, x: float) -> float:
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class TrendResult:
    first_value: float
    last_value: float
    predicted: float  # rounded to 0.1
    predicted_change: float  # predicted - first, rounded to 0.1
    data_points: int


def round_one(value: float) -> float:
    """Round to one decimal, half away from zero (2.25 -> 2.3, -2.25 -> -2.3)."""
    # + 0.0 turns -0.0 into 0.0
    return math.copysign(math.floor(abs(value) * 10 + 0.5) / 10, value) + 0.0


def parse_timestamp(value: str | date | datetime) -> datetime:
    """Parse an ISO date or datetime. Naive values are taken as UTC."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def canonical_timestamp(value: str) -> str:
    """Normalize an ISO date or datetime to the stored form.

    Dates stay YYYY-MM-DD; datetimes become UTC YYYY-MM-DDTHH:MM:SS+00:00,
    so string order of stored values matches time order.
    """
    text = value.strip()
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    return parse_timestamp(text).astimezone(timezone.utc).isoformat(timespec="seconds")


def days_between(start: datetime, end: datetime) -> float:
    """Fractional days from start to end."""
    return (end - start).total_seconds() / SECONDS_PER_DAY


def fit_line(points: Sequence[tuple[float, float]]) -> Line:
    """OLS fit of (x, y) points.

    Raises InsufficientData for fewer than two points and DegenerateRegression
    when every x is identical.
    """
    n = len(points)
    if n < MIN_PREDICTION_POINTS:
        raise InsufficientData(f"need {MIN_PREDICTION_POINTS} points, got {n}")

    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for x, y in points:
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_x2 += x * x

    denom = n * sum_x2 - sum_x * sum_x
    if denom == 0:
        raise DegenerateRegression("all samples share the same timestamp")

    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    return Line(slope=slope, intercept=intercept)


def predict_trend(
    samples: Sequence[tuple[str | date | datetime, float | None]],
    target: str | date | datetime,
) -> TrendResult:
    """Extrapolate a chronologically ordered (timestamp, value) series to target.

    Samples with a null value are dropped before fitting.
    """
    valid = [(parse_timestamp(ts), float(v)) for ts, v in samples if v is not None]
    if len(valid) < MIN_PREDICTION_POINTS:
        raise InsufficientData(f"need {MIN_PREDICTION_POINTS} points, got {len(valid)}")

    origin = valid[0][0]
    line = fit_line([(days_between(origin, ts), v) for ts, v in valid])

    first_value = valid[0][1]
    predicted = round_one(line.at(days_between(origin, parse_timestamp(target))))
    return TrendResult(
        first_value=first_value,
        last_value=valid[-1][1],
        predicted=predicted,
        predicted_change=round_one(predicted - first_value),
        data_points=len(valid),
    )
