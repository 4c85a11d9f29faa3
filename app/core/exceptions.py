"""Domain errors. All prediction errors are recoverable: the feature is simply locked."""

from app.core.enums import UnavailableReason


class PredictionUnavailable(Exception):
    """No trend line can be fitted for this series."""

    reason: UnavailableReason = UnavailableReason.INSUFFICIENT_DATA


class InsufficientData(PredictionUnavailable):
    """Fewer than two usable body-fat samples."""

    reason = UnavailableReason.INSUFFICIENT_DATA


class DegenerateRegression(PredictionUnavailable):
    """All samples share the same x (duplicate timestamps)."""

    reason = UnavailableReason.DEGENERATE_REGRESSION


class UserNotFound(LookupError):
    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id
