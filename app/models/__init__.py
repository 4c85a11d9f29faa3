"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.badge import Badge
from app.models.report import Measurement, Report
from app.models.user import User
from app.models.user_goals import UserGoals

__all__ = [
    "Badge",
    "Measurement",
    "Report",
    "User",
    "UserGoals",
]
