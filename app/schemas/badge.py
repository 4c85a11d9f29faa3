"""Badge schemas."""

from datetime import datetime

from pydantic import BaseModel


class BadgeAward(BaseModel):
    """A badge earned during one evaluation pass."""

    type: str
    label: str


class BadgeRead(BadgeAward):
    earned_at: datetime
