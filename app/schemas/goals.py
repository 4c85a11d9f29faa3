"""User settings schemas: competition goal plus numeric targets."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import Goal


class GoalTargets(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    target_weight: Optional[float] = Field(None, gt=0, description="kg")
    target_body_fat_pct: Optional[float] = Field(None, ge=0, le=100)
    target_skeletal_muscle: Optional[float] = Field(None, gt=0, description="kg")


class SettingsUpdate(GoalTargets):
    """Replaces the goal and every target; an omitted target is cleared."""

    goal: Goal = Goal.MAINTAIN


class SettingsRead(SettingsUpdate):
    user_id: int
