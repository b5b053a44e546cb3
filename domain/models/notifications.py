"""
Notifications raised by the Workout aggregate.

These are plain frozen records describing state transitions. The domain never
delivers them: every mutating operation returns the notifications it produced
and the aggregate keeps them until ``Workout.pull_notifications()`` is called.
"""

from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, Field

from domain.models.enums import ProgramVariant
from domain.models.weight import TrainingMax, TrainingMaxAdjustment


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DomainNotification(BaseModel):
    """Base record: every notification knows when it happened."""

    occurred_on: datetime = Field(default_factory=_utcnow)

    model_config = {"frozen": True}


class WorkoutCreated(DomainNotification):
    workout_id: str
    name: str
    variant: ProgramVariant
    exercise_count: int


class WorkoutStarted(DomainNotification):
    workout_id: str


class DayCompleted(DomainNotification):
    workout_id: str
    day: int
    week_number: int
    exercise_count: int


class WeekProgressed(DomainNotification):
    workout_id: str
    previous_week: int
    new_week: int
    new_block: int
    is_deload_week: bool


class WorkoutCompleted(DomainNotification):
    workout_id: str
    completed_at: datetime


class TrainingMaxAdjusted(DomainNotification):
    """
    A Linear exercise's Training Max changed.

    ``amrap_delta`` is 0 and ``reason`` is set for manual adjustments.
    """

    exercise_id: str
    new_training_max: TrainingMax
    adjustment: TrainingMaxAdjustment
    amrap_delta: int = 0
    reason: Optional[str] = None


Notification = Union[
    WorkoutCreated,
    WorkoutStarted,
    DayCompleted,
    WeekProgressed,
    WorkoutCompleted,
    TrainingMaxAdjusted,
]
