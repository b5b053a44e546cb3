"""
Set-level value objects: rep ranges, planned and completed sets, and the
performance records built from them.
"""

from datetime import datetime, timezone
from typing import ClassVar, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from domain.models.weight import Weight


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RepRange(BaseModel):
    """
    Rep range for accessory exercises, e.g. 8-10-12.

    - minimum: any set below this is a failure
    - target: the reps prescribed per set
    - maximum: hitting this on every set triggers progression
    """

    minimum: int = Field(..., gt=0)
    target: int
    maximum: int

    # Preset names -> (minimum, target, maximum)
    COMMON: ClassVar[Dict[str, tuple]] = {
        "low": (4, 6, 8),
        "medium_low": (6, 8, 10),
        "medium": (8, 10, 12),
        "medium_high": (10, 12, 15),
        "high": (12, 15, 20),
    }

    @model_validator(mode="after")
    def validate_ordering(self) -> "RepRange":
        """Ensure minimum <= target <= maximum and the span stays sensible."""
        if self.target < self.minimum:
            raise ValueError("Target must be greater than or equal to minimum")
        if self.maximum < self.target:
            raise ValueError("Maximum must be greater than or equal to target")
        if self.maximum - self.minimum > 10:
            raise ValueError("Rep range span cannot exceed 10 reps")
        return self

    @classmethod
    def create(cls, minimum: int, target: int, maximum: int) -> "RepRange":
        return cls(minimum=minimum, target=target, maximum=maximum)

    @classmethod
    def common(cls, name: str) -> "RepRange":
        """
        Build one of the common presets (low, medium_low, medium, medium_high, high).

        Raises:
            KeyError: If the preset name is unknown.
        """
        minimum, target, maximum = cls.COMMON[name]
        return cls(minimum=minimum, target=target, maximum=maximum)

    def is_below_minimum(self, actual_reps: int) -> bool:
        return actual_reps < self.minimum

    def meets_maximum(self, actual_reps: int) -> bool:
        return actual_reps >= self.maximum

    def is_in_range(self, actual_reps: int) -> bool:
        return self.minimum <= actual_reps <= self.maximum

    def __str__(self) -> str:
        return f"{self.minimum}-{self.target}-{self.maximum}"

    model_config = {"frozen": True}


class PlannedSet(BaseModel):
    """A prescribed set. Never mutated after creation."""

    set_number: int = Field(..., ge=1)
    weight: Weight
    target_reps: int = Field(..., ge=1)
    is_amrap: bool = False

    def __str__(self) -> str:
        amrap = "+" if self.is_amrap else ""
        return f"Set {self.set_number}: {self.weight} x {self.target_reps}{amrap}"

    model_config = {"frozen": True}


class CompletedSet(BaseModel):
    """The logged outcome of one set."""

    set_number: int = Field(..., ge=1)
    weight: Weight
    actual_reps: int = Field(..., ge=0)
    was_amrap: bool = False

    def calculate_delta(self, planned_set: PlannedSet) -> int:
        """
        Reps above (positive) or below (negative) a planned set's target.

        Set numbers are not required to match: a logged AMRAP set is compared
        with the planned AMRAP set even when the set counts differ.
        """
        return self.actual_reps - planned_set.target_reps

    def __str__(self) -> str:
        amrap = " (AMRAP)" if self.was_amrap else ""
        return f"Set {self.set_number}: {self.weight} x {self.actual_reps}{amrap}"

    model_config = {"frozen": True}


class ExercisePerformance(BaseModel):
    """
    Planned versus completed sets for one exercise on one day.

    Completed sets do not have to match the planned set count; the
    progression rules work from whatever sets were logged.

    ``skip_progression`` marks a temporary substitution: the performance is
    recorded in history but leaves the exercise's progression untouched.
    """

    exercise_id: str = Field(..., min_length=1)
    planned_sets: List[PlannedSet]
    completed_sets: List[CompletedSet]
    completed_at: datetime = Field(default_factory=_utcnow)
    skip_progression: bool = False

    @field_validator("planned_sets")
    @classmethod
    def validate_planned_sets(cls, v: List[PlannedSet]) -> List[PlannedSet]:
        if not v:
            raise ValueError("At least one planned set is required")
        return v

    @field_validator("completed_sets")
    @classmethod
    def validate_completed_sets(cls, v: List[CompletedSet]) -> List[CompletedSet]:
        if not v:
            raise ValueError("At least one completed set is required")
        return v

    @property
    def planned_amrap_set(self) -> Optional[PlannedSet]:
        """Last planned set flagged AMRAP, if any."""
        for planned in reversed(self.planned_sets):
            if planned.is_amrap:
                return planned
        return None

    @property
    def completed_amrap_set(self) -> Optional[CompletedSet]:
        """Last completed set flagged AMRAP, if any."""
        for completed in reversed(self.completed_sets):
            if completed.was_amrap:
                return completed
        return None

    @property
    def amrap_delta(self) -> int:
        """
        Actual minus target reps on the AMRAP set.

        Returns 0 when either the planned or the completed AMRAP set is missing.
        """
        planned = self.planned_amrap_set
        completed = self.completed_amrap_set
        if planned is None or completed is None:
            return 0
        return completed.calculate_delta(planned)

    @property
    def total_reps_completed(self) -> int:
        return sum(s.actual_reps for s in self.completed_sets)

    @property
    def sets_used(self) -> int:
        return len(self.completed_sets)

    def all_sets_hit_max(self, rep_range: RepRange) -> bool:
        return all(rep_range.meets_maximum(s.actual_reps) for s in self.completed_sets)

    def any_sets_below_min(self, rep_range: RepRange) -> bool:
        return any(rep_range.is_below_minimum(s.actual_reps) for s in self.completed_sets)

    model_config = {"frozen": True}


class WorkoutActivity(BaseModel):
    """Immutable record of a completed training day."""

    day: int = Field(..., ge=1, le=6)
    week_number: int = Field(..., ge=1, le=21)
    block_number: int = Field(..., ge=1, le=3)
    performances: List[ExercisePerformance] = Field(..., min_length=1)
    completed_at: datetime = Field(default_factory=_utcnow)

    def is_deload_week(self) -> bool:
        """Weeks 7, 14 and 21 are deload weeks."""
        return self.week_number % 7 == 0

    def performance_for(self, exercise_id: str) -> Optional[ExercisePerformance]:
        for performance in self.performances:
            if performance.exercise_id == exercise_id:
                return performance
        return None

    model_config = {"frozen": True}
