"""
Exercise progression strategies.

Three mutually exclusive algorithms decide what to prescribe next from the
results of the previous session:

- LinearProgression (RTF): week-indexed intensity table applied to a Training
  Max; the AMRAP set of each session nudges the Training Max up or down.
- RepsPerSetProgression: accessories add a set each time every set hits the
  top of the rep range, then add weight and drop back to the starting sets.
- MinimalSetsProgression: complete a fixed total of reps in as few sets as
  possible.

The three models form a closed union discriminated by ``kind``
(see ``ExerciseProgression``). Each exposes the same operations:

- calculate_planned_sets(week_number, block_number) -> List[PlannedSet]
- apply_performance(performance) -> None
- summarize() -> ProgressionSummary
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from domain.exceptions import InvariantViolationError, check_rule
from domain.models.enums import EquipmentType, PerformanceEvaluation, WeightUnit
from domain.models.sets import ExercisePerformance, PlannedSet, RepRange
from domain.models.weight import TrainingMax, TrainingMaxAdjustment, Weight

logger = logging.getLogger(__name__)


# =============================================================================
# Program Structure
# =============================================================================

PROGRAM_WEEKS = 21
WEEKS_PER_BLOCK = 7


@dataclass(frozen=True)
class WeekPrescription:
    """Intensity, set count and target reps for one week of the RTF table."""

    week_number: int
    intensity_percent: int
    sets: int
    target_reps: int

    @property
    def is_deload(self) -> bool:
        return self.week_number % WEEKS_PER_BLOCK == 0


# Weeks 7, 14 and 21 are deloads at 65%. The deload reps (10) are carried
# over from the program spreadsheet as-is.
_RTF_ROWS = [
    # week, intensity %, sets, reps
    (1, 75, 5, 10),
    (2, 85, 4, 8),
    (3, 90, 3, 6),
    (4, 80, 5, 9),
    (5, 85, 4, 7),
    (6, 90, 3, 5),
    (7, 65, 5, 10),
    (8, 85, 4, 8),
    (9, 90, 3, 6),
    (10, 95, 2, 4),
    (11, 85, 4, 7),
    (12, 90, 3, 5),
    (13, 95, 2, 3),
    (14, 65, 5, 10),
    (15, 90, 3, 6),
    (16, 95, 2, 4),
    (17, 100, 1, 2),
    (18, 95, 2, 4),
    (19, 100, 1, 2),
    (20, 105, 1, 2),
    (21, 65, 5, 10),
]

RTF_WEEK_TABLE: Dict[int, WeekPrescription] = {
    week: WeekPrescription(week, intensity, sets, reps)
    for week, intensity, sets, reps in _RTF_ROWS
}


def is_deload_week(week_number: int) -> bool:
    """Every 7th week (7, 14, 21) is a deload week."""
    return week_number % WEEKS_PER_BLOCK == 0


def block_for_week(week_number: int) -> int:
    """
    Block number for a week: 1 for weeks 1-7, 2 for 8-14, 3 for 15-21.

    Raises:
        InvariantViolationError: If the week is outside 1-21.
    """
    if week_number < 1 or week_number > PROGRAM_WEEKS:
        raise InvariantViolationError(
            f"Week number {week_number} is outside the standard {PROGRAM_WEEKS}-week program"
        )
    if week_number <= 7:
        return 1
    if week_number <= 14:
        return 2
    return 3


def adjustment_for_amrap_delta(delta: int) -> TrainingMaxAdjustment:
    """
    Training Max adjustment for an AMRAP delta (actual - target reps).

    +5 or more: +3.0%    +2: +1.0%    -1: -2.0%
    +4: +2.0%            +1: +0.5%    -2 or worse: -5.0%
    +3: +1.5%             0: no change
    """
    if delta >= 5:
        return TrainingMaxAdjustment.percentage("0.03")
    if delta == 4:
        return TrainingMaxAdjustment.percentage("0.02")
    if delta == 3:
        return TrainingMaxAdjustment.percentage("0.015")
    if delta == 2:
        return TrainingMaxAdjustment.percentage("0.01")
    if delta == 1:
        return TrainingMaxAdjustment.percentage("0.005")
    if delta == 0:
        return TrainingMaxAdjustment.none()
    if delta == -1:
        return TrainingMaxAdjustment.percentage("-0.02")
    return TrainingMaxAdjustment.percentage("-0.05")


class ProgressionSummary(BaseModel):
    """Display-oriented snapshot of a progression's state."""

    type: str
    details: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}


# =============================================================================
# Linear (RTF)
# =============================================================================


class LinearProgression(BaseModel):
    """
    Training Max based progression for main and auxiliary lifts.

    Each week's sets, reps and intensity come from ``RTF_WEEK_TABLE``. When
    ``use_amrap`` is set, the last set is AMRAP and its result adjusts the
    Training Max through ``adjustment_for_amrap_delta``.
    """

    kind: Literal["linear"] = "linear"
    training_max: TrainingMax
    use_amrap: bool = True
    base_sets_per_exercise: int = Field(default=4, ge=3, le=8)

    @classmethod
    def create(
        cls,
        training_max: TrainingMax,
        use_amrap: bool = True,
        base_sets_per_exercise: int = 4,
    ) -> "LinearProgression":
        return cls(
            training_max=training_max,
            use_amrap=use_amrap,
            base_sets_per_exercise=base_sets_per_exercise,
        )

    def calculate_planned_sets(self, week_number: int, block_number: int) -> List[PlannedSet]:
        check_rule(1 <= week_number <= PROGRAM_WEEKS, "Week number must be between 1 and 21")
        check_rule(1 <= block_number <= 3, "Block number must be between 1 and 3")

        week = RTF_WEEK_TABLE[week_number]
        working_weight = self.training_max.calculate_working_weight(
            Decimal(week.intensity_percent) / Decimal(100)
        )
        return [
            PlannedSet(
                set_number=i,
                weight=working_weight,
                target_reps=week.target_reps,
                is_amrap=self.use_amrap and i == week.sets,
            )
            for i in range(1, week.sets + 1)
        ]

    def check_performance(self, performance: ExercisePerformance) -> None:
        """
        Raise if the performance lacks the data the AMRAP adjustment needs.

        Raises:
            InvariantViolationError: If the planned or completed AMRAP set is missing.
        """
        if not self.use_amrap:
            return
        if performance.planned_amrap_set is None:
            raise InvariantViolationError(
                "Cannot apply progression without an AMRAP set in planned sets"
            )
        if performance.completed_amrap_set is None:
            raise InvariantViolationError(
                "Cannot apply progression without an AMRAP set in completed sets"
            )

    def apply_performance(self, performance: ExercisePerformance) -> None:
        if not self.use_amrap:
            return
        self.check_performance(performance)

        delta = performance.amrap_delta
        adjustment = adjustment_for_amrap_delta(delta)
        previous = self.training_max
        self.training_max = self.training_max.apply_adjustment(adjustment)
        logger.debug(
            f"AMRAP delta {delta:+d} -> {adjustment}: {previous} -> {self.training_max}"
        )

    def update_training_max(self, training_max: TrainingMax, reason: Optional[str] = None) -> None:
        """Set the Training Max directly, bypassing the AMRAP formula."""
        logger.debug(
            f"Manual Training Max update {self.training_max} -> {training_max}"
            + (f" ({reason})" if reason else "")
        )
        self.training_max = training_max

    def summarize(self) -> ProgressionSummary:
        return ProgressionSummary(
            type="Linear (RTF)",
            details={
                "Training Max": str(self.training_max),
                "Uses AMRAP": "Yes" if self.use_amrap else "No",
                "Sets per Exercise": str(self.base_sets_per_exercise),
            },
        )


# =============================================================================
# Reps Per Set
# =============================================================================


def weight_increment(equipment: EquipmentType, current_weight: Weight) -> Weight:
    """
    Weight step for an equipment type.

    - Bodyweight: 0
    - Dumbbell: 1 below 10, otherwise 2 (in the current unit)
    - Barbell, cable, machine: 2.5kg or 5lb
    """
    if equipment == EquipmentType.BODYWEIGHT:
        return Weight(amount=Decimal("0"), unit=current_weight.unit)
    if equipment == EquipmentType.DUMBBELL:
        step = Decimal("1") if current_weight.amount < 10 else Decimal("2")
        return Weight(amount=step, unit=current_weight.unit)
    step = Decimal("2.5") if current_weight.unit == WeightUnit.KILOGRAMS else Decimal("5")
    return Weight(amount=step, unit=current_weight.unit)


class RepsPerSetProgression(BaseModel):
    """
    Set-then-weight progression for accessory exercises.

    - SUCCESS (every set reached the rep range maximum): add a set, or once at
      min(target_sets, max_sets) add weight and go back to the starting sets
    - FAILED (any set below the minimum): drop a set, or at one set drop weight
    - MAINTAINED: no change

    Unilateral exercises cap at 3 sets (per side), bilateral at 5.
    """

    kind: Literal["reps_per_set"] = "reps_per_set"
    rep_range: RepRange
    current_weight: Weight
    equipment: EquipmentType
    starting_sets: int = Field(default=2, ge=1, le=10)
    target_sets: int = Field(default=4, ge=1, le=10)
    current_set_count: int = Field(..., ge=1)
    is_unilateral: bool = False

    @model_validator(mode="before")
    @classmethod
    def default_current_set_count(cls, data):
        """New progressions start at their starting set count."""
        if isinstance(data, dict) and data.get("current_set_count") is None:
            data = {**data, "current_set_count": data.get("starting_sets", 2)}
        return data

    @model_validator(mode="after")
    def validate_set_bounds(self) -> "RepsPerSetProgression":
        if self.target_sets < self.starting_sets:
            raise ValueError("Target sets must be between starting sets and 10")
        return self

    @classmethod
    def create(
        cls,
        rep_range: RepRange,
        starting_weight: Weight,
        equipment: EquipmentType,
        starting_sets: int = 2,
        target_sets: int = 4,
        is_unilateral: bool = False,
    ) -> "RepsPerSetProgression":
        return cls(
            rep_range=rep_range,
            current_weight=starting_weight,
            equipment=equipment,
            starting_sets=starting_sets,
            target_sets=target_sets,
            current_set_count=starting_sets,
            is_unilateral=is_unilateral,
        )

    @property
    def max_sets(self) -> int:
        return 3 if self.is_unilateral else 5

    @property
    def effective_max_sets(self) -> int:
        return min(self.target_sets, self.max_sets)

    def calculate_planned_sets(self, week_number: int, block_number: int) -> List[PlannedSet]:
        return [
            PlannedSet(
                set_number=i,
                weight=self.current_weight,
                target_reps=self.rep_range.target,
                is_amrap=False,
            )
            for i in range(1, self.current_set_count + 1)
        ]

    def evaluate(self, performance: ExercisePerformance) -> PerformanceEvaluation:
        if performance.all_sets_hit_max(self.rep_range):
            return PerformanceEvaluation.SUCCESS
        if performance.any_sets_below_min(self.rep_range):
            return PerformanceEvaluation.FAILED
        return PerformanceEvaluation.MAINTAINED

    def check_performance(self, performance: ExercisePerformance) -> None:
        return None

    def apply_performance(self, performance: ExercisePerformance) -> None:
        evaluation = self.evaluate(performance)
        logger.debug(f"Reps per set evaluation: {evaluation.value}")

        if evaluation == PerformanceEvaluation.SUCCESS:
            self._handle_success()
        elif evaluation == PerformanceEvaluation.FAILED:
            self._handle_failure()

    def _handle_success(self) -> None:
        if self.current_set_count < self.effective_max_sets:
            self.current_set_count += 1
        else:
            self.current_weight = self.current_weight.add(self._increment())
            self.current_set_count = self.starting_sets

    def _handle_failure(self) -> None:
        if self.current_set_count > 1:
            self.current_set_count -= 1
            return

        decrement = self._increment()
        # At one set with nothing left to take off: hold weight and sets
        if self.current_weight.amount >= decrement.amount:
            self.current_weight = self.current_weight.subtract(decrement)

    def _increment(self) -> Weight:
        return weight_increment(self.equipment, self.current_weight)

    def update_weight(self, weight: Weight) -> None:
        check_rule(
            weight.unit == self.current_weight.unit,
            "New weight must use the same unit as current weight",
        )
        self.current_weight = weight

    def update_rep_range(self, rep_range: RepRange) -> None:
        self.rep_range = rep_range

    def summarize(self) -> ProgressionSummary:
        details = {
            "Rep Range": str(self.rep_range),
            "Current Sets": f"{self.current_set_count}/{self.effective_max_sets}",
            "Current Weight": str(self.current_weight),
            "Equipment": self.equipment.value,
        }
        if self.is_unilateral:
            details["Type"] = "Unilateral (per side)"
        return ProgressionSummary(type="Reps Per Set", details=details)


# =============================================================================
# Minimal Sets
# =============================================================================


class MinimalSetsProgression(BaseModel):
    """
    Complete a target number of total reps in as few sets as possible.

    Used for assisted dips / pull-ups and similar. The weight (often the
    assistance) is only ever changed by the user.

    - FAILED (total reps below target): add a set, up to maximum_sets
    - SUCCESS (target reached in fewer sets than planned): remove a set,
      down to minimum_sets
    - MAINTAINED: no change
    """

    kind: Literal["minimal_sets"] = "minimal_sets"
    current_weight: Weight
    target_total_reps: int = Field(..., ge=10, le=200)
    equipment: EquipmentType
    starting_sets: int = Field(..., ge=1, le=20)
    minimum_sets: int = Field(default=2, ge=1)
    maximum_sets: int = Field(default=10, le=20)
    current_set_count: int = Field(..., ge=1, le=20)

    @model_validator(mode="before")
    @classmethod
    def default_current_set_count(cls, data):
        """New progressions start at their starting set count."""
        if isinstance(data, dict) and data.get("current_set_count") is None:
            data = {**data, "current_set_count": data.get("starting_sets")}
        return data

    @model_validator(mode="after")
    def validate_set_bounds(self) -> "MinimalSetsProgression":
        if self.minimum_sets > self.starting_sets:
            raise ValueError("Minimum sets must be between 1 and starting sets")
        if self.maximum_sets < self.starting_sets:
            raise ValueError("Maximum sets must be between starting sets and 20")
        return self

    @classmethod
    def create(
        cls,
        current_weight: Weight,
        target_total_reps: int,
        starting_sets: int,
        equipment: EquipmentType,
        minimum_sets: int = 2,
        maximum_sets: int = 10,
    ) -> "MinimalSetsProgression":
        return cls(
            current_weight=current_weight,
            target_total_reps=target_total_reps,
            equipment=equipment,
            starting_sets=starting_sets,
            minimum_sets=minimum_sets,
            maximum_sets=maximum_sets,
            current_set_count=starting_sets,
        )

    def calculate_planned_sets(self, week_number: int, block_number: int) -> List[PlannedSet]:
        base_reps, remainder = divmod(self.target_total_reps, self.current_set_count)
        return [
            PlannedSet(
                set_number=i,
                weight=self.current_weight,
                target_reps=base_reps + (1 if i <= remainder else 0),
                is_amrap=False,
            )
            for i in range(1, self.current_set_count + 1)
        ]

    def evaluate(self, performance: ExercisePerformance) -> PerformanceEvaluation:
        if performance.total_reps_completed < self.target_total_reps:
            return PerformanceEvaluation.FAILED
        if performance.sets_used < self.current_set_count:
            return PerformanceEvaluation.SUCCESS
        return PerformanceEvaluation.MAINTAINED

    def check_performance(self, performance: ExercisePerformance) -> None:
        return None

    def apply_performance(self, performance: ExercisePerformance) -> None:
        evaluation = self.evaluate(performance)
        logger.debug(
            f"Minimal sets evaluation: {evaluation.value} "
            f"({performance.total_reps_completed}/{self.target_total_reps} reps "
            f"in {performance.sets_used} sets)"
        )

        if evaluation == PerformanceEvaluation.SUCCESS:
            if self.current_set_count > self.minimum_sets:
                self.current_set_count -= 1
        elif evaluation == PerformanceEvaluation.FAILED:
            if self.current_set_count < self.maximum_sets:
                self.current_set_count += 1

    def update_weight(self, weight: Weight) -> None:
        check_rule(
            weight.unit == self.current_weight.unit,
            "New weight must use the same unit as current weight",
        )
        self.current_weight = weight

    def update_target_total_reps(self, target_total_reps: int) -> None:
        check_rule(
            10 <= target_total_reps <= 200,
            "Target total reps must be between 10 and 200",
        )
        self.target_total_reps = target_total_reps

    def reset_set_count(self) -> None:
        """Go back to the starting set count, e.g. after a big weight change."""
        self.current_set_count = self.starting_sets

    def summarize(self) -> ProgressionSummary:
        return ProgressionSummary(
            type="Minimal Sets",
            details={
                "Target Total Reps": str(self.target_total_reps),
                "Current Sets": str(self.current_set_count),
                "Set Range": f"{self.minimum_sets}-{self.maximum_sets}",
                "Current Weight": str(self.current_weight),
                "Equipment": self.equipment.value,
            },
        )


ExerciseProgression = Annotated[
    Union[LinearProgression, RepsPerSetProgression, MinimalSetsProgression],
    Field(discriminator="kind"),
]
