"""
Exercise entity owned by a Workout.

An exercise places one progression strategy on a training day and exposes
the operations that are legal for that strategy. Exercises are only ever
created through the factories below and handed to a Workout; they are never
stored on their own.
"""

import logging
import uuid
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.exceptions import InvariantViolationError, check_rule
from domain.models.enums import EquipmentType, ExerciseCategory
from domain.models.notifications import TrainingMaxAdjusted
from domain.models.progression import (
    ExerciseProgression,
    LinearProgression,
    MinimalSetsProgression,
    ProgressionSummary,
    RepsPerSetProgression,
    adjustment_for_amrap_delta,
)
from domain.models.sets import ExercisePerformance, PlannedSet, RepRange
from domain.models.weight import TrainingMax, TrainingMaxAdjustment, Weight

logger = logging.getLogger(__name__)

MANUAL_ADJUSTMENT_REASON = "Manual adjustment"


def _new_id() -> str:
    return str(uuid.uuid4())


class Exercise(BaseModel):
    """
    Entity wrapping exactly one progression strategy.

    Placement:
    - assigned_day: training day 1-6
    - order_in_day: position within the day, starting at 1

    Category constrains the strategy: main lifts and auxiliaries use linear
    progression, accessories use reps-per-set or minimal-sets.

    Examples:
        >>> squat = Exercise.create_with_linear_progression(
        ...     name="Squat",
        ...     category=ExerciseCategory.MAIN_LIFT,
        ...     equipment=EquipmentType.BARBELL,
        ...     assigned_day=1,
        ...     order_in_day=1,
        ...     training_max=TrainingMax.create(100, WeightUnit.KILOGRAMS),
        ... )
        >>> len(squat.calculate_planned_sets(1, 1))
        5
    """

    # Identity
    id: str = Field(default_factory=_new_id, min_length=1)
    name: str = Field(..., min_length=1, description="Display name")
    template_id: Optional[str] = Field(
        default=None, description="Exercise template this entry was built from"
    )

    # Classification
    category: ExerciseCategory
    equipment: EquipmentType

    # Placement
    assigned_day: int = Field(..., ge=1, le=6)
    order_in_day: int = Field(..., ge=1)

    progression: ExerciseProgression

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def create_with_linear_progression(
        cls,
        name: str,
        category: ExerciseCategory,
        equipment: EquipmentType,
        assigned_day: int,
        order_in_day: int,
        training_max: TrainingMax,
        use_amrap: bool = True,
        base_sets_per_exercise: int = 4,
        template_id: Optional[str] = None,
    ) -> "Exercise":
        """
        Create a main lift or auxiliary exercise driven by a Training Max.

        Raises:
            InvariantViolationError: If the category is accessory or the name is empty.
        """
        _check_placement(name, assigned_day, order_in_day)
        check_rule(
            category in (ExerciseCategory.MAIN_LIFT, ExerciseCategory.AUXILIARY),
            "Linear progression is only valid for main lifts and auxiliary exercises",
        )
        return cls(
            name=name.strip(),
            category=category,
            equipment=equipment,
            assigned_day=assigned_day,
            order_in_day=order_in_day,
            template_id=template_id,
            progression=LinearProgression.create(
                training_max, use_amrap, base_sets_per_exercise
            ),
        )

    @classmethod
    def create_with_reps_per_set_progression(
        cls,
        name: str,
        equipment: EquipmentType,
        assigned_day: int,
        order_in_day: int,
        rep_range: RepRange,
        starting_weight: Weight,
        starting_sets: int = 2,
        target_sets: int = 4,
        is_unilateral: bool = False,
        template_id: Optional[str] = None,
    ) -> "Exercise":
        _check_placement(name, assigned_day, order_in_day)
        return cls(
            name=name.strip(),
            category=ExerciseCategory.ACCESSORY,
            equipment=equipment,
            assigned_day=assigned_day,
            order_in_day=order_in_day,
            template_id=template_id,
            progression=RepsPerSetProgression.create(
                rep_range=rep_range,
                starting_weight=starting_weight,
                equipment=equipment,
                starting_sets=starting_sets,
                target_sets=target_sets,
                is_unilateral=is_unilateral,
            ),
        )

    @classmethod
    def create_with_minimal_sets_progression(
        cls,
        name: str,
        equipment: EquipmentType,
        assigned_day: int,
        order_in_day: int,
        starting_weight: Weight,
        target_total_reps: int,
        starting_sets: int,
        minimum_sets: int = 2,
        maximum_sets: int = 10,
        template_id: Optional[str] = None,
    ) -> "Exercise":
        _check_placement(name, assigned_day, order_in_day)
        return cls(
            name=name.strip(),
            category=ExerciseCategory.ACCESSORY,
            equipment=equipment,
            assigned_day=assigned_day,
            order_in_day=order_in_day,
            template_id=template_id,
            progression=MinimalSetsProgression.create(
                current_weight=starting_weight,
                target_total_reps=target_total_reps,
                starting_sets=starting_sets,
                equipment=equipment,
                minimum_sets=minimum_sets,
                maximum_sets=maximum_sets,
            ),
        )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def uses_linear_progression(self) -> bool:
        return isinstance(self.progression, LinearProgression)

    @property
    def training_max(self) -> Optional[TrainingMax]:
        """Current Training Max, or None for non-linear progressions."""
        if isinstance(self.progression, LinearProgression):
            return self.progression.training_max
        return None

    @property
    def current_weight(self) -> Optional[Weight]:
        """Current working weight, or None for linear progressions."""
        if isinstance(self.progression, (RepsPerSetProgression, MinimalSetsProgression)):
            return self.progression.current_weight
        return None

    # -------------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------------

    def calculate_planned_sets(self, week_number: int, block_number: int) -> List[PlannedSet]:
        return self.progression.calculate_planned_sets(week_number, block_number)

    def summarize(self) -> ProgressionSummary:
        return self.progression.summarize()

    def check_performance(self, performance: ExercisePerformance, deload: bool = False) -> None:
        """
        Validate a performance without applying it.

        Raises:
            InvariantViolationError: If the performance belongs to another
                exercise or lacks data the progression needs.
        """
        if performance.exercise_id != self.id:
            raise InvariantViolationError(
                f"Performance is for exercise {performance.exercise_id}, not {self.id}"
            )
        if performance.skip_progression or (deload and self.uses_linear_progression):
            return
        self.progression.check_performance(performance)

    def apply_progression(
        self, performance: ExercisePerformance, *, deload: bool = False
    ) -> Optional[TrainingMaxAdjusted]:
        """
        Apply a performance to this exercise's progression.

        Substituted performances (``skip_progression``) change nothing, and
        deload weeks never move a Training Max.

        Returns:
            A TrainingMaxAdjusted notification when a linear Training Max
            changed, otherwise None.
        """
        self.check_performance(performance, deload=deload)

        if performance.skip_progression:
            logger.debug(f"Skipping progression for substituted exercise {self.name}")
            return None

        if not isinstance(self.progression, LinearProgression):
            self.progression.apply_performance(performance)
            return None

        if deload:
            logger.debug(f"Deload week: Training Max for {self.name} left unchanged")
            return None

        previous = self.progression.training_max
        self.progression.apply_performance(performance)
        current = self.progression.training_max
        if current == previous:
            return None

        delta = performance.amrap_delta
        logger.info(f"{self.name}: {previous} -> {current} (AMRAP delta {delta:+d})")
        return TrainingMaxAdjusted(
            exercise_id=self.id,
            new_training_max=current,
            adjustment=adjustment_for_amrap_delta(delta),
            amrap_delta=delta,
        )

    # -------------------------------------------------------------------------
    # Type-gated Updates
    # -------------------------------------------------------------------------

    def update_training_max(
        self, training_max: TrainingMax, reason: Optional[str] = None
    ) -> TrainingMaxAdjusted:
        """
        Manually set the Training Max of a linear exercise.

        Raises:
            InvariantViolationError: If this exercise does not use linear progression.
        """
        if not isinstance(self.progression, LinearProgression):
            raise InvariantViolationError(
                "Can only update training max for exercises with linear progression"
            )
        reason = reason or MANUAL_ADJUSTMENT_REASON
        self.progression.update_training_max(training_max, reason)
        return TrainingMaxAdjusted(
            exercise_id=self.id,
            new_training_max=training_max,
            adjustment=TrainingMaxAdjustment.none(),
            amrap_delta=0,
            reason=reason,
        )

    def update_starting_weight(self, weight: Weight) -> None:
        """
        Set the working weight of a reps-per-set or minimal-sets exercise.

        Raises:
            InvariantViolationError: For linear exercises or a unit mismatch.
        """
        if not isinstance(self.progression, (RepsPerSetProgression, MinimalSetsProgression)):
            raise InvariantViolationError(
                "Can only update weight for exercises with reps per set or minimal sets progression"
            )
        self.progression.update_weight(weight)

    def update_weight(self, weight: Weight) -> None:
        self.update_starting_weight(weight)

    def update_rep_range(self, rep_range: RepRange) -> None:
        if not isinstance(self.progression, RepsPerSetProgression):
            raise InvariantViolationError(
                "Can only update rep range for exercises with reps per set progression"
            )
        self.progression.update_rep_range(rep_range)

    # -------------------------------------------------------------------------
    # Placement and Identity
    # -------------------------------------------------------------------------

    def change_assigned_day(self, day: int, order_in_day: int) -> None:
        check_rule(1 <= day <= 6, "Day must be between 1 and 6")
        check_rule(order_in_day >= 1, "Order in day must be at least 1")
        self.assigned_day = day
        self.order_in_day = order_in_day

    def rename(self, name: str, template_id: Optional[str] = None) -> None:
        """Change the display name, keeping all progression state."""
        check_rule(bool(name and name.strip()), "Exercise name cannot be empty")
        self.name = name.strip()
        if template_id is not None:
            self.template_id = template_id

    def __str__(self) -> str:
        return f"{self.name} (day {self.assigned_day}, #{self.order_in_day})"


def _check_placement(name: str, assigned_day: int, order_in_day: int) -> None:
    check_rule(bool(name and name.strip()), "Exercise name cannot be empty")
    check_rule(1 <= assigned_day <= 6, "Day must be between 1 and 6")
    check_rule(order_in_day >= 1, "Order in day must be at least 1")
