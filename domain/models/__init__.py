"""
Domain models for the progression engine.

This package contains pure domain models with no I/O of any kind:
persistence, transport and presentation live outside the domain.

These models represent the core training concepts:
- Workout: The aggregate root owning exercises and completed days
- Exercise: An exercise on a training day, governed by one progression
- Progressions: Linear (RTF), reps per set and minimal sets strategies
- Weight / TrainingMax: Load value objects with gym-increment rounding
- PlannedSet / CompletedSet / ExercisePerformance: Prescriptions and results
- Notifications: Records of state transitions

Usage:
    >>> from domain.models import Exercise, TrainingMax, Workout, WeightUnit

    >>> squat = Exercise.create_with_linear_progression(
    ...     name="Squat",
    ...     category=ExerciseCategory.MAIN_LIFT,
    ...     equipment=EquipmentType.BARBELL,
    ...     assigned_day=1,
    ...     order_in_day=1,
    ...     training_max=TrainingMax.create(100, WeightUnit.KILOGRAMS),
    ... )
    >>> workout = Workout.create("user-1", "A2S", ProgramVariant.HYPERTROPHY, [squat])

    >>> # Serialize to JSON
    >>> json_str = workout.model_dump_json(indent=2)

    >>> # Load it back
    >>> workout = Workout.rehydrate(json.loads(json_str))
"""

from domain.models.enums import (
    AdjustmentType,
    EquipmentType,
    ExerciseCategory,
    PerformanceEvaluation,
    ProgramVariant,
    WeightUnit,
    WorkoutStatus,
)
from domain.models.exercise import Exercise
from domain.models.notifications import (
    DayCompleted,
    DomainNotification,
    Notification,
    TrainingMaxAdjusted,
    WeekProgressed,
    WorkoutCompleted,
    WorkoutCreated,
    WorkoutStarted,
)
from domain.models.progression import (
    RTF_WEEK_TABLE,
    ExerciseProgression,
    LinearProgression,
    MinimalSetsProgression,
    ProgressionSummary,
    RepsPerSetProgression,
    WeekPrescription,
    adjustment_for_amrap_delta,
    block_for_week,
    is_deload_week,
    weight_increment,
)
from domain.models.sets import (
    CompletedSet,
    ExercisePerformance,
    PlannedSet,
    RepRange,
    WorkoutActivity,
)
from domain.models.weight import TrainingMax, TrainingMaxAdjustment, Weight
from domain.models.workout import ExerciseHistoryEntry, Workout

__all__ = [
    # Main entities
    "Workout",
    "Exercise",
    "ExerciseHistoryEntry",
    # Progressions
    "ExerciseProgression",
    "LinearProgression",
    "RepsPerSetProgression",
    "MinimalSetsProgression",
    "ProgressionSummary",
    "WeekPrescription",
    "RTF_WEEK_TABLE",
    "adjustment_for_amrap_delta",
    "block_for_week",
    "is_deload_week",
    "weight_increment",
    # Value objects
    "Weight",
    "TrainingMax",
    "TrainingMaxAdjustment",
    "RepRange",
    "PlannedSet",
    "CompletedSet",
    "ExercisePerformance",
    "WorkoutActivity",
    # Notifications
    "DomainNotification",
    "Notification",
    "WorkoutCreated",
    "WorkoutStarted",
    "DayCompleted",
    "WeekProgressed",
    "WorkoutCompleted",
    "TrainingMaxAdjusted",
    # Enums
    "AdjustmentType",
    "EquipmentType",
    "ExerciseCategory",
    "PerformanceEvaluation",
    "ProgramVariant",
    "WeightUnit",
    "WorkoutStatus",
]
