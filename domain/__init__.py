"""
Domain layer for the progression engine.

This package contains the Workout aggregate, its exercises and progression
strategies, and the domain exceptions. It performs no I/O.
"""

from domain.exceptions import (
    DomainError,
    ExerciseNotFoundError,
    InvariantViolationError,
    WorkoutStateError,
)
from domain.models import (
    EquipmentType,
    Exercise,
    ExerciseCategory,
    ExercisePerformance,
    ProgramVariant,
    TrainingMax,
    Weight,
    WeightUnit,
    Workout,
    WorkoutStatus,
)

__all__ = [
    "DomainError",
    "ExerciseNotFoundError",
    "InvariantViolationError",
    "WorkoutStateError",
    "EquipmentType",
    "Exercise",
    "ExerciseCategory",
    "ExercisePerformance",
    "ProgramVariant",
    "TrainingMax",
    "Weight",
    "WeightUnit",
    "Workout",
    "WorkoutStatus",
]
