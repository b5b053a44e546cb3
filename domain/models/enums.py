"""
Enumerations shared across the progression domain.
"""

from enum import Enum


class WeightUnit(str, Enum):
    """Unit of measurement for weights."""

    KILOGRAMS = "kg"
    POUNDS = "lb"


class EquipmentType(str, Enum):
    """
    Equipment used for an exercise.

    Determines the weight increment used by reps-per-set progression:
    - BARBELL / CABLE / MACHINE: 2.5kg (5lb)
    - DUMBBELL: 1 unit below 10, otherwise 2
    - BODYWEIGHT: no weight increments
    """

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    CABLE = "cable"
    MACHINE = "machine"
    BODYWEIGHT = "bodyweight"


class ExerciseCategory(str, Enum):
    """Category of exercise, which constrains the progression it may use."""

    MAIN_LIFT = "main_lift"  # Squat, Bench, Deadlift, OHP
    AUXILIARY = "auxiliary"  # Front squat, incline bench
    ACCESSORY = "accessory"  # Rows, curls, raises


class ProgramVariant(str, Enum):
    """The variant of the program being run."""

    HYPERTROPHY = "hypertrophy"
    STRENGTH = "strength"


class WorkoutStatus(str, Enum):
    """Lifecycle status of a workout program."""

    NOT_STARTED = "not_started"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class AdjustmentType(str, Enum):
    """How a training max adjustment is applied."""

    NONE = "none"
    PERCENTAGE = "percentage"
    ABSOLUTE = "absolute"


class PerformanceEvaluation(str, Enum):
    """Outcome of evaluating a performance against a progression's criteria."""

    SUCCESS = "success"
    MAINTAINED = "maintained"
    FAILED = "failed"
