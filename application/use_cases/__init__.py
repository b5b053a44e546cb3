"""
Application Use Cases for the progression engine.

This package contains application-level use cases that load a Workout
aggregate through the repository port, drive it through its public
operations and save it back. Use cases are the entry points for business
operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Domain errors are reported through result dataclasses, never raised

Usage:
    from application.use_cases import (
        CreateWorkoutUseCase,
        CompleteDayUseCase,
        PerformanceSubmission,
    )

    # Create and start a program
    create = CreateWorkoutUseCase(workout_repo=workout_repo)
    result = create.execute(
        user_id="user-123",
        name="A2S Hypertrophy",
        variant=ProgramVariant.HYPERTROPHY,
    )

    # Log day 1
    complete = CompleteDayUseCase(workout_repo=workout_repo)
    result = complete.execute(
        workout_id=result.workout_id,
        user_id="user-123",
        day=1,
        submissions=[...],
    )
"""

from application.use_cases.complete_day import (
    CompleteDayResult,
    CompleteDayUseCase,
    PerformanceSubmission,
    ProgressionChange,
    describe_progression_change,
)
from application.use_cases.create_workout import (
    DEFAULT_MAIN_LIFTS,
    CreateWorkoutResult,
    CreateWorkoutUseCase,
)
from application.use_cases.progress_week import ProgressWeekResult, ProgressWeekUseCase
from application.use_cases.set_active_workout import (
    SetActiveWorkoutResult,
    SetActiveWorkoutUseCase,
)
from application.use_cases.substitute_exercise import (
    SubstituteExerciseResult,
    SubstituteExerciseUseCase,
)

__all__ = [
    # CreateWorkout
    "CreateWorkoutUseCase",
    "CreateWorkoutResult",
    "DEFAULT_MAIN_LIFTS",
    # CompleteDay
    "CompleteDayUseCase",
    "CompleteDayResult",
    "PerformanceSubmission",
    "ProgressionChange",
    "describe_progression_change",
    # ProgressWeek
    "ProgressWeekUseCase",
    "ProgressWeekResult",
    # SetActiveWorkout
    "SetActiveWorkoutUseCase",
    "SetActiveWorkoutResult",
    # SubstituteExercise
    "SubstituteExerciseUseCase",
    "SubstituteExerciseResult",
]
