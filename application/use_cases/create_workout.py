"""
CreateWorkout Use Case.

Creates a new program for a user, starts it immediately and persists it.
A user can only train one program at a time, so creation is refused while
another of their workouts is active.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from application.ports import WorkoutRepository
from application.settings import Settings, get_settings
from domain.exceptions import DomainError
from domain.models import (
    EquipmentType,
    Exercise,
    ExerciseCategory,
    ProgramVariant,
    TrainingMax,
    Workout,
)

logger = logging.getLogger(__name__)

# (name, day, order) of the main lifts every new program starts with
DEFAULT_MAIN_LIFTS = [
    ("Squat", 1, 1),
    ("Bench Press", 1, 2),
    ("Deadlift", 2, 1),
    ("Overhead Press", 2, 2),
]


@dataclass
class CreateWorkoutResult:
    """Result of the CreateWorkout use case execution."""

    success: bool
    workout: Optional[Workout] = None
    workout_id: Optional[str] = None
    error: Optional[str] = None


class CreateWorkoutUseCase:
    """
    Use case for creating and starting a workout program.

    Orchestrates the following workflow:
    1. Refuse if the user already has an active workout
    2. Build the default main lifts unless exercises are supplied
    3. Create the aggregate and start it
    4. Persist via repository

    Usage:
        >>> use_case = CreateWorkoutUseCase(workout_repo=workout_repo)
        >>> result = use_case.execute(
        ...     user_id="user-123",
        ...     name="A2S Hypertrophy",
        ...     variant=ProgramVariant.HYPERTROPHY,
        ... )
        >>> if result.success:
        ...     print(f"Created workout: {result.workout_id}")
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        settings: Optional[Settings] = None,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            workout_repo: Repository for persisting workouts
            settings: Program defaults (defaults to get_settings())
        """
        self._workout_repo = workout_repo
        self._settings = settings or get_settings()

    def execute(
        self,
        user_id: str,
        name: str,
        variant: ProgramVariant,
        *,
        exercises: Optional[List[Exercise]] = None,
        total_weeks: Optional[int] = None,
    ) -> CreateWorkoutResult:
        """
        Execute the create workout workflow.

        Args:
            user_id: Owner of the new workout
            name: Program name
            variant: Program variant (hypertrophy or strength)
            exercises: Exercises to train (defaults to the four main lifts)
            total_weeks: Program length (defaults to settings.default_total_weeks)

        Returns:
            CreateWorkoutResult with the started workout
        """
        try:
            active = [w for w in self._workout_repo.list_for_user(user_id) if w.is_active]
            if active:
                logger.warning(
                    f"User {user_id} already has active workout {active[0].id}"
                )
                return CreateWorkoutResult(
                    success=False,
                    error=(
                        "An active workout already exists. "
                        "Complete or pause it before creating a new one."
                    ),
                )

            if exercises is None:
                exercises = self._default_exercises()
            weeks = total_weeks if total_weeks is not None else self._settings.default_total_weeks

            workout = Workout.create(user_id, name, variant, exercises, total_weeks=weeks)
            workout.start()

            saved = self._workout_repo.save(workout)
            logger.info(f"Workout created: {saved.id}")
            return CreateWorkoutResult(success=True, workout=saved, workout_id=saved.id)

        except (DomainError, ValueError) as e:
            logger.warning(f"Workout creation rejected: {e}")
            return CreateWorkoutResult(success=False, error=str(e))

        except Exception as e:
            logger.exception(f"CreateWorkout use case failed: {e}")
            return CreateWorkoutResult(
                success=False,
                error=f"Failed to create workout: {e}",
            )

    def _default_exercises(self) -> List[Exercise]:
        training_max = TrainingMax.create(
            Decimal(str(self._settings.default_training_max)),
            self._settings.default_weight_unit,
        )
        return [
            Exercise.create_with_linear_progression(
                name=lift,
                category=ExerciseCategory.MAIN_LIFT,
                equipment=EquipmentType.BARBELL,
                assigned_day=day,
                order_in_day=order,
                training_max=training_max,
                use_amrap=True,
                base_sets_per_exercise=4,
            )
            for lift, day, order in DEFAULT_MAIN_LIFTS
        ]
