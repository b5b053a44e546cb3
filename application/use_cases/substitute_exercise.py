"""
SubstituteExercise Use Case.

Permanently swaps an exercise for another movement (for example when a
machine is unavailable) while keeping its progression state.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from application.ports import WorkoutRepository
from domain.exceptions import DomainError

logger = logging.getLogger(__name__)


@dataclass
class SubstituteExerciseResult:
    """Result of the SubstituteExercise use case execution."""

    success: bool
    exercise_id: Optional[str] = None
    original_name: Optional[str] = None
    new_name: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None


class SubstituteExerciseUseCase:
    """Use case for renaming an exercise in place."""

    def __init__(self, workout_repo: WorkoutRepository) -> None:
        self._workout_repo = workout_repo

    def execute(
        self,
        workout_id: str,
        user_id: str,
        exercise_id: str,
        new_name: str,
        *,
        template_id: Optional[str] = None,
    ) -> SubstituteExerciseResult:
        try:
            workout = self._workout_repo.get(workout_id, user_id)
            if workout is None:
                logger.warning(f"Workout {workout_id} not found for user {user_id}")
                return SubstituteExerciseResult(success=False, error="Workout not found")

            original_name = workout.substitute_exercise(exercise_id, new_name, template_id)
            self._workout_repo.save(workout)

            current_name = workout.get_exercise(exercise_id).name
            return SubstituteExerciseResult(
                success=True,
                exercise_id=exercise_id,
                original_name=original_name,
                new_name=current_name,
                message=f"Successfully substituted '{original_name}' with '{current_name}'.",
            )

        except DomainError as e:
            logger.warning(f"Substitution rejected in {workout_id}: {e}")
            return SubstituteExerciseResult(success=False, error=e.message)

        except Exception as e:
            logger.exception(f"SubstituteExercise use case failed: {e}")
            return SubstituteExerciseResult(
                success=False, error=f"Failed to substitute exercise: {e}"
            )
