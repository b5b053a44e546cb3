"""
SetActiveWorkout Use Case.

Makes one of a user's workouts the one being trained. Any other active
workout of the same user is paused first, so at most one is active.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from application.ports import WorkoutRepository
from domain.exceptions import DomainError

logger = logging.getLogger(__name__)


@dataclass
class SetActiveWorkoutResult:
    """Result of the SetActiveWorkout use case execution."""

    success: bool
    workout_id: Optional[str] = None
    deactivated_ids: List[str] = field(default_factory=list)
    error: Optional[str] = None


class SetActiveWorkoutUseCase:
    """
    Use case for switching the active workout.

    Orchestrates the following workflow:
    1. Load the workout to activate (must belong to the user)
    2. Deactivate every other active workout of the user
    3. Start or resume the requested workout
    4. Persist all changed workouts
    """

    def __init__(self, workout_repo: WorkoutRepository) -> None:
        self._workout_repo = workout_repo

    def execute(self, workout_id: str, user_id: str) -> SetActiveWorkoutResult:
        try:
            workout = self._workout_repo.get(workout_id, user_id)
            if workout is None:
                logger.warning(f"Workout {workout_id} not found for user {user_id}")
                return SetActiveWorkoutResult(success=False, error="Workout not found")

            # Checked first so a completed target leaves the others untouched
            if workout.is_completed:
                return SetActiveWorkoutResult(
                    success=False, error="Cannot activate a completed workout"
                )

            others = [
                w
                for w in self._workout_repo.list_for_user(user_id)
                if w.id != workout.id and w.is_active
            ]
            for other in others:
                other.deactivate()
                self._workout_repo.save(other)
                logger.info(f"Deactivated workout {other.id}")

            workout.set_as_active()
            self._workout_repo.save(workout)

            return SetActiveWorkoutResult(
                success=True,
                workout_id=workout.id,
                deactivated_ids=[w.id for w in others],
            )

        except DomainError as e:
            logger.warning(f"Activation rejected for {workout_id}: {e}")
            return SetActiveWorkoutResult(success=False, error=e.message)

        except Exception as e:
            logger.exception(f"SetActiveWorkout use case failed: {e}")
            return SetActiveWorkoutResult(
                success=False, error=f"Failed to set active workout: {e}"
            )
