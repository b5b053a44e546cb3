"""
ProgressWeek Use Case.

Moves an active program on to its next week. Reaching the final deload week
completes the program.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from application.ports import WorkoutRepository
from domain.exceptions import DomainError
from domain.models import Notification, WorkoutStatus

logger = logging.getLogger(__name__)


@dataclass
class ProgressWeekResult:
    """Result of the ProgressWeek use case execution."""

    success: bool
    previous_week: Optional[int] = None
    new_week: Optional[int] = None
    new_block: Optional[int] = None
    is_deload_week: bool = False
    program_complete: bool = False
    notifications: List[Notification] = field(default_factory=list)
    error: Optional[str] = None


class ProgressWeekUseCase:
    """
    Use case for advancing a workout to its next week.

    Usage:
        >>> use_case = ProgressWeekUseCase(workout_repo=workout_repo)
        >>> result = use_case.execute(workout_id="w-123", user_id="user-123")
        >>> result.new_week
        2
    """

    def __init__(self, workout_repo: WorkoutRepository) -> None:
        self._workout_repo = workout_repo

    def execute(self, workout_id: str, user_id: str) -> ProgressWeekResult:
        try:
            workout = self._workout_repo.get(workout_id, user_id)
            if workout is None:
                logger.warning(f"Workout {workout_id} not found for user {user_id}")
                return ProgressWeekResult(success=False, error="Workout not found")

            previous_week = workout.current_week
            notifications = workout.progress_to_next_week()
            self._workout_repo.save(workout)

            return ProgressWeekResult(
                success=True,
                previous_week=previous_week,
                new_week=workout.current_week,
                new_block=workout.current_block,
                is_deload_week=workout.is_deload_week(),
                program_complete=workout.status == WorkoutStatus.COMPLETED,
                notifications=notifications,
            )

        except DomainError as e:
            logger.warning(f"Week progression rejected for {workout_id}: {e}")
            return ProgressWeekResult(success=False, error=e.message)

        except Exception as e:
            logger.exception(f"ProgressWeek use case failed: {e}")
            return ProgressWeekResult(success=False, error=f"Failed to progress week: {e}")
