"""
CompleteDay Use Case.

Turns the sets a user logged for a training day into performances, applies
them through the Workout aggregate and persists the result.

Planned sets are never taken from the client: they are recomputed from the
workout's current week and block so that progression always compares
against what was actually prescribed.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from application.ports import WorkoutRepository
from domain.exceptions import DomainError
from domain.models import (
    CompletedSet,
    Exercise,
    ExercisePerformance,
    LinearProgression,
    MinimalSetsProgression,
    Notification,
    PerformanceEvaluation,
    RepsPerSetProgression,
)

logger = logging.getLogger(__name__)


@dataclass
class PerformanceSubmission:
    """Sets logged for one exercise."""

    exercise_id: str
    completed_sets: List[CompletedSet]
    skip_progression: bool = False


@dataclass
class ProgressionChange:
    """Human-readable description of what a performance did to an exercise."""

    exercise_id: str
    exercise_name: str
    change: str


@dataclass
class CompleteDayResult:
    """Result of the CompleteDay use case execution."""

    success: bool
    day: Optional[int] = None
    week_number: Optional[int] = None
    block_number: Optional[int] = None
    exercises_completed: int = 0
    progression_changes: List[ProgressionChange] = field(default_factory=list)
    notifications: List[Notification] = field(default_factory=list)
    error: Optional[str] = None


def describe_progression_change(
    exercise: Exercise, performance: ExercisePerformance, deload: bool = False
) -> str:
    """
    Describe, before it is applied, what a performance will change.

    Mirrors the decision rules of each progression strategy.
    """
    if performance.skip_progression:
        return "Skipped (temporary substitution)"

    progression = exercise.progression
    if isinstance(progression, LinearProgression):
        if not progression.use_amrap:
            return "No change"
        if deload:
            return "No change (deload week)"
        delta = performance.amrap_delta
        if delta >= 5:
            return "TM increased 3%"
        if delta == 4:
            return "TM increased 2%"
        if delta == 3:
            return "TM increased 1.5%"
        if delta == 2:
            return "TM increased 1%"
        if delta == 1:
            return "TM increased 0.5%"
        if delta == 0:
            return "No change"
        if delta == -1:
            return "TM decreased 2%"
        return "TM decreased 5%"

    if isinstance(progression, RepsPerSetProgression):
        evaluation = progression.evaluate(performance)
        if evaluation == PerformanceEvaluation.SUCCESS:
            if progression.current_set_count < progression.effective_max_sets:
                return "Added 1 set"
            return "Weight increased, sets reset"
        if evaluation == PerformanceEvaluation.FAILED:
            if progression.current_set_count > 1:
                return "Removed 1 set"
            return "Weight decreased"
        return "No change"

    if isinstance(progression, MinimalSetsProgression):
        evaluation = progression.evaluate(performance)
        if evaluation == PerformanceEvaluation.FAILED:
            return "Added 1 set (did not hit target reps)"
        if evaluation == PerformanceEvaluation.SUCCESS:
            return "Reduced sets (completed in fewer sets)"
        return "No change"

    return "Progression applied"


class CompleteDayUseCase:
    """
    Use case for logging a completed training day.

    Orchestrates the following workflow:
    1. Load the workout (must belong to the user and be active)
    2. Recompute planned sets for each submitted exercise
    3. Build ExercisePerformance records and describe the changes
    4. Apply them through Workout.complete_day
    5. Persist via repository

    Usage:
        >>> use_case = CompleteDayUseCase(workout_repo=workout_repo)
        >>> result = use_case.execute(
        ...     workout_id="w-123",
        ...     user_id="user-123",
        ...     day=1,
        ...     submissions=[PerformanceSubmission(exercise_id="e-1", completed_sets=[...])],
        ... )
        >>> [c.change for c in result.progression_changes]
        ['TM increased 3%']
    """

    def __init__(self, workout_repo: WorkoutRepository) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            workout_repo: Repository for loading and persisting workouts
        """
        self._workout_repo = workout_repo

    def execute(
        self,
        workout_id: str,
        user_id: str,
        day: int,
        submissions: List[PerformanceSubmission],
    ) -> CompleteDayResult:
        """
        Execute the complete day workflow.

        Args:
            workout_id: Workout to update
            user_id: Owner of the workout
            day: Training day (1-6)
            submissions: Logged sets per exercise

        Returns:
            CompleteDayResult with progression changes and notifications
        """
        try:
            workout = self._workout_repo.get(workout_id, user_id)
            if workout is None:
                logger.warning(f"Workout {workout_id} not found for user {user_id}")
                return CompleteDayResult(success=False, error="Workout not found")

            deload = workout.is_deload_week()
            performances: List[ExercisePerformance] = []
            changes: List[ProgressionChange] = []
            for submission in submissions:
                exercise = workout.get_exercise(submission.exercise_id)
                performance = ExercisePerformance(
                    exercise_id=exercise.id,
                    planned_sets=workout.get_planned_sets_for_exercise(exercise.id),
                    completed_sets=submission.completed_sets,
                    skip_progression=submission.skip_progression,
                )
                performances.append(performance)
                changes.append(
                    ProgressionChange(
                        exercise_id=exercise.id,
                        exercise_name=exercise.name,
                        change=describe_progression_change(exercise, performance, deload),
                    )
                )

            week_number = workout.current_week
            block_number = workout.current_block
            notifications = workout.complete_day(day, performances)
            self._workout_repo.save(workout)

            logger.info(
                f"Day {day} of week {week_number} completed for workout {workout_id}"
            )
            return CompleteDayResult(
                success=True,
                day=day,
                week_number=week_number,
                block_number=block_number,
                exercises_completed=len(performances),
                progression_changes=changes,
                notifications=notifications,
            )

        except (DomainError, ValueError) as e:
            logger.warning(f"Day completion rejected for {workout_id}: {e}")
            return CompleteDayResult(success=False, error=str(e))

        except Exception as e:
            logger.exception(f"CompleteDay use case failed: {e}")
            return CompleteDayResult(success=False, error=f"Failed to complete day: {e}")
