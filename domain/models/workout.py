"""
Workout aggregate root.

A Workout owns its exercises and the append-only log of completed days, and
is the only place where they change. It drives the program state machine:

    NotStarted -> Active -> Completed
                  Active <-> Paused

Every mutating method checks all of its preconditions before it touches any
state, so a rejected call leaves the aggregate exactly as it was.
"""

import logging
import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, PrivateAttr

from domain.exceptions import (
    ExerciseNotFoundError,
    InvariantViolationError,
    WorkoutStateError,
    check_rule,
)
from domain.models.enums import ProgramVariant, WorkoutStatus
from domain.models.exercise import Exercise
from domain.models.notifications import (
    DayCompleted,
    Notification,
    WeekProgressed,
    WorkoutCompleted,
    WorkoutCreated,
    WorkoutStarted,
)
from domain.models.progression import (
    PROGRAM_WEEKS,
    ProgressionSummary,
    block_for_week,
    is_deload_week,
)
from domain.models.sets import ExercisePerformance, PlannedSet, WorkoutActivity
from domain.models.weight import TrainingMax, Weight

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def validate_exercise_ordering(exercises: List[Exercise]) -> None:
    """
    Check that every day's ``order_in_day`` values run 1..n with no gaps.

    Raises:
        InvariantViolationError: On a duplicate exercise id, a duplicate
            position or a gap within a day.
    """
    ids = [e.id for e in exercises]
    check_rule(len(ids) == len(set(ids)), "Exercise ids must be unique within a workout")

    by_day: Dict[int, List[int]] = defaultdict(list)
    for exercise in exercises:
        by_day[exercise.assigned_day].append(exercise.order_in_day)

    for day, orders in sorted(by_day.items()):
        if len(orders) != len(set(orders)):
            raise InvariantViolationError(f"Duplicate exercise order on day {day}")
        if sorted(orders) != list(range(1, len(orders) + 1)):
            raise InvariantViolationError(
                f"Exercise order on day {day} must be sequential starting from 1"
            )


class ExerciseHistoryEntry(BaseModel):
    """One logged performance of an exercise, with where it happened."""

    week_number: int
    block_number: int
    day: int
    performance: ExercisePerformance

    model_config = {"frozen": True}


class Workout(BaseModel):
    """
    Aggregate root for one user's periodized program.

    Build new workouts with ``Workout.create`` (checks every invariant and
    records a WorkoutCreated notification). Load stored workouts with
    ``Workout.rehydrate``, which trusts its input.

    Mutating methods return the notifications they produced; the aggregate
    also keeps them until ``pull_notifications()``.

    Examples:
        >>> workout = Workout.create("user-1", "A2S Hypertrophy",
        ...                          ProgramVariant.HYPERTROPHY, [squat])
        >>> workout.start()
        [WorkoutStarted(...)]
        >>> workout.get_planned_sets_for_day(1)
        [PlannedSet(set_number=1, ...), ...]
    """

    # Identity
    id: str = Field(default_factory=_new_id, min_length=1)
    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    variant: ProgramVariant

    # Program position
    total_weeks: int = Field(default=PROGRAM_WEEKS, ge=1)
    current_week: int = Field(default=1, ge=1, le=PROGRAM_WEEKS)
    current_block: int = Field(default=1, ge=1, le=3)
    status: WorkoutStatus = WorkoutStatus.NOT_STARTED

    # Timestamps
    created_at: datetime = Field(default_factory=_utcnow)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    exercises: List[Exercise] = Field(default_factory=list)
    completed_activities: List[WorkoutActivity] = Field(default_factory=list)

    _notifications: List[Any] = PrivateAttr(default_factory=list)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        user_id: str,
        name: str,
        variant: ProgramVariant,
        exercises: List[Exercise],
        total_weeks: int = PROGRAM_WEEKS,
    ) -> "Workout":
        """
        Create a new workout in NotStarted status at week 1, block 1.

        Raises:
            InvariantViolationError: If the user id or name is empty, total
                weeks is not positive, there are no exercises, or the per-day
                ordering has gaps or duplicates.
        """
        check_rule(bool(user_id and user_id.strip()), "User ID cannot be empty")
        check_rule(bool(name and name.strip()), "Workout name cannot be empty")
        check_rule(total_weeks > 0, "Total weeks must be greater than zero")
        check_rule(bool(exercises), "Workout must have at least one exercise")
        validate_exercise_ordering(exercises)

        workout = cls(
            user_id=user_id,
            name=name.strip(),
            variant=variant,
            total_weeks=total_weeks,
            exercises=list(exercises),
        )
        workout._record(
            WorkoutCreated(
                workout_id=workout.id,
                name=workout.name,
                variant=variant,
                exercise_count=len(exercises),
            )
        )
        logger.info(f"Created workout {workout.id} ({workout.name}) for user {user_id}")
        return workout

    @classmethod
    def rehydrate(cls, data: Dict[str, Any]) -> "Workout":
        """
        Rebuild a workout from trusted stored data.

        Field types are parsed, but creation invariants are not re-checked
        and no notifications are recorded.
        """
        return cls.model_validate(data)

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.status == WorkoutStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status == WorkoutStatus.COMPLETED

    @property
    def exercise_count(self) -> int:
        return len(self.exercises)

    @property
    def training_days(self) -> List[int]:
        """Days that have at least one exercise, ascending."""
        return sorted({e.assigned_day for e in self.exercises})

    def is_deload_week(self) -> bool:
        """Weeks 7, 14 and 21 are deload weeks."""
        return is_deload_week(self.current_week)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> List[Notification]:
        if self.status != WorkoutStatus.NOT_STARTED:
            raise WorkoutStateError("Workout has already been started")

        self.status = WorkoutStatus.ACTIVE
        self.started_at = _utcnow()
        logger.info(f"Started workout {self.id}")
        return self._record(WorkoutStarted(workout_id=self.id))

    def pause(self) -> List[Notification]:
        if self.status != WorkoutStatus.ACTIVE:
            raise WorkoutStateError("Can only pause an active workout")
        self.status = WorkoutStatus.PAUSED
        logger.info(f"Paused workout {self.id}")
        return []

    def resume(self) -> List[Notification]:
        if self.status != WorkoutStatus.PAUSED:
            raise WorkoutStateError("Can only resume a paused workout")
        self.status = WorkoutStatus.ACTIVE
        logger.info(f"Resumed workout {self.id}")
        return []

    def set_as_active(self) -> List[Notification]:
        """
        Make this the workout being trained.

        Starts a NotStarted workout, resumes a Paused one and does nothing
        for one that is already Active.

        Raises:
            WorkoutStateError: If the workout is completed.
        """
        if self.status == WorkoutStatus.COMPLETED:
            raise WorkoutStateError("Cannot activate a completed workout")
        if self.status == WorkoutStatus.NOT_STARTED:
            return self.start()
        if self.status == WorkoutStatus.PAUSED:
            return self.resume()
        return []

    def deactivate(self) -> List[Notification]:
        """Pause the workout if it is Active, otherwise do nothing."""
        if self.status == WorkoutStatus.ACTIVE:
            return self.pause()
        return []

    # -------------------------------------------------------------------------
    # Training Progress
    # -------------------------------------------------------------------------

    def complete_day(
        self, day: int, performances: List[ExercisePerformance]
    ) -> List[Notification]:
        """
        Record a completed training day and apply every performance.

        Preconditions are checked for all performances before any
        progression changes. If a progression still rejects its
        performance, every exercise is restored to its prior state.

        Raises:
            WorkoutStateError: If the workout is not active.
            InvariantViolationError: If there are no performances, no
                exercises on the day, a repeated exercise, or a
                performance the progression cannot use.
            ExerciseNotFoundError: If a performance targets an unknown
                exercise or one that is not assigned to ``day``.
        """
        if self.status != WorkoutStatus.ACTIVE:
            raise WorkoutStateError("Cannot complete a day when workout is not active")
        check_rule(bool(performances), "At least one exercise performance is required")
        check_rule(
            any(e.assigned_day == day for e in self.exercises),
            f"No exercises are assigned to day {day}",
        )

        deload = self.is_deload_week()
        targets: List[Exercise] = []
        for performance in performances:
            exercise = self._find_exercise(performance.exercise_id)
            if exercise.assigned_day != day:
                raise ExerciseNotFoundError(
                    f"Exercise {exercise.name} is not assigned to day {day}",
                    exercise_id=exercise.id,
                )
            check_rule(
                all(t.id != exercise.id for t in targets),
                f"Exercise {exercise.name} has more than one performance",
            )
            exercise.check_performance(performance, deload=deload)
            targets.append(exercise)

        snapshots = [e.progression.model_copy(deep=True) for e in targets]
        notifications: List[Notification] = []
        try:
            for exercise, performance in zip(targets, performances):
                adjusted = exercise.apply_progression(performance, deload=deload)
                if adjusted is not None:
                    notifications.append(adjusted)
        except InvariantViolationError:
            for exercise, snapshot in zip(targets, snapshots):
                exercise.progression = snapshot
            raise

        self.completed_activities.append(
            WorkoutActivity(
                day=day,
                week_number=self.current_week,
                block_number=self.current_block,
                performances=list(performances),
            )
        )
        notifications.append(
            DayCompleted(
                workout_id=self.id,
                day=day,
                week_number=self.current_week,
                exercise_count=len(performances),
            )
        )
        logger.info(
            f"Completed day {day} of week {self.current_week} for workout {self.id} "
            f"({len(performances)} exercises)"
        )
        return self._record(*notifications)

    def progress_to_next_week(self) -> List[Notification]:
        """
        Advance to the next week, updating the block.

        Reaching ``total_weeks`` on a deload week completes the program.

        Raises:
            WorkoutStateError: If the workout is not active.
            InvariantViolationError: If already at the final week, or the
                next week falls outside the 21-week program.
        """
        if self.status != WorkoutStatus.ACTIVE:
            raise WorkoutStateError("Cannot progress week when workout is not active")
        check_rule(
            self.current_week < self.total_weeks,
            f"Cannot progress beyond week {self.total_weeks}",
        )

        previous_week = self.current_week
        new_week = previous_week + 1
        new_block = block_for_week(new_week)

        self.current_week = new_week
        self.current_block = new_block
        deload = self.is_deload_week()

        notifications: List[Notification] = [
            WeekProgressed(
                workout_id=self.id,
                previous_week=previous_week,
                new_week=new_week,
                new_block=new_block,
                is_deload_week=deload,
            )
        ]
        logger.info(
            f"Workout {self.id} progressed to week {new_week} (block {new_block}"
            + (", deload" if deload else "")
            + ")"
        )

        if new_week == self.total_weeks and deload:
            notifications.append(self._complete_program())

        return self._record(*notifications)

    def _complete_program(self) -> WorkoutCompleted:
        self.status = WorkoutStatus.COMPLETED
        self.completed_at = _utcnow()
        logger.info(f"Workout {self.id} completed")
        return WorkoutCompleted(workout_id=self.id, completed_at=self.completed_at)

    # -------------------------------------------------------------------------
    # Exercise Management
    # -------------------------------------------------------------------------

    def add_exercise(self, exercise: Exercise) -> List[Notification]:
        """
        Add an exercise at its assigned day and position.

        Raises:
            WorkoutStateError: Unless the workout is NotStarted or Active.
            InvariantViolationError: If the position is taken or would leave a gap.
        """
        self._check_exercises_editable()
        for existing in self.exercises:
            if (
                existing.assigned_day == exercise.assigned_day
                and existing.order_in_day == exercise.order_in_day
            ):
                raise InvariantViolationError(
                    f"An exercise already exists at position {exercise.order_in_day} "
                    f"on day {exercise.assigned_day}"
                )
        validate_exercise_ordering([*self.exercises, exercise])

        self.exercises.append(exercise)
        logger.info(f"Added {exercise} to workout {self.id}")
        return []

    def remove_exercise(self, exercise_id: str) -> List[Notification]:
        """
        Remove an exercise and close the gap it leaves on its day.

        Raises:
            WorkoutStateError: Unless the workout is NotStarted or Active.
            ExerciseNotFoundError: If the exercise is not in this workout.
            InvariantViolationError: If it is the last exercise.
        """
        self._check_exercises_editable()
        exercise = self._find_exercise(exercise_id)
        check_rule(len(self.exercises) > 1, "Workout must have at least one exercise")

        self.exercises.remove(exercise)
        for other in self.exercises:
            if (
                other.assigned_day == exercise.assigned_day
                and other.order_in_day > exercise.order_in_day
            ):
                other.order_in_day -= 1
        logger.info(f"Removed {exercise.name} from workout {self.id}")
        return []

    def reorder_exercise(self, exercise_id: str, new_order_in_day: int) -> List[Notification]:
        """Move an exercise within its day, shifting the others to keep 1..n."""
        self._check_exercises_editable()
        exercise = self._find_exercise(exercise_id)
        day_exercises = self.get_exercises_for_day(exercise.assigned_day)
        check_rule(
            1 <= new_order_in_day <= len(day_exercises),
            f"Order in day must be between 1 and {len(day_exercises)}",
        )

        reordered = [e for e in day_exercises if e.id != exercise.id]
        reordered.insert(new_order_in_day - 1, exercise)
        for position, item in enumerate(reordered, start=1):
            item.order_in_day = position
        return []

    def substitute_exercise(
        self, exercise_id: str, new_name: str, template_id: Optional[str] = None
    ) -> str:
        """
        Permanently swap an exercise for another, keeping its progression.

        Returns:
            The exercise's previous name.
        """
        if self.status == WorkoutStatus.COMPLETED:
            raise WorkoutStateError("Cannot substitute exercises in a completed workout")
        exercise = self._find_exercise(exercise_id)
        original_name = exercise.name
        exercise.rename(new_name, template_id)
        logger.info(f"Substituted {original_name} with {exercise.name} in workout {self.id}")
        return original_name

    def adjust_training_max(
        self, exercise_id: str, training_max: TrainingMax, reason: Optional[str] = None
    ) -> List[Notification]:
        exercise = self._find_exercise(exercise_id)
        return self._record(exercise.update_training_max(training_max, reason))

    def adjust_starting_weight(self, exercise_id: str, weight: Weight) -> List[Notification]:
        exercise = self._find_exercise(exercise_id)
        exercise.update_starting_weight(weight)
        return []

    def _check_exercises_editable(self) -> None:
        if self.status not in (WorkoutStatus.NOT_STARTED, WorkoutStatus.ACTIVE):
            raise WorkoutStateError(
                "Cannot change exercises of a completed or paused workout"
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_exercise(self, exercise_id: str) -> Exercise:
        return self._find_exercise(exercise_id)

    def get_exercises_for_day(self, day: int) -> List[Exercise]:
        """Exercises assigned to ``day`` in training order."""
        return sorted(
            (e for e in self.exercises if e.assigned_day == day),
            key=lambda e: e.order_in_day,
        )

    def get_planned_sets_for_day(self, day: int) -> List[PlannedSet]:
        planned: List[PlannedSet] = []
        for exercise in self.get_exercises_for_day(day):
            planned.extend(
                exercise.calculate_planned_sets(self.current_week, self.current_block)
            )
        return planned

    def get_planned_sets_for_exercise(self, exercise_id: str) -> List[PlannedSet]:
        exercise = self._find_exercise(exercise_id)
        return exercise.calculate_planned_sets(self.current_week, self.current_block)

    def get_exercise_history(self, exercise_id: str) -> List[ExerciseHistoryEntry]:
        """Every logged performance of an exercise, oldest first."""
        self._find_exercise(exercise_id)
        history = []
        for activity in self.completed_activities:
            performance = activity.performance_for(exercise_id)
            if performance is not None:
                history.append(
                    ExerciseHistoryEntry(
                        week_number=activity.week_number,
                        block_number=activity.block_number,
                        day=activity.day,
                        performance=performance,
                    )
                )
        return history

    def progression_summaries(self) -> Dict[str, ProgressionSummary]:
        """Progression summary per exercise id."""
        return {e.id: e.summarize() for e in self.exercises}

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    def pull_notifications(self) -> List[Notification]:
        """Return and clear the notifications collected so far."""
        pulled = list(self._notifications)
        self._notifications.clear()
        return pulled

    def _record(self, *notifications: Notification) -> List[Notification]:
        self._notifications.extend(notifications)
        return list(notifications)

    def _find_exercise(self, exercise_id: str) -> Exercise:
        for exercise in self.exercises:
            if exercise.id == exercise_id:
                return exercise
        raise ExerciseNotFoundError(
            f"Exercise {exercise_id} not found in this workout", exercise_id=exercise_id
        )

    def __str__(self) -> str:
        return (
            f'Workout("{self.name}", week {self.current_week}/{self.total_weeks}, '
            f"block {self.current_block}, {self.status.value})"
        )
