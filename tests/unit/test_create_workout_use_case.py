"""
Unit tests for CreateWorkoutUseCase.

Tests for:
- Creating and starting a program with the default main lifts
- Custom exercises and program length
- Refusing a second active program
- Validation and unexpected errors reported through the result
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from application.settings import Settings
from application.use_cases import DEFAULT_MAIN_LIFTS, CreateWorkoutResult, CreateWorkoutUseCase
from domain.models import ProgramVariant, Workout, WorkoutCreated, WorkoutStarted, WorkoutStatus
from tests.fakes import FakeWorkoutRepository, linear_exercise, reps_per_set_exercise


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def workout_repo() -> FakeWorkoutRepository:
    """Create a fresh fake workout repository."""
    return FakeWorkoutRepository()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, default_total_weeks=14, default_training_max=80.0)


@pytest.fixture
def use_case(workout_repo, settings) -> CreateWorkoutUseCase:
    """Create CreateWorkoutUseCase with fake dependencies."""
    return CreateWorkoutUseCase(workout_repo=workout_repo, settings=settings)


# =============================================================================
# Success Path
# =============================================================================


@pytest.mark.unit
class TestCreateWorkoutSuccess:
    """Tests for successful creation."""

    def test_creates_started_workout(self, use_case, workout_repo):
        result = use_case.execute("user-1", "A2S Hypertrophy", ProgramVariant.HYPERTROPHY)

        assert isinstance(result, CreateWorkoutResult)
        assert result.success is True
        assert result.error is None
        assert result.workout_id == result.workout.id
        assert result.workout.status == WorkoutStatus.ACTIVE
        assert workout_repo.save_count == 1

        stored = workout_repo.get(result.workout_id, "user-1")
        assert stored is not None
        assert stored.status == WorkoutStatus.ACTIVE

    def test_default_main_lifts(self, use_case):
        result = use_case.execute("user-1", "A2S", ProgramVariant.STRENGTH)

        exercises = sorted(result.workout.exercises, key=lambda e: (e.assigned_day, e.order_in_day))
        assert [(e.name, e.assigned_day, e.order_in_day) for e in exercises] == DEFAULT_MAIN_LIFTS
        assert all(e.uses_linear_progression for e in exercises)
        assert all(e.training_max.amount == Decimal("80") for e in exercises)

    def test_uses_settings_for_program_length(self, use_case):
        result = use_case.execute("user-1", "A2S", ProgramVariant.STRENGTH)
        assert result.workout.total_weeks == 14

    def test_explicit_exercises_and_length(self, use_case):
        exercises = [linear_exercise("Front Squat"), reps_per_set_exercise("Leg Curl")]

        result = use_case.execute(
            "user-1", "Custom", ProgramVariant.HYPERTROPHY, exercises=exercises, total_weeks=7
        )

        assert result.success is True
        assert result.workout.total_weeks == 7
        assert [e.name for e in result.workout.get_exercises_for_day(1)] == ["Front Squat", "Leg Curl"]

    def test_notifications_are_left_on_aggregate(self, use_case):
        result = use_case.execute("user-1", "A2S", ProgramVariant.STRENGTH)

        notifications = result.workout.pull_notifications()
        assert [type(n) for n in notifications] == [WorkoutCreated, WorkoutStarted]

    def test_paused_workout_does_not_block_creation(self, use_case, workout_repo):
        paused = Workout.create("user-1", "Old", ProgramVariant.STRENGTH, [linear_exercise()])
        paused.start()
        paused.pause()
        workout_repo.seed([paused])

        result = use_case.execute("user-1", "New", ProgramVariant.STRENGTH)

        assert result.success is True
        assert len(workout_repo.list_for_user("user-1")) == 2

    def test_other_users_active_workout_is_ignored(self, use_case, workout_repo):
        other = Workout.create("user-2", "Theirs", ProgramVariant.STRENGTH, [linear_exercise()])
        other.start()
        workout_repo.seed([other])

        result = use_case.execute("user-1", "Mine", ProgramVariant.STRENGTH)

        assert result.success is True


# =============================================================================
# Error Cases
# =============================================================================


@pytest.mark.unit
class TestCreateWorkoutErrors:
    """Tests for rejected and failed creation."""

    def test_refuses_second_active_workout(self, use_case, workout_repo):
        first = use_case.execute("user-1", "First", ProgramVariant.STRENGTH)
        assert first.success is True

        second = use_case.execute("user-1", "Second", ProgramVariant.STRENGTH)

        assert second.success is False
        assert second.workout is None
        assert "active workout already exists" in second.error
        assert workout_repo.save_count == 1

    def test_invalid_name(self, use_case, workout_repo):
        result = use_case.execute("user-1", "", ProgramVariant.STRENGTH)

        assert result.success is False
        assert "name" in result.error
        assert workout_repo.save_count == 0

    def test_invalid_exercise_ordering(self, use_case):
        exercises = [linear_exercise(order=1), reps_per_set_exercise(order=3)]

        result = use_case.execute("user-1", "A2S", ProgramVariant.STRENGTH, exercises=exercises)

        assert result.success is False
        assert "sequential" in result.error

    def test_unexpected_repository_error(self, use_case, workout_repo):
        with patch.object(workout_repo, "save", side_effect=RuntimeError("disk full")):
            result = use_case.execute("user-1", "A2S", ProgramVariant.STRENGTH)

        assert result.success is False
        assert result.error == "Failed to create workout: disk full"
