"""
Tests for repository protocol definitions.

These tests verify that:
1. Protocol definitions are valid and importable
2. Protocols define the expected methods
3. Mock implementations satisfy the Protocol contracts
"""
import inspect
from typing import List, Optional

import pytest

# All tests in this module are pure logic tests - mark as unit
pytestmark = pytest.mark.unit


class TestProtocolImports:
    """Test that all protocols can be imported."""

    def test_workout_repository_import(self):
        """WorkoutRepository should be importable."""
        from application.ports import WorkoutRepository
        assert WorkoutRepository is not None


class TestWorkoutRepositoryProtocol:
    """Test WorkoutRepository protocol definition."""

    def test_has_required_methods(self):
        """WorkoutRepository should define all required methods."""
        from application.ports import WorkoutRepository

        for method_name in ["get", "save", "list_for_user"]:
            assert hasattr(WorkoutRepository, method_name), \
                f"WorkoutRepository should have method '{method_name}'"

    def test_get_method_signature(self):
        """get() should be scoped to the owning user."""
        from application.ports.workout_repository import WorkoutRepository

        params = list(inspect.signature(WorkoutRepository.get).parameters.keys())
        assert params == ["self", "workout_id", "user_id"]

    def test_save_method_signature(self):
        """save() takes the whole aggregate."""
        from application.ports.workout_repository import WorkoutRepository

        params = list(inspect.signature(WorkoutRepository.save).parameters.keys())
        assert params == ["self", "workout"]


class TestProtocolCompliance:
    """Test that implementations can satisfy the protocol structurally."""

    def test_custom_implementation_is_usable(self):
        """A hand-written implementation can drive a use case."""
        from application.use_cases import ProgressWeekUseCase
        from domain.models import Workout

        class DictWorkoutRepository:
            def __init__(self):
                self.items = {}

            def get(self, workout_id: str, user_id: str) -> Optional[Workout]:
                workout = self.items.get(workout_id)
                return workout if workout and workout.user_id == user_id else None

            def save(self, workout: Workout) -> Workout:
                self.items[workout.id] = workout
                return workout

            def list_for_user(self, user_id: str) -> List[Workout]:
                return [w for w in self.items.values() if w.user_id == user_id]

        repo = DictWorkoutRepository()
        result = ProgressWeekUseCase(workout_repo=repo).execute("missing", "user-1")

        assert result.success is False
        assert result.error == "Workout not found"

    def test_fake_matches_protocol_methods(self):
        """The in-memory fake provides every protocol method with the same parameters."""
        from application.ports import WorkoutRepository
        from tests.fakes import FakeWorkoutRepository

        for method_name in ["get", "save", "list_for_user"]:
            expected = inspect.signature(getattr(WorkoutRepository, method_name))
            actual = inspect.signature(getattr(FakeWorkoutRepository, method_name))
            assert list(actual.parameters) == list(expected.parameters)
