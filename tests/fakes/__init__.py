"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation

Usage:
    from tests.fakes import FakeWorkoutRepository

    repo = FakeWorkoutRepository()
    repo.seed([workout])
"""

from tests.fakes.builders import (
    completed_sets,
    linear_exercise,
    minimal_sets_exercise,
    performance_for,
    reps_per_set_exercise,
    sets_of,
)
from tests.fakes.workout_repository import FakeWorkoutRepository

__all__ = [
    "FakeWorkoutRepository",
    # Builders
    "linear_exercise",
    "reps_per_set_exercise",
    "minimal_sets_exercise",
    "completed_sets",
    "performance_for",
    "sets_of",
]
