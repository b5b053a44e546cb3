"""
Workout Repository Interface (Port).

This module defines the abstract interface for workout program persistence.
Implementations may use a relational database, a document store, or
in-memory storage. The domain itself never performs I/O.

Repositories load the whole aggregate (the Workout with its exercises and
completed days) and save it back atomically.
"""
from typing import List, Optional, Protocol

from domain.models import Workout


class WorkoutRepository(Protocol):
    """
    Abstract interface for workout persistence operations.

    This protocol defines the contract for workout storage and retrieval.
    Implementations must provide all methods defined here.

    Stored workouts are turned back into aggregates with
    ``Workout.rehydrate``, never with ``Workout.create``.
    """

    def get(
        self,
        workout_id: str,
        user_id: str,
    ) -> Optional[Workout]:
        """
        Get a single workout by ID.

        Args:
            workout_id: Workout UUID
            user_id: Owner of the workout (for authorization)

        Returns:
            Workout aggregate or None if not found/unauthorized
        """
        ...

    def save(self, workout: Workout) -> Workout:
        """
        Insert or replace a workout aggregate.

        Args:
            workout: Aggregate to persist, including exercises and history

        Returns:
            The saved workout
        """
        ...

    def list_for_user(
        self,
        user_id: str,
    ) -> List[Workout]:
        """
        Get every workout owned by a user.

        Args:
            user_id: Owner of the workouts

        Returns:
            List of workouts, oldest first
        """
        ...
