"""
Repository Interfaces (Ports) for the progression engine.

This package defines abstract interfaces that decouple the use cases from
storage. Implementations live outside this package; tests use the in-memory
fakes in tests/fakes.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the use cases need)
- Adapters: Concrete implementations supplied by the host application

Usage:
    from application.ports import WorkoutRepository

    class ProgramService:
        def __init__(self, workout_repo: WorkoutRepository):
            self.workout_repo = workout_repo
"""

from application.ports.workout_repository import WorkoutRepository

__all__ = [
    "WorkoutRepository",
]
