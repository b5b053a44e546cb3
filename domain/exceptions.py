"""
Domain exceptions for the progression engine.

Every failure raised by the domain layer is a caller-correctable usage error.
The aggregate is left unchanged whenever one of these is raised.

- InvariantViolationError: a value or combination of values breaks a rule
  (empty name, wrong progression type, unit mismatch, missing AMRAP set...)
- ExerciseNotFoundError: an exercise id is not part of the workout, or a
  performance targets an exercise that is not trained on the given day
- WorkoutStateError: the operation is not allowed in the current status
"""

from typing import Optional


class DomainError(Exception):
    """Base class for all domain rule violations."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvariantViolationError(DomainError, ValueError):
    """Raised when an operation would break a domain invariant."""

    pass


class ExerciseNotFoundError(DomainError, LookupError):
    """Raised when a referenced exercise does not exist where it is expected."""

    def __init__(self, message: str, exercise_id: Optional[str] = None):
        super().__init__(message)
        self.exercise_id = exercise_id


class WorkoutStateError(DomainError):
    """Raised when an operation is not valid for the workout's current status."""

    pass


def check_rule(condition: bool, message: str) -> None:
    """Raise InvariantViolationError with ``message`` unless ``condition`` holds."""
    if not condition:
        raise InvariantViolationError(message)
