"""
Unit tests for RepsPerSetProgression.

Tests for:
- Planned sets (set count x rep range target, never AMRAP)
- Success / failure / maintained rules and the unilateral cap
- Equipment-dependent weight increments
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from domain.exceptions import InvariantViolationError
from domain.models import (
    EquipmentType,
    ExercisePerformance,
    PerformanceEvaluation,
    RepRange,
    RepsPerSetProgression,
    Weight,
    weight_increment,
)
from tests.fakes import sets_of


def _progression(
    current_set_count: int = 2,
    weight: Weight = None,
    equipment: EquipmentType = EquipmentType.CABLE,
    starting_sets: int = 2,
    target_sets: int = 4,
    is_unilateral: bool = False,
) -> RepsPerSetProgression:
    return RepsPerSetProgression(
        rep_range=RepRange.create(8, 10, 12),
        current_weight=weight or Weight.kilograms(20),
        equipment=equipment,
        starting_sets=starting_sets,
        target_sets=target_sets,
        current_set_count=current_set_count,
        is_unilateral=is_unilateral,
    )


def _performance(progression: RepsPerSetProgression, reps) -> ExercisePerformance:
    return ExercisePerformance(
        exercise_id="row",
        planned_sets=progression.calculate_planned_sets(1, 1),
        completed_sets=sets_of(reps, weight=progression.current_weight.amount),
    )


# =============================================================================
# Construction and Planned Sets
# =============================================================================


@pytest.mark.unit
class TestRepsPerSetSetup:
    """Tests for construction and planned sets."""

    def test_create_starts_at_starting_sets(self):
        progression = RepsPerSetProgression.create(
            rep_range=RepRange.create(8, 10, 12),
            starting_weight=Weight.kilograms(20),
            equipment=EquipmentType.CABLE,
            starting_sets=3,
            target_sets=5,
        )
        assert progression.current_set_count == 3

    def test_current_set_count_defaults_to_starting_sets(self):
        progression = RepsPerSetProgression(
            rep_range=RepRange.create(8, 10, 12),
            current_weight=Weight.kilograms(20),
            equipment=EquipmentType.CABLE,
            starting_sets=3,
        )
        assert progression.current_set_count == 3

    def test_target_below_starting_rejected(self):
        with pytest.raises(ValidationError):
            _progression(starting_sets=4, target_sets=3, current_set_count=4)

    @pytest.mark.parametrize("starting_sets", [0, 11])
    def test_starting_sets_bounds(self, starting_sets):
        with pytest.raises(ValidationError):
            _progression(starting_sets=starting_sets, target_sets=10, current_set_count=1)

    def test_planned_sets(self):
        planned = _progression(current_set_count=3).calculate_planned_sets(5, 1)
        assert len(planned) == 3
        assert all(p.target_reps == 10 for p in planned)
        assert all(p.weight == Weight.kilograms(20) for p in planned)
        assert not any(p.is_amrap for p in planned)

    def test_planned_sets_ignore_week(self):
        progression = _progression(current_set_count=3)
        assert progression.calculate_planned_sets(1, 1) == progression.calculate_planned_sets(20, 3)

    def test_max_sets(self):
        assert _progression().max_sets == 5
        assert _progression(is_unilateral=True).max_sets == 3
        assert _progression(target_sets=4).effective_max_sets == 4
        assert _progression(target_sets=8).effective_max_sets == 5


# =============================================================================
# Evaluation
# =============================================================================


@pytest.mark.unit
class TestRepsPerSetEvaluation:
    """Tests for the success / failed / maintained rules."""

    def test_evaluate(self):
        progression = _progression(current_set_count=2)
        assert progression.evaluate(_performance(progression, [12, 12])) == PerformanceEvaluation.SUCCESS
        assert progression.evaluate(_performance(progression, [12, 7])) == PerformanceEvaluation.FAILED
        assert progression.evaluate(_performance(progression, [12, 10])) == PerformanceEvaluation.MAINTAINED

    def test_success_adds_a_set(self):
        progression = _progression(current_set_count=2)
        progression.apply_performance(_performance(progression, [12, 13]))
        assert progression.current_set_count == 3
        assert progression.current_weight == Weight.kilograms(20)

    def test_success_at_target_adds_weight_and_resets_sets(self):
        progression = _progression(current_set_count=4, target_sets=4)
        progression.apply_performance(_performance(progression, [12, 12, 12, 12]))
        assert progression.current_set_count == 2
        assert progression.current_weight.amount == Decimal("22.5")

    def test_bilateral_caps_at_five_sets(self):
        progression = _progression(current_set_count=5, target_sets=8)
        progression.apply_performance(_performance(progression, [12] * 5))
        assert progression.current_set_count == 2
        assert progression.current_weight.amount == Decimal("22.5")

    def test_unilateral_caps_at_three_sets(self):
        progression = _progression(current_set_count=3, target_sets=4, is_unilateral=True)
        progression.apply_performance(_performance(progression, [12, 12, 12]))
        assert progression.current_set_count == 2
        assert progression.current_weight.amount == Decimal("22.5")

    def test_failure_removes_a_set(self):
        progression = _progression(current_set_count=3)
        progression.apply_performance(_performance(progression, [10, 9, 6]))
        assert progression.current_set_count == 2
        assert progression.current_weight == Weight.kilograms(20)

    def test_failure_at_one_set_reduces_weight(self):
        progression = _progression(current_set_count=1, starting_sets=1)
        progression.apply_performance(_performance(progression, [5]))
        assert progression.current_set_count == 1
        assert progression.current_weight.amount == Decimal("17.5")

    def test_failure_never_goes_below_zero(self):
        progression = _progression(
            current_set_count=1, starting_sets=1, weight=Weight.kilograms(2)
        )
        progression.apply_performance(_performance(progression, [5]))
        assert progression.current_set_count == 1
        assert progression.current_weight.amount == Decimal("2")

    def test_failure_can_reach_exactly_zero(self):
        progression = _progression(
            current_set_count=1, starting_sets=1, weight=Weight.kilograms("2.5")
        )
        progression.apply_performance(_performance(progression, [5]))
        assert progression.current_weight.amount == Decimal("0")

    def test_maintained_changes_nothing(self):
        progression = _progression(current_set_count=3)
        before = progression.model_copy(deep=True)
        progression.apply_performance(_performance(progression, [10, 11, 12]))
        assert progression == before

    def test_extra_completed_sets_are_evaluated(self):
        progression = _progression(current_set_count=2)
        progression.apply_performance(_performance(progression, [12, 12, 7]))
        assert progression.current_set_count == 1


# =============================================================================
# Increments and Updates
# =============================================================================


@pytest.mark.unit
class TestWeightIncrements:
    """Tests for equipment-dependent increments."""

    @pytest.mark.parametrize(
        "equipment,weight,expected",
        [
            (EquipmentType.BARBELL, Weight.kilograms(40), "2.5"),
            (EquipmentType.CABLE, Weight.kilograms(40), "2.5"),
            (EquipmentType.MACHINE, Weight.pounds(90), "5"),
            (EquipmentType.DUMBBELL, Weight.kilograms(8), "1"),
            (EquipmentType.DUMBBELL, Weight.kilograms(10), "2"),
            (EquipmentType.DUMBBELL, Weight.pounds(25), "2"),
            (EquipmentType.BODYWEIGHT, Weight.kilograms(0), "0"),
        ],
    )
    def test_increment(self, equipment, weight, expected):
        increment = weight_increment(equipment, weight)
        assert increment.amount == Decimal(expected)
        assert increment.unit == weight.unit

    def test_dumbbell_progression(self):
        progression = _progression(
            current_set_count=4, equipment=EquipmentType.DUMBBELL, weight=Weight.kilograms(8)
        )
        progression.apply_performance(_performance(progression, [12] * 4))
        assert progression.current_weight.amount == Decimal("9")

    def test_bodyweight_never_changes_weight(self):
        progression = _progression(
            current_set_count=4, equipment=EquipmentType.BODYWEIGHT, weight=Weight.kilograms(0)
        )
        progression.apply_performance(_performance(progression, [12] * 4))
        assert progression.current_weight.amount == Decimal("0")
        assert progression.current_set_count == 2


@pytest.mark.unit
class TestRepsPerSetUpdates:
    """Tests for user updates and the summary."""

    def test_update_weight(self):
        progression = _progression()
        progression.update_weight(Weight.kilograms(25))
        assert progression.current_weight.amount == Decimal("25")

    def test_update_weight_unit_mismatch(self):
        with pytest.raises(InvariantViolationError):
            _progression().update_weight(Weight.pounds(50))

    def test_update_rep_range(self):
        progression = _progression()
        progression.update_rep_range(RepRange.create(10, 12, 15))
        assert str(progression.rep_range) == "10-12-15"

    def test_summarize(self):
        summary = _progression(current_set_count=3).summarize()
        assert summary.type == "Reps Per Set"
        assert summary.details == {
            "Rep Range": "8-10-12",
            "Current Sets": "3/4",
            "Current Weight": "20kg",
            "Equipment": "cable",
        }

    def test_summarize_unilateral(self):
        summary = _progression(is_unilateral=True).summarize()
        assert summary.details["Current Sets"] == "2/3"
        assert summary.details["Type"] == "Unilateral (per side)"
