"""
Weight and Training Max value objects.

Amounts are kept as ``Decimal`` so that gym increments (2.5kg, 5lb) and
percentage adjustments round exactly.
"""

from decimal import ROUND_HALF_EVEN, Decimal
from typing import Union

from pydantic import BaseModel, Field, field_validator

from domain.exceptions import InvariantViolationError, check_rule
from domain.models.enums import AdjustmentType, WeightUnit


# Conversion constant
KG_TO_LB = Decimal("2.20462")

# Smallest loadable jump on a barbell, per unit
KG_INCREMENT = Decimal("2.5")
LB_INCREMENT = Decimal("5")

Number = Union[int, float, str, Decimal]


def standard_increment(unit: WeightUnit) -> Decimal:
    """Return the standard plate increment for a unit (2.5kg or 5lb)."""
    return KG_INCREMENT if unit == WeightUnit.KILOGRAMS else LB_INCREMENT


def round_to_increment(amount: Decimal, increment: Decimal) -> Decimal:
    """
    Round ``amount`` to the nearest multiple of ``increment``.

    Exact midpoints round to the even multiple.

    Examples:
        >>> round_to_increment(Decimal("103"), Decimal("2.5"))
        Decimal('102.5')
    """
    steps = (amount / increment).quantize(Decimal("1"), rounding=ROUND_HALF_EVEN)
    return steps * increment


def _format_amount(amount: Decimal) -> str:
    return f"{amount.normalize():f}"


def _unit_suffix(unit: WeightUnit) -> str:
    return "kg" if unit == WeightUnit.KILOGRAMS else "lbs"


class Weight(BaseModel):
    """
    Value object representing a load with its unit.

    Arithmetic only works between weights of the same unit.

    Examples:
        >>> Weight.kilograms(20).add(Weight.kilograms("2.5"))
        Weight(amount=Decimal('22.5'), unit=<WeightUnit.KILOGRAMS: 'kg'>)
    """

    amount: Decimal = Field(..., description="Weight amount, never negative")
    unit: WeightUnit = Field(..., description="Unit of measurement")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        """Ensure the amount is not negative."""
        if v < 0:
            raise ValueError("Weight cannot be negative")
        return v

    @classmethod
    def kilograms(cls, amount: Number) -> "Weight":
        return cls(amount=Decimal(str(amount)), unit=WeightUnit.KILOGRAMS)

    @classmethod
    def pounds(cls, amount: Number) -> "Weight":
        return cls(amount=Decimal(str(amount)), unit=WeightUnit.POUNDS)

    def add(self, other: "Weight") -> "Weight":
        """Return the sum of two weights of the same unit."""
        check_rule(self.unit == other.unit, "Cannot add weights with different units")
        return Weight(amount=self.amount + other.amount, unit=self.unit)

    def subtract(self, other: "Weight") -> "Weight":
        """Return the difference of two weights of the same unit."""
        check_rule(
            self.unit == other.unit, "Cannot subtract weights with different units"
        )
        result = self.amount - other.amount
        check_rule(result >= 0, "Resulting weight cannot be negative")
        return Weight(amount=result, unit=self.unit)

    def round_to_increment(self, increment: Number) -> "Weight":
        """Return this weight rounded to the nearest ``increment``."""
        step = Decimal(str(increment))
        check_rule(step > 0, "Increment must be greater than zero")
        return Weight(amount=round_to_increment(self.amount, step), unit=self.unit)

    def convert_to(self, unit: WeightUnit) -> "Weight":
        """Return this weight expressed in ``unit``."""
        if unit == self.unit:
            return self
        if unit == WeightUnit.KILOGRAMS:
            return Weight(amount=self.amount / KG_TO_LB, unit=unit)
        return Weight(amount=self.amount * KG_TO_LB, unit=unit)

    def __str__(self) -> str:
        return f"{_format_amount(self.amount)}{_unit_suffix(self.unit)}"

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {"amount": "20", "unit": "kg"},
                {"amount": "45", "unit": "lb"},
            ]
        },
    }


class TrainingMaxAdjustment(BaseModel):
    """
    An adjustment to apply to a Training Max.

    Percentage amounts are fractions: ``0.03`` means +3%.
    """

    type: AdjustmentType = AdjustmentType.NONE
    amount: Decimal = Decimal("0")

    @classmethod
    def none(cls) -> "TrainingMaxAdjustment":
        return cls(type=AdjustmentType.NONE, amount=Decimal("0"))

    @classmethod
    def percentage(cls, fraction: Number) -> "TrainingMaxAdjustment":
        return cls(type=AdjustmentType.PERCENTAGE, amount=Decimal(str(fraction)))

    @classmethod
    def absolute(cls, amount: Number) -> "TrainingMaxAdjustment":
        return cls(type=AdjustmentType.ABSOLUTE, amount=Decimal(str(amount)))

    def __str__(self) -> str:
        if self.type == AdjustmentType.PERCENTAGE:
            return f"{self.amount * 100:+.1f}%"
        if self.type == AdjustmentType.ABSOLUTE:
            sign = "+" if self.amount >= 0 else ""
            return f"{sign}{_format_amount(self.amount)}"
        return "No adjustment"

    model_config = {"frozen": True}


class TrainingMax(BaseModel):
    """
    Estimated near-max load that linear progression scales each week.

    Working weights and adjusted values are always rounded to the nearest
    loadable increment (2.5kg / 5lb).

    Examples:
        >>> tm = TrainingMax.create(100, WeightUnit.KILOGRAMS)
        >>> str(tm.calculate_working_weight(Decimal("0.75")))
        '75kg'
    """

    amount: Decimal = Field(..., description="Training max amount")
    unit: WeightUnit = Field(..., description="Unit of measurement")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        """Ensure the training max is positive."""
        if v <= 0:
            raise ValueError("Training Max must be greater than zero")
        return v

    @classmethod
    def create(cls, amount: Number, unit: WeightUnit) -> "TrainingMax":
        return cls(amount=Decimal(str(amount)), unit=unit)

    @property
    def increment(self) -> Decimal:
        return standard_increment(self.unit)

    def as_weight(self) -> Weight:
        return Weight(amount=self.amount, unit=self.unit)

    def calculate_working_weight(self, intensity_fraction: Number) -> Weight:
        """
        Calculate the working weight for an intensity (0.75 for 75%).

        Args:
            intensity_fraction: Fraction of the training max, 0 < f <= 1.5

        Returns:
            Weight rounded to the nearest 2.5kg/5lb.
        """
        fraction = Decimal(str(intensity_fraction))
        check_rule(
            Decimal("0") < fraction <= Decimal("1.5"),
            "Intensity percentage must be between 0 and 1.5 (0-150%)",
        )
        rounded = round_to_increment(self.amount * fraction, self.increment)
        return Weight(amount=rounded, unit=self.unit)

    def apply_adjustment(self, adjustment: TrainingMaxAdjustment) -> "TrainingMax":
        """
        Return a new Training Max with ``adjustment`` applied and re-rounded.

        Raises:
            InvariantViolationError: If the adjusted value is not positive.
        """
        if adjustment.type == AdjustmentType.PERCENTAGE:
            new_amount = self.amount * (1 + adjustment.amount)
        elif adjustment.type == AdjustmentType.ABSOLUTE:
            new_amount = self.amount + adjustment.amount
        elif adjustment.type == AdjustmentType.NONE:
            new_amount = self.amount
        else:
            raise InvariantViolationError(f"Unknown adjustment type: {adjustment.type}")

        new_amount = round_to_increment(new_amount, self.increment)
        check_rule(new_amount > 0, "Adjusted Training Max must be greater than zero")
        return TrainingMax(amount=new_amount, unit=self.unit)

    def __str__(self) -> str:
        return f"{_format_amount(self.amount)}{_unit_suffix(self.unit)} TM"

    model_config = {"frozen": True}
