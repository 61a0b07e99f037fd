# Import all builtin constraints to register them
from perimeter.rules.builtin.format import FormatConstraint
from perimeter.rules.builtin.length import MaxLengthConstraint, MinLengthConstraint
from perimeter.rules.builtin.range import MaxConstraint, MinConstraint
from perimeter.rules.builtin.allowed_values import AllowedValuesConstraint

__all__ = [
    "FormatConstraint",
    "MinLengthConstraint",
    "MaxLengthConstraint",
    "MinConstraint",
    "MaxConstraint",
    "AllowedValuesConstraint",
]
