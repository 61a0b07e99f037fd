from __future__ import annotations

from typing import Any, Optional, Union

from perimeter.engine.types import is_number
from perimeter.rules.base import BaseConstraint
from perimeter.rules.registry import register_constraint

Number = Union[int, float]


class _BoundConstraint(BaseConstraint):
    def _coerce_param(self, param: Any) -> Number:
        if not is_number(param):
            raise ValueError(f"{self.name} must be a number, got {param!r}")
        return param

    def applies(self, value: Any) -> bool:
        return is_number(value)


@register_constraint("min")
class MinConstraint(_BoundConstraint):
    """Numeric value must be >= param (inclusive)."""

    def check(self, value: Number) -> Optional[str]:
        if value >= self.param:
            return None
        return f"must be >= {self.param} (minimum value)"


@register_constraint("max")
class MaxConstraint(_BoundConstraint):
    """Numeric value must be <= param (inclusive)."""

    def check(self, value: Number) -> Optional[str]:
        if value <= self.param:
            return None
        return f"must be <= {self.param} (maximum value)"
