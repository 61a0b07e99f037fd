from __future__ import annotations

from typing import Any, Optional

from perimeter.engine.types import is_sequence, is_string
from perimeter.rules.base import BaseConstraint
from perimeter.rules.registry import register_constraint


class _LengthConstraint(BaseConstraint):
    """Shared plumbing for min_length / max_length (strings and lists)."""

    def _coerce_param(self, param: Any) -> int:
        return self._require_non_negative_int(param)

    def applies(self, value: Any) -> bool:
        return is_string(value) or is_sequence(value)


@register_constraint("min_length")
class MinLengthConstraint(_LengthConstraint):
    def check(self, value: Any) -> Optional[str]:
        if len(value) >= self.param:
            return None
        if is_string(value):
            return f"must be at least {self.param} characters (minimum length)"
        return f"must have at least {self.param} items (minimum length)"


@register_constraint("max_length")
class MaxLengthConstraint(_LengthConstraint):
    def check(self, value: Any) -> Optional[str]:
        if len(value) <= self.param:
            return None
        if is_string(value):
            return f"must be at most {self.param} characters (maximum length)"
        return f"must have at most {self.param} items (maximum length)"
