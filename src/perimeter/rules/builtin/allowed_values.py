from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Tuple

from perimeter.rules.base import BaseConstraint
from perimeter.rules.registry import register_constraint


def _display(value: Any) -> str:
    if isinstance(value, Enum):
        return f"{type(value).__name__}.{value.name}"
    return repr(value)


@register_constraint("in")
class AllowedValuesConstraint(BaseConstraint):
    """
    Value must be one of an explicit set of allowed values. Applies to every type.

    param: list, tuple, set or frozenset of allowed values. Sets are
    rendered in sorted order when possible so messages stay deterministic.
    """

    def _coerce_param(self, param: Any) -> Tuple[Any, ...]:
        if isinstance(param, (set, frozenset)):
            try:
                return tuple(sorted(param))
            except TypeError:
                return tuple(sorted(param, key=repr))
        if not isinstance(param, (list, tuple)):
            raise ValueError(f"'in' must be a list of allowed values, got {param!r}")
        return tuple(param)

    def check(self, value: Any) -> Optional[str]:
        if self._contains(value):
            return None
        allowed = ", ".join(_display(v) for v in self.param)
        return f"must be one of: {allowed}"

    def _contains(self, value: Any) -> bool:
        # 1 == True in Python; keep bools and numbers apart
        for allowed in self.param:
            if isinstance(allowed, bool) != isinstance(value, bool):
                continue
            if allowed == value:
                return True
        return False
