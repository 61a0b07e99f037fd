# src/perimeter/rules/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional


class BaseConstraint(ABC):
    """
    Abstract base class for all field constraints.

    A constraint is built once at declaration time from ``(name, param)`` and
    then checked against any number of values. ``param`` is normalized by
    ``_coerce_param`` so malformed declarations fail early.
    """

    name: str
    param: Any

    def __init__(self, name: str, param: Any):
        self.name = name
        self.param = self._coerce_param(param)

    def __str__(self) -> str:
        return f"{self.name}({self.param!r})"

    def __repr__(self) -> str:
        return str(self)

    def _coerce_param(self, param: Any) -> Any:
        """Validate and normalize the declared parameter. Default: as-is."""
        return param

    def applies(self, value: Any) -> bool:
        """Whether this constraint has anything to say about ``value``'s kind."""
        return True

    @abstractmethod
    def check(self, value: Any) -> Optional[str]:
        """Return an error message when ``value`` violates the constraint, else None."""
        ...

    def _require_non_negative_int(self, param: Any) -> int:
        if isinstance(param, bool) or not isinstance(param, int) or param < 0:
            raise ValueError(
                f"Constraint '{self.name}' must be a non-negative integer, got {param!r}"
            )
        return param
