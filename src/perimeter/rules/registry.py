# src/perimeter/rules/registry.py
from __future__ import annotations

from typing import Dict, List, Type

from perimeter.rules.base import BaseConstraint

# Registry: constraint name -> class
_CONSTRAINTS: Dict[str, Type[BaseConstraint]] = {}


def register_constraint(name: str):
    """Decorator registering a BaseConstraint subclass under a stable name."""
    def deco(cls: Type[BaseConstraint]) -> Type[BaseConstraint]:
        _CONSTRAINTS[name] = cls
        cls.constraint_name = name
        return cls
    return deco


def get_constraint(name: str) -> Type[BaseConstraint]:
    """Look up a constraint class. Raises KeyError for unknown names."""
    _ensure_builtins()
    return _CONSTRAINTS[name]


def constraint_names() -> List[str]:
    _ensure_builtins()
    return sorted(_CONSTRAINTS)


def _ensure_builtins() -> None:
    # Importing the package runs the @register_constraint decorators.
    import perimeter.rules.builtin  # noqa: F401
