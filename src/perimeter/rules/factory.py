# src/perimeter/rules/factory.py
from __future__ import annotations

from typing import Any, List, Mapping

from perimeter.errors import ContractDefinitionError
from perimeter.rules.base import BaseConstraint
from perimeter.rules.registry import constraint_names, get_constraint


def build_constraint(name: str, param: Any) -> BaseConstraint:
    """Instantiate one constraint, turning registry/parameter problems into declaration errors."""
    try:
        cls = get_constraint(name)
    except KeyError:
        known = ", ".join(constraint_names())
        raise ContractDefinitionError(f"Unknown constraint '{name}' (known: {known})") from None

    try:
        return cls(name, param)
    except (TypeError, ValueError) as e:
        raise ContractDefinitionError(f"Invalid constraint '{name}': {e}") from e


def build_constraints(constraints: Mapping[str, Any]) -> List[BaseConstraint]:
    """Instantiate every declared constraint, preserving declaration order."""
    return [build_constraint(name, param) for name, param in constraints.items()]
