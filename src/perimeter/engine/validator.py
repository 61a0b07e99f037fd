# src/perimeter/engine/validator.py
"""
Validation engine: recursive and accumulating, with deterministic output.

Flow
----
  1) Resolve the contract by name (missing → "_contract" violation)
  2) Require a record at the root (otherwise → "_root" violation)
  3) Walk declared fields in order:
       presence → type → constraints → nested map / list items
  4) Return the original value untouched, or every violation found

Principles
----------
- Complete: sibling fields are always checked; nothing short-circuits
- Ordered: declaration order, depth-first, nested violations contiguous
- Permissive on unknowns: undeclared keys are never reported or touched
- Pure: no shared mutable state, safe to call from any number of threads
"""

from __future__ import annotations

from typing import Any, List, Mapping, Sequence, Tuple

from perimeter.api.results import CONTRACT_FIELD, ROOT_FIELD, ValidationResult, Violation
from perimeter.contract.model import Contract, FieldSpec
from perimeter.contract.registry import ContractRegistry
from perimeter.contract.types import type_name
from perimeter.engine.types import check_type, is_record, value_type_name
from perimeter.logging import get_logger

_logger = get_logger(__name__)

Path = Tuple[str, ...]

LIST_ITEM_ERROR = "invalid list item"


# --------------------------------- Public ----------------------------------- #

def validate(registry: ContractRegistry, contract_name: str, value: Any) -> ValidationResult:
    """
    Validate ``value`` against the contract registered as ``contract_name``.

    Returns:
        ValidationResult. On success ``result.value is value``.

    Example:
        result = validate(registry, "create_user", {"email": "a@b.com"})
        if not result.passed:
            for v in result.violations:
                print(v.location, v.error)
    """
    contract = registry.get(contract_name)
    if contract is None:
        return ValidationResult.failed(
            value,
            [Violation(CONTRACT_FIELD, f"contract {contract_name} not found")],
            contract=contract_name,
        )
    return validate_contract(contract, value)


def validate_contract(contract: Contract, value: Any) -> ValidationResult:
    """Validate ``value`` against a Contract object directly."""
    if not is_record(value):
        return ValidationResult.failed(
            value,
            [Violation(ROOT_FIELD, f"expected map, got {value!r}")],
            contract=contract.name,
        )

    violations = validate_fields(contract.fields, value)
    if violations:
        _logger.debug(
            "Contract '%s' failed with %d violation(s)", contract.name, len(violations)
        )
        return ValidationResult.failed(value, violations, contract=contract.name)
    return ValidationResult.ok(value, contract=contract.name)


def validate_fields(
    fields: Sequence[FieldSpec],
    value: Mapping[str, Any],
    path: Path = (),
) -> List[Violation]:
    """
    Check a record against a field list and return every violation found.

    Used for the top-level record and, recursively, for every nested map.
    An empty list means this level passed.
    """
    violations: List[Violation] = []
    for spec in fields:
        violations.extend(_validate_field(spec, value, tuple(path)))
    return violations


# --------------------------------- Helpers ---------------------------------- #

def _validate_field(spec: FieldSpec, record: Mapping[str, Any], path: Path) -> List[Violation]:
    if spec.name not in record:
        if spec.required:
            return [Violation(spec.name, "is required", path)]
        return []

    item = record[spec.name]

    if not check_type(spec.type, item):
        error = f"expected {type_name(spec.type)}, got {value_type_name(item)}"
        return [Violation(spec.name, error, path)]

    violations = _check_constraints(spec, item, path)

    if spec.has_nested:
        violations.extend(validate_fields(spec.fields, item, path + (spec.name,)))
    elif spec.is_list_of:
        violations.extend(_check_items(spec, item, path))

    return violations


def _check_constraints(spec: FieldSpec, item: Any, path: Path) -> List[Violation]:
    violations: List[Violation] = []
    for rule in spec.rules:
        if not rule.applies(item):
            continue
        error = rule.check(item)
        if error is not None:
            violations.append(Violation(spec.name, error, path))
    return violations


def _check_items(spec: FieldSpec, items: Sequence[Any], path: Path) -> List[Violation]:
    # One violation per field, not per bad index; item checks are shallow.
    item_type = spec.type.item_type
    for element in items:
        if not check_type(item_type, element):
            return [Violation(spec.name, LIST_ITEM_ERROR, path)]
    return []
