# src/perimeter/api/fields.py
"""
Field helper functions for declaring contracts in code.

Usage:
    from perimeter import fields as f

    registry.define(
        "create_user",
        f.required("email", "string", format=r"@"),
        f.required("password", "string", min_length=12),
        f.optional("profile", "map", fields=[
            f.optional("age", "integer", min=18),
        ]),
        f.optional("tags", f.list_of("string")),
    )

Constraint keyword arguments:
    format       regex (str or compiled) a string must match
    min_length   minimum length of a string or list
    max_length   maximum length of a string or list
    min / max    inclusive numeric bounds
    in_          allowed values (``in`` is a Python keyword; a mapping with
                 an "in" key may also be passed via ``constraints=``)
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Union

from perimeter.contract.model import Contract, FieldSpec, make_field
from perimeter.contract.types import FieldType, ListOf, TypeSpec

TypeLike = Union[str, TypeSpec]


def _collect_constraints(
    constraints: Optional[Mapping[str, Any]],
    kwargs: Dict[str, Any],
) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(constraints or {})
    for key, value in kwargs.items():
        # trailing underscore escapes keywords: in_ -> in
        merged[key.rstrip("_")] = value
    return merged


def required(
    name: str,
    type: TypeLike,
    *,
    fields: Optional[Iterable[FieldSpec]] = None,
    constraints: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> FieldSpec:
    """
    Field that must be present in the record.

    Args:
        name: Field name
        type: "string", "integer", "float", "boolean", "symbol", "map",
            "list", a FieldType member, or list_of(...)
        fields: Nested field specs (map fields only)
        constraints: Constraint mapping (alternative to keyword arguments)
        **kwargs: Constraints, e.g. ``min_length=12``

    Returns:
        FieldSpec for use in a contract
    """
    return make_field(name, type, True, fields, _collect_constraints(constraints, kwargs))


def optional(
    name: str,
    type: TypeLike,
    *,
    fields: Optional[Iterable[FieldSpec]] = None,
    constraints: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> FieldSpec:
    """
    Field that may be absent. Absent optional fields are skipped entirely;
    no default is injected.

    Args and Returns: see required().
    """
    return make_field(name, type, False, fields, _collect_constraints(constraints, kwargs))


def list_of(item_type: TypeLike) -> ListOf:
    """List type whose every element must be ``item_type``."""
    return ListOf(item_type)


def contract(name: str, *fields: FieldSpec) -> Contract:
    """Build a Contract from field specs in declaration order."""
    return Contract(name=name, fields=tuple(fields))


# Re-exported for `f.FieldType.STRING` style declarations
__all__ = ["required", "optional", "list_of", "contract", "FieldType", "ListOf"]
