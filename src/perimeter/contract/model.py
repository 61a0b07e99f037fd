# src/perimeter/contract/model.py
"""
Immutable contract data model.

A Contract is a named, ordered tuple of FieldSpec. Both are frozen
dataclasses built once at declaration time; the validator traverses them
without re-parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple, Union

from perimeter.contract.types import FieldType, ListOf, TypeSpec, parse_type
from perimeter.errors import ContractDefinitionError
from perimeter.rules.base import BaseConstraint
from perimeter.rules.factory import build_constraints


def _check_unique_names(fields: Tuple["FieldSpec", ...], owner: str) -> None:
    seen = set()
    for spec in fields:
        if spec.name in seen:
            raise ContractDefinitionError(f"Duplicate field '{spec.name}' in {owner}")
        seen.add(spec.name)


@dataclass(frozen=True)
class FieldSpec:
    """
    One named member of a contract.

    Attributes:
        name: Key looked up in the validated record
        type: FieldType member or ListOf
        required: Missing required fields are reported as "is required"
        constraints: Read-only mapping of constraint name -> parameter
        fields: Nested child specs (map fields only)
    """

    name: str
    type: TypeSpec
    required: bool = False
    # MappingProxyType is unhashable
    constraints: Mapping[str, Any] = field(default_factory=dict, hash=False)
    fields: Optional[Tuple["FieldSpec", ...]] = None
    rules: Tuple[BaseConstraint, ...] = field(
        default=(), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ContractDefinitionError(f"Field name must be a non-empty string, got {self.name!r}")

        try:
            type_spec = parse_type(self.type)
        except ValueError as e:
            raise ContractDefinitionError(f"Field '{self.name}': {e}") from None
        object.__setattr__(self, "type", type_spec)

        if self.fields is not None:
            if type_spec is not FieldType.MAP:
                raise ContractDefinitionError(
                    f"Field '{self.name}': nested fields are only allowed on map fields"
                )
            nested = tuple(self.fields)
            for child in nested:
                if not isinstance(child, FieldSpec):
                    raise ContractDefinitionError(
                        f"Field '{self.name}': nested fields must be FieldSpec, got {child!r}"
                    )
            _check_unique_names(nested, f"field '{self.name}'")
            object.__setattr__(self, "fields", nested)

        try:
            rules = tuple(build_constraints(self.constraints))
        except ContractDefinitionError as e:
            raise ContractDefinitionError(f"Field '{self.name}': {e}") from None
        object.__setattr__(self, "rules", rules)
        # Store normalized params (e.g. compiled regex) behind a read-only view
        object.__setattr__(
            self, "constraints", MappingProxyType({r.name: r.param for r in rules})
        )

    @property
    def is_list_of(self) -> bool:
        return isinstance(self.type, ListOf)

    @property
    def has_nested(self) -> bool:
        return self.fields is not None


@dataclass(frozen=True)
class Contract:
    """A named, ordered collection of FieldSpec."""

    name: str
    fields: Tuple[FieldSpec, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ContractDefinitionError(f"Contract name must be a non-empty string, got {self.name!r}")
        fields = tuple(self.fields)
        for spec in fields:
            if not isinstance(spec, FieldSpec):
                raise ContractDefinitionError(
                    f"Contract '{self.name}': fields must be FieldSpec, got {spec!r}"
                )
        _check_unique_names(fields, f"contract '{self.name}'")
        object.__setattr__(self, "fields", fields)

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def field(self, name: str) -> Optional[FieldSpec]:
        """Return the top-level field called ``name``, or None."""
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)


def make_field(
    name: str,
    type: Union[str, TypeSpec],
    required: bool,
    fields: Optional[Iterable[FieldSpec]] = None,
    constraints: Optional[Mapping[str, Any]] = None,
) -> FieldSpec:
    return FieldSpec(
        name=name,
        type=type,
        required=required,
        constraints=dict(constraints or {}),
        fields=tuple(fields) if fields is not None else None,
    )
