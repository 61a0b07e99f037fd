# src/perimeter/contract/types.py
"""
Field type vocabulary for contracts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from perimeter.errors import ContractDefinitionError


class FieldType(str, Enum):
    """
    Scalar and container types a field can declare.

    Each member maps to a family of Python runtime values (see
    perimeter.engine.types for the exact checks).
    """

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    SYMBOL = "symbol"
    MAP = "map"
    LIST = "list"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, value: str) -> "FieldType":
        """Parse a type name, accepting a few common aliases."""
        key = (value or "").strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown field type '{value}'") from None


_ALIASES = {
    "str": "string",
    "text": "string",
    "int": "integer",
    "double": "float",
    "bool": "boolean",
    "atom": "symbol",
    "enum": "symbol",
    "dict": "map",
    "mapping": "map",
    "object": "map",
    "array": "list",
    "sequence": "list",
}


@dataclass(frozen=True)
class ListOf:
    """A list whose every element must have ``item_type``."""

    item_type: "TypeSpec"

    def __post_init__(self) -> None:
        try:
            item_type = parse_type(self.item_type)
        except ValueError as e:
            raise ContractDefinitionError(f"Invalid list item type: {e}") from None
        object.__setattr__(self, "item_type", item_type)

    def __str__(self) -> str:
        return f"list of {type_name(self.item_type)}"


TypeSpec = Union[FieldType, ListOf]


def type_name(type_spec: TypeSpec) -> str:
    """Human-readable name used in violation messages."""
    if isinstance(type_spec, ListOf):
        return str(type_spec)
    return type_spec.value


def parse_type(value: Union[str, TypeSpec]) -> TypeSpec:
    """
    Normalize a declared type into a TypeSpec.

    Accepts FieldType members, ListOf instances, plain names ("string") and
    the shorthand "list_of(string)" / "list[string]".
    """
    if isinstance(value, (FieldType, ListOf)):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Field type must be a string, FieldType or ListOf, got {value!r}")

    text = value.strip()
    lowered = text.lower()
    for prefix, suffix in (("list_of(", ")"), ("list[", "]")):
        if lowered.startswith(prefix) and lowered.endswith(suffix):
            inner = text[len(prefix):-len(suffix)]
            return ListOf(parse_type(inner))
    return FieldType.from_str(text)
