# src/perimeter/engine/types.py
"""
Runtime type checks for declared field types.

Checks are exact: a bool is not an integer, an int is not a float, and a str
is not a list.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from perimeter.contract.types import FieldType, ListOf, TypeSpec


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_float(value: Any) -> bool:
    return isinstance(value, float)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_symbol(value: Any) -> bool:
    return isinstance(value, Enum)


def is_record(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_number(value: Any) -> bool:
    return is_integer(value) or is_float(value)


_CHECKS = {
    FieldType.STRING: is_string,
    FieldType.INTEGER: is_integer,
    FieldType.FLOAT: is_float,
    FieldType.BOOLEAN: is_boolean,
    FieldType.SYMBOL: is_symbol,
    FieldType.MAP: is_record,
    FieldType.LIST: is_sequence,
}


def check_type(type_spec: TypeSpec, value: Any) -> bool:
    """
    Shallow type check.

    For ``ListOf`` only the container is checked here; element checks are the
    validator's job.
    """
    if isinstance(type_spec, ListOf):
        return is_sequence(value)
    return _CHECKS[type_spec](value)


def value_type_name(value: Any) -> str:
    """Name of a runtime value's type in contract vocabulary."""
    # bool first: it is also an int
    if is_boolean(value):
        return FieldType.BOOLEAN.value
    if is_string(value):
        return FieldType.STRING.value
    if is_integer(value):
        return FieldType.INTEGER.value
    if is_float(value):
        return FieldType.FLOAT.value
    if is_symbol(value):
        return FieldType.SYMBOL.value
    if is_record(value):
        return FieldType.MAP.value
    if is_sequence(value):
        return FieldType.LIST.value
    if value is None:
        return "null"
    return type(value).__name__
