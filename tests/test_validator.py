# tests/test_validator.py
"""Tests for the validation engine."""

import copy

import pytest

from perimeter import (
    ContractRegistry,
    ValidationResult,
    Violation,
    fields as f,
    validate,
    validate_contract,
    validate_fields,
)


def _errors(result):
    return [(v.field, v.error, v.path) for v in result.violations]


# =============================================================================
# Structural failures
# =============================================================================


class TestStructuralFailures:
    """Missing contracts and non-record roots."""

    def test_missing_contract(self, registry):
        result = validate(registry, "missing_contract", {})
        assert result.passed is False
        assert result.violations == [
            Violation("_contract", "contract missing_contract not found", ())
        ]

    def test_non_record_root(self, registry):
        result = validate(registry, "create_user", "not a record")
        assert result.passed is False
        assert len(result.violations) == 1
        v = result.violations[0]
        assert v.field == "_root"
        assert v.error == "expected map, got 'not a record'"
        assert v.path == ()

    @pytest.mark.parametrize("value", [None, 42, ["email"], ("a", "b")])
    def test_other_non_records(self, registry, value):
        result = validate(registry, "create_user", value)
        assert [v.field for v in result.violations] == ["_root"]
        assert result.violations[0].error == f"expected map, got {value!r}"

    def test_missing_contract_checked_before_root(self, registry):
        """An unknown contract is reported even if the value is not a record."""
        result = validate(registry, "nope", "x")
        assert [v.field for v in result.violations] == ["_contract"]


# =============================================================================
# Concrete scenarios
# =============================================================================


class TestScenarios:
    """End-to-end validation scenarios."""

    def test_valid_input_passes_unchanged(self, registry):
        value = {"email": "user@example.com", "password": "supersecret123"}
        result = validate(registry, "create_user", value)
        assert result.passed is True
        assert result.value is value
        assert result.value == {"email": "user@example.com", "password": "supersecret123"}
        assert result.violations == []

    def test_two_violations_in_declaration_order(self, registry):
        result = validate(registry, "create_user", {"email": "invalid", "password": "short"})
        assert result.passed is False
        assert _errors(result) == [
            ("email", "does not match format", ()),
            ("password", "must be at least 12 characters (minimum length)", ()),
        ]

    def test_nested_minimum_value(self, registry):
        result = validate(registry, "registration", {
            "email": "user@example.com",
            "password": "supersecret123",
            "profile": {"age": 17},
        })
        assert _errors(result) == [("age", "must be >= 18 (minimum value)", ("profile",))]

    def test_invalid_list_item(self, registry):
        result = validate(registry, "tagged", {"tags": ["a", 123, "c"]})
        assert _errors(result) == [("tags", "invalid list item", ())]

    def test_valid_list(self, registry):
        assert validate(registry, "tagged", {"tags": ["a", "b"]}).passed
        assert validate(registry, "tagged", {"tags": []}).passed


# =============================================================================
# Presence
# =============================================================================


class TestPresence:
    """Required and optional field handling."""

    def test_missing_required_field(self, registry):
        result = validate(registry, "create_user", {"email": "a@b.com"})
        assert _errors(result) == [("password", "is required", ())]

    def test_all_required_missing(self, registry):
        result = validate(registry, "create_user", {})
        assert _errors(result) == [
            ("email", "is required", ()),
            ("password", "is required", ()),
        ]

    def test_optional_absent_is_skipped(self, registry):
        value = {"email": "a@b.com", "password": "supersecret123"}
        assert validate(registry, "registration", value).passed

    def test_none_is_present_not_missing(self):
        """A key mapped to None is present and fails the type check."""
        reg = ContractRegistry(on_duplicate="error")
        reg.define("c", f.optional("name", "string"))
        result = validate(reg, "c", {"name": None})
        assert _errors(result) == [("name", "expected string, got null", ())]

    def test_missing_required_nested(self, registry):
        result = validate(registry, "search_params", {"query": "x", "sort": {"field": "name"}})
        assert _errors(result) == [("direction", "is required", ("sort",))]


# =============================================================================
# Type checks
# =============================================================================


class TestTypeChecks:
    """Exact runtime type matching."""

    @pytest.fixture
    def typed(self):
        reg = ContractRegistry(on_duplicate="error")
        reg.define(
            "typed",
            f.optional("s", "string"),
            f.optional("i", "integer"),
            f.optional("fl", "float"),
            f.optional("b", "boolean"),
            f.optional("sym", "symbol"),
            f.optional("m", "map"),
            f.optional("l", "list"),
        )
        return reg

    def test_all_types_accept_matching_values(self, typed, role):
        value = {
            "s": "x", "i": 1, "fl": 1.5, "b": False,
            "sym": role.ADMIN, "m": {"any": "thing"}, "l": [1, "two", None],
        }
        assert validate(typed, "typed", value).passed

    @pytest.mark.parametrize("key,value,expected", [
        ("s", 1, "expected string, got integer"),
        ("i", "1", "expected integer, got string"),
        ("i", True, "expected integer, got boolean"),
        ("i", 1.0, "expected integer, got float"),
        ("fl", 1, "expected float, got integer"),
        ("b", 0, "expected boolean, got integer"),
        ("sym", "admin", "expected symbol, got string"),
        ("m", [], "expected map, got list"),
        ("l", "abc", "expected list, got string"),
        ("l", {"a": 1}, "expected list, got map"),
    ])
    def test_mismatches(self, typed, key, value, expected):
        result = validate(typed, "typed", {key: value})
        assert _errors(result) == [(key, expected, ())]

    def test_tuple_counts_as_list(self, typed):
        assert validate(typed, "typed", {"l": (1, 2)}).passed

    def test_unknown_runtime_type_name(self, typed):
        result = validate(typed, "typed", {"s": object()})
        assert result.violations[0].error == "expected string, got object"

    def test_type_failure_skips_constraints(self):
        reg = ContractRegistry(on_duplicate="error")
        reg.define("c", f.required("age", "integer", min=18))
        result = validate(reg, "c", {"age": "17"})
        assert _errors(result) == [("age", "expected integer, got string", ())]

    def test_map_type_failure_skips_nested(self, registry):
        result = validate(registry, "registration", {
            "email": "a@b.com", "password": "supersecret123", "profile": "nope",
        })
        assert _errors(result) == [("profile", "expected map, got string", ())]


# =============================================================================
# Constraints
# =============================================================================


class TestConstraints:
    """Constraint checks and their messages."""

    @pytest.fixture
    def constrained(self, role):
        reg = ContractRegistry(on_duplicate="error")
        reg.define(
            "c",
            f.optional("username", "string", format=r"^[a-z]+$", min_length=3, max_length=5),
            f.optional("score", "float", min=0.5, max=9.5),
            f.optional("count", "integer", min=1, max=10),
            f.optional("status", "string", in_=["active", "inactive"]),
            f.optional("role", "symbol", in_=[role.ADMIN, role.USER]),
            f.optional("flag", "boolean", in_=[True]),
            f.optional("items", "list", min_length=1, max_length=2),
        )
        return reg

    def test_all_constraints_reported_independently(self, constrained):
        result = validate(constrained, "c", {"username": "A"})
        assert _errors(result) == [
            ("username", "does not match format", ()),
            ("username", "must be at least 3 characters (minimum length)", ()),
        ]

    def test_max_length(self, constrained):
        result = validate(constrained, "c", {"username": "abcdef"})
        assert _errors(result) == [
            ("username", "must be at most 5 characters (maximum length)", ()),
        ]

    def test_numeric_bounds(self, constrained):
        result = validate(constrained, "c", {"score": 0.1, "count": 11})
        assert _errors(result) == [
            ("score", "must be >= 0.5 (minimum value)", ()),
            ("count", "must be <= 10 (maximum value)", ()),
        ]

    def test_bounds_are_inclusive(self, constrained):
        assert validate(constrained, "c", {"score": 0.5, "count": 10}).passed
        assert validate(constrained, "c", {"score": 9.5, "count": 1}).passed

    def test_in_constraint(self, constrained):
        result = validate(constrained, "c", {"status": "archived"})
        assert _errors(result) == [
            ("status", "must be one of: 'active', 'inactive'", ()),
        ]

    def test_in_constraint_with_symbols(self, constrained, role):
        assert validate(constrained, "c", {"role": role.USER}).passed
        result = validate(constrained, "c", {"role": role.GUEST})
        assert _errors(result) == [("role", "must be one of: Role.ADMIN, Role.USER", ())]

    def test_in_constraint_keeps_bools_apart(self):
        reg = ContractRegistry(on_duplicate="error")
        reg.define("c", f.optional("n", "integer", in_=[True, 2]))
        assert not validate(reg, "c", {"n": 1}).passed
        assert validate(reg, "c", {"n": 2}).passed

    def test_list_length(self, constrained):
        result = validate(constrained, "c", {"items": []})
        assert _errors(result) == [("items", "must have at least 1 items (minimum length)", ())]
        result = validate(constrained, "c", {"items": [1, 2, 3]})
        assert _errors(result) == [("items", "must have at most 2 items (maximum length)", ())]

    def test_format_searches_anywhere(self):
        reg = ContractRegistry(on_duplicate="error")
        reg.define("c", f.required("email", "string", format=r"@"))
        assert validate(reg, "c", {"email": "a@b"}).passed

    def test_constraints_on_map_field(self):
        reg = ContractRegistry(on_duplicate="error")
        reg.define("c", f.required("m", "map", in_=[{"a": 1}]))
        assert validate(reg, "c", {"m": {"a": 1}}).passed
        assert [v.field for v in validate(reg, "c", {"m": {"a": 2}}).violations] == ["m"]


# =============================================================================
# Lists
# =============================================================================


class TestListOf:
    """Typed list validation."""

    def test_one_violation_per_field(self):
        """Several bad items still produce a single violation."""
        reg = ContractRegistry(on_duplicate="error")
        reg.define("c", f.required("ids", f.list_of("integer")))
        result = validate(reg, "c", {"ids": ["a", 2, "c", None]})
        assert _errors(result) == [("ids", "invalid list item", ())]

    def test_list_of_maps(self):
        reg = ContractRegistry(on_duplicate="error")
        reg.define("c", f.required("items", f.list_of("map")))
        assert validate(reg, "c", {"items": [{"id": 1}, {"id": 2}]}).passed
        result = validate(reg, "c", {"items": [{"id": 1}, "not a map"]})
        assert _errors(result) == [("items", "invalid list item", ())]

    def test_list_of_symbols(self, role):
        reg = ContractRegistry(on_duplicate="error")
        reg.define("c", f.optional("features", f.list_of("symbol")))
        assert validate(reg, "c", {"features": [role.ADMIN, role.USER]}).passed
        assert not validate(reg, "c", {"features": [role.ADMIN, "user"]}).passed

    def test_list_of_lists_is_shallow(self):
        reg = ContractRegistry(on_duplicate="error")
        reg.define("c", f.required("grid", f.list_of(f.list_of("integer"))))
        assert validate(reg, "c", {"grid": [[1], ["not checked"]]}).passed
        assert not validate(reg, "c", {"grid": [[1], 2]}).passed

    def test_list_of_type_mismatch(self):
        reg = ContractRegistry(on_duplicate="error")
        reg.define("c", f.required("tags", f.list_of("string")))
        result = validate(reg, "c", {"tags": "a,b"})
        assert _errors(result) == [("tags", "expected list of string, got string", ())]

    def test_list_constraints_and_items_both_reported(self):
        reg = ContractRegistry(on_duplicate="error")
        reg.define("c", f.required("tags", f.list_of("string"), max_length=1))
        result = validate(reg, "c", {"tags": ["a", 1]})
        assert _errors(result) == [
            ("tags", "must have at most 1 items (maximum length)", ()),
            ("tags", "invalid list item", ()),
        ]


# =============================================================================
# Properties
# =============================================================================


class TestProperties:
    """Engine-wide guarantees."""

    def test_idempotence(self, registry):
        value = {
            "email": "user@example.com",
            "password": "supersecret123",
            "profile": {"name": "Alice", "age": 30},
        }
        snapshot = copy.deepcopy(value)
        first = validate(registry, "registration", value)
        second = validate(registry, "registration", first.value)
        assert first.passed and second.passed
        assert second.value is value
        assert value == snapshot

    def test_completeness(self, registry):
        """Every independent problem is reported in one call."""
        result = validate(registry, "registration", {
            "email": "invalid",
            "password": "short",
            "profile": {"name": "x" * 101, "age": 17, "bio": 5},
        })
        assert len(result.violations) == 5
        assert [v.field for v in result.violations] == ["email", "password", "name", "age", "bio"]

    def test_path_length_matches_depth(self):
        reg = ContractRegistry(on_duplicate="error")
        reg.define(
            "deep",
            f.required("a", "integer"),
            f.required("l1", "map", fields=[
                f.required("b", "integer"),
                f.required("l2", "map", fields=[
                    f.required("c", "integer"),
                    f.required("l3", "map", fields=[f.required("d", "integer")]),
                ]),
            ]),
        )
        result = validate(reg, "deep", {
            "a": "x",
            "l1": {"b": "x", "l2": {"c": "x", "l3": {"d": "x"}}},
        })
        assert [(v.field, v.path) for v in result.violations] == [
            ("a", ()),
            ("b", ("l1",)),
            ("c", ("l1", "l2")),
            ("d", ("l1", "l2", "l3")),
        ]

    def test_nested_violations_are_contiguous(self):
        reg = ContractRegistry(on_duplicate="error")
        reg.define(
            "c",
            f.required("first", "string"),
            f.required("m", "map", fields=[
                f.required("x", "string"),
                f.required("y", "string"),
            ]),
            f.required("last", "string"),
        )
        result = validate(reg, "c", {"m": {}})
        assert [(v.field, v.path) for v in result.violations] == [
            ("first", ()),
            ("x", ("m",)),
            ("y", ("m",)),
            ("last", ()),
        ]

    def test_unknown_fields_pass_through(self, registry):
        value = {
            "email": "user@example.com",
            "password": "supersecret123",
            "extra": {"anything": [1, 2]},
            "profile": {"age": 20, "nickname": 123},
        }
        result = validate(registry, "registration", value)
        assert result.passed
        assert result.value["extra"] == {"anything": [1, 2]}
        assert result.value["profile"]["nickname"] == 123

    def test_unknown_fields_never_reported(self, registry):
        result = validate(registry, "create_user", {"email": "bad", "password": "short", "zzz": None})
        assert "zzz" not in [v.field for v in result.violations]


# =============================================================================
# Lower-level entry points
# =============================================================================


class TestEntryPoints:
    """validate_contract() and validate_fields()."""

    def test_validate_contract(self, registry):
        result = validate_contract(registry.get("create_user"), {"email": "a@b.com"})
        assert isinstance(result, ValidationResult)
        assert result.contract == "create_user"
        assert [v.field for v in result.violations] == ["password"]

    def test_validate_fields_with_path(self):
        specs = [f.required("zip", "string", format=r"^\d{5}$")]
        violations = validate_fields(specs, {"zip": "abc"}, ("address",))
        assert violations == [Violation("zip", "does not match format", ("address",))]

    def test_validate_fields_empty_on_success(self):
        assert validate_fields([f.required("a", "integer")], {"a": 1}) == []
