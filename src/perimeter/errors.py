# src/perimeter/errors.py
"""
Exception types raised by Perimeter.

Two families:
  - Declaration errors (ContractDefinitionError and friends) are raised while
    contracts, registries and guards are being built. They indicate a bug in
    the declaring code.
  - ValidationError is raised at a guarded boundary when input does not
    satisfy its contract. It is the only error a guarded call produces.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Sequence

if TYPE_CHECKING:
    from perimeter.api.results import Violation


class PerimeterError(Exception):
    """Base class for every Perimeter exception."""


class ContractDefinitionError(PerimeterError, ValueError):
    """A contract or field declaration is malformed."""


class DuplicateContractError(ContractDefinitionError):
    """A contract name is registered twice in a registry that forbids it."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Contract '{name}' is already registered")


class RegistryFrozenError(PerimeterError, RuntimeError):
    """Registration was attempted after the registry was frozen."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Cannot register contract '{name}': registry is frozen"
        )


class GuardDefinitionError(PerimeterError, ValueError):
    """A guard or overloaded operation is declared inconsistently."""


class ContractFileError(PerimeterError):
    """A contract file could not be read or does not describe valid contracts."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


SUMMARY_TEMPLATE = "Validation failed at perimeter with {count} violation(s):"


def format_violation(violation: "Violation") -> str:
    """Render one violation as ``path.field: error`` (path omitted at top level)."""
    location = ".".join([*violation.path, violation.field])
    return f"{location}: {violation.error}"


def format_violations(violations: Iterable["Violation"]) -> str:
    """Render a summary line followed by one ``- path.field: error`` line per violation."""
    items = list(violations)
    lines = [SUMMARY_TEMPLATE.format(count=len(items))]
    lines.extend(f"  - {format_violation(v)}" for v in items)
    return "\n".join(lines)


class ValidationError(PerimeterError):
    """
    Raised when a value fails its contract at a guarded boundary.

    Attributes:
        violations: Ordered list of Violation objects (never empty)
        contract: Name of the contract that was checked, if known
        summary: Fixed one-line summary with the violation count
        message: Summary plus one rendered line per violation
    """

    def __init__(self, violations: Sequence["Violation"], contract: Optional[str] = None):
        self.violations: List["Violation"] = list(violations)
        self.contract = contract
        self.summary = SUMMARY_TEMPLATE.format(count=len(self.violations))
        self.message = format_violations(self.violations)
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ValidationError({self.contract or 'inline'}, {len(self.violations)} violation(s))"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "message": self.summary,
            "contract": self.contract,
            "violations": [v.to_dict() for v in self.violations],
        }
