# src/perimeter/api/results.py
"""
Public API result types for Perimeter.

Violation is the stable, consumer-facing shape of one problem:
``{field, error, path}``. ValidationResult carries either the validated
value (passed) or the full ordered list of violations.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from perimeter.errors import ValidationError, format_violation

# Sentinel field names for structural failures
CONTRACT_FIELD = "_contract"
ROOT_FIELD = "_root"


@dataclass(frozen=True)
class Violation:
    """
    One reported contract failure.

    Properties:
        field: Leaf field name ("_contract" / "_root" for structural failures)
        error: Human-readable description
        path: Ancestor field names from the root down to, excluding, ``field``
    """

    field: str
    error: str
    path: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))

    def __str__(self) -> str:
        return format_violation(self)

    @property
    def location(self) -> str:
        """Dotted path including the field, e.g. ``profile.age``."""
        return ".".join([*self.path, self.field])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"field": self.field, "error": self.error, "path": list(self.path)}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Violation":
        return cls(field=d["field"], error=d["error"], path=tuple(d.get("path") or ()))


@dataclass
class ValidationResult:
    """
    Result of validating one value against one contract.

    Properties:
        passed: True when no violations were found
        value: The original input value (identity preserved, never copied)
        violations: Ordered violations; empty when passed
        contract: Name of the contract checked

    Methods:
        unwrap(): Return ``value`` or raise ValidationError
    """

    passed: bool
    value: Any
    violations: List[Violation] = field(default_factory=list)
    contract: Optional[str] = None

    @classmethod
    def ok(cls, value: Any, contract: Optional[str] = None) -> "ValidationResult":
        return cls(passed=True, value=value, violations=[], contract=contract)

    @classmethod
    def failed(
        cls, value: Any, violations: List[Violation], contract: Optional[str] = None
    ) -> "ValidationResult":
        return cls(passed=False, value=value, violations=list(violations), contract=contract)

    def __repr__(self) -> str:
        status = "PASSED" if self.passed else "FAILED"
        parts = [f"ValidationResult({self.contract or 'inline'}) {status}"]
        if not self.passed:
            for v in self.violations[:3]:
                parts.append(f"  - {format_violation(v)}")
            if len(self.violations) > 3:
                parts.append(f"    ... and {len(self.violations) - 3} more")
        return "\n".join(parts)

    def __bool__(self) -> bool:
        return self.passed

    @property
    def error_count(self) -> int:
        return len(self.violations)

    def unwrap(self) -> Any:
        """Return the validated value, raising ValidationError on failure."""
        if not self.passed:
            raise ValidationError(self.violations, contract=self.contract)
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (the value itself is not included)."""
        return {
            "passed": self.passed,
            "contract": self.contract,
            "violation_count": len(self.violations),
            "violations": [v.to_dict() for v in self.violations],
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def to_llm(self) -> str:
        """
        Token-optimized format for LLM context.

        Example output:
            VALIDATION: create_user FAILED (2 violations)
            - email: does not match format
            - profile.age: must be >= 18 (minimum value)
        """
        name = self.contract or "inline"
        if self.passed:
            return f"VALIDATION: {name} PASSED"
        lines = [f"VALIDATION: {name} FAILED ({len(self.violations)} violations)"]
        for v in self.violations[:10]:
            lines.append(f"- {format_violation(v)}")
        if len(self.violations) > 10:
            lines.append(f"... +{len(self.violations) - 10} more")
        return "\n".join(lines)
