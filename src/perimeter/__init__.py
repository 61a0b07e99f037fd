# src/perimeter/__init__.py
"""
Perimeter - runtime contract validation for structured values

Usage:
    # Declare contracts
    import perimeter
    from perimeter import fields as f

    registry = perimeter.ContractRegistry()
    registry.define(
        "create_user",
        f.required("email", "string", format=r"@"),
        f.required("password", "string", min_length=12),
        f.optional("profile", "map", fields=[
            f.optional("age", "integer", min=18),
        ]),
    )

    # Validate a value
    result = perimeter.validate(registry, "create_user", params)
    if not result.passed:
        for v in result.violations:
            print(v.location, v.error)

    # Guard a function boundary
    boundary = perimeter.Boundary(registry)

    @boundary.guard("create_user")
    def create_user(params):
        ...

    # Load contracts from YAML
    registry = perimeter.load_contracts("contracts.yml")

    # CLI
    $ perimeter validate contracts.yml payload.json --contract create_user
"""

from perimeter.version import VERSION as __version__

# Contract model
from perimeter.contract.model import Contract, FieldSpec
from perimeter.contract.registry import ContractRegistry
from perimeter.contract.types import FieldType, ListOf

# Field helpers
from perimeter.api import fields

# Engine
from perimeter.engine.validator import validate, validate_contract, validate_fields

# Results & errors
from perimeter.api.results import ValidationResult, Violation
from perimeter.errors import (
    ContractDefinitionError,
    ContractFileError,
    DuplicateContractError,
    GuardDefinitionError,
    PerimeterError,
    RegistryFrozenError,
    ValidationError,
    format_violation,
    format_violations,
)

# Boundary guards
from perimeter.api.decorators import Boundary, GuardSpec, Overloaded, guard, guard_operation

# Configuration
from perimeter.config.loader import ContractLoader
from perimeter.config.settings import PerimeterSettings, load_settings

# Logging
from perimeter.logging import configure_logging, get_logger


def load_contracts(path, registry=None) -> ContractRegistry:
    """Load contracts from a YAML file (see ContractLoader.from_path)."""
    return ContractLoader.from_path(path, registry=registry)


__all__ = [
    "__version__",
    "Contract",
    "FieldSpec",
    "FieldType",
    "ListOf",
    "ContractRegistry",
    "fields",
    "validate",
    "validate_contract",
    "validate_fields",
    "ValidationResult",
    "Violation",
    "PerimeterError",
    "ContractDefinitionError",
    "DuplicateContractError",
    "RegistryFrozenError",
    "GuardDefinitionError",
    "ContractFileError",
    "ValidationError",
    "format_violation",
    "format_violations",
    "Boundary",
    "GuardSpec",
    "Overloaded",
    "guard",
    "guard_operation",
    "ContractLoader",
    "load_contracts",
    "PerimeterSettings",
    "load_settings",
    "configure_logging",
    "get_logger",
]
