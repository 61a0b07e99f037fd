# src/perimeter/config/loader.py
"""
Load contract declarations from YAML.

File shape:

    contracts:
      - name: create_user
        fields:
          - {name: email, type: string, required: true, constraints: {format: "@"}}
          - name: profile
            type: map
            fields:
              - {name: age, type: integer, constraints: {min: 18}}
          - {name: tags, type: list_of, items: string}
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from perimeter.config.models import ContractFile
from perimeter.contract.registry import ContractRegistry
from perimeter.errors import ContractDefinitionError, ContractFileError
from perimeter.logging import get_logger

_logger = get_logger(__name__)


class ContractLoader:
    """Parse YAML contract files into a ContractRegistry."""

    @staticmethod
    def from_path(
        path: Union[str, Path],
        registry: Optional[ContractRegistry] = None,
    ) -> ContractRegistry:
        """
        Load every contract in ``path``.

        Args:
            path: YAML file
            registry: Registry to add to (a new one is created when omitted)

        Raises:
            ContractFileError: On unreadable files, YAML errors, schema
                errors, or invalid contract definitions
        """
        p = Path(path)
        try:
            text = p.read_text(encoding="utf-8")
        except OSError as e:
            raise ContractFileError(f"cannot read contract file: {e.strerror or e}", str(p)) from e
        return ContractLoader.from_string(text, registry=registry, source=str(p))

    @staticmethod
    def from_string(
        text: str,
        registry: Optional[ContractRegistry] = None,
        source: Optional[str] = None,
    ) -> ContractRegistry:
        """Load every contract in a YAML document."""
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ContractFileError(f"invalid YAML: {e}", source) from e

        if not isinstance(raw, dict):
            raise ContractFileError("expected a mapping with a 'contracts' list", source)

        try:
            parsed = ContractFile.model_validate(raw)
        except PydanticValidationError as e:
            raise ContractFileError(f"invalid contract file: {e}", source) from e

        registry = registry if registry is not None else ContractRegistry()
        try:
            # Build everything first; a bad declaration leaves the registry untouched
            contracts = [decl.to_contract() for decl in parsed.contracts]
            registry.register_all(contracts)
        except ContractDefinitionError as e:
            raise ContractFileError(str(e), source) from e

        _logger.debug("Loaded %d contract(s) from %s", len(parsed.contracts), source or "<string>")
        return registry
