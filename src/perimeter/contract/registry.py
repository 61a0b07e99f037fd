# src/perimeter/contract/registry.py
"""
Name -> Contract registry.

Registration is single-writer: declare every contract, then call freeze()
before validating from multiple threads. Lookups never mutate state.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Literal, Optional

from perimeter.contract.model import Contract, FieldSpec
from perimeter.errors import DuplicateContractError, RegistryFrozenError
from perimeter.logging import get_logger

_logger = get_logger(__name__)

OnDuplicate = Literal["error", "replace"]


class ContractRegistry:
    """
    Holds the contracts of one declaring scope.

    Args:
        on_duplicate: What happens when a name is registered twice:
            - "error": raise DuplicateContractError
            - "replace": last write wins (logged as a warning)
            Defaults to the ``on_duplicate`` setting (PERIMETER_ON_DUPLICATE).
    """

    def __init__(self, on_duplicate: Optional[OnDuplicate] = None):
        if on_duplicate is None:
            from perimeter.config.settings import load_settings

            on_duplicate = load_settings().on_duplicate
        if on_duplicate not in ("error", "replace"):
            raise ValueError(f"on_duplicate must be 'error' or 'replace', got {on_duplicate!r}")
        self.on_duplicate: OnDuplicate = on_duplicate
        self._contracts: Dict[str, Contract] = {}
        self._frozen = False

    def __repr__(self) -> str:
        state = ", frozen" if self._frozen else ""
        return f"ContractRegistry({len(self._contracts)} contracts{state})"

    def __contains__(self, name: object) -> bool:
        return name in self._contracts

    def __len__(self) -> int:
        return len(self._contracts)

    def __iter__(self) -> Iterator[Contract]:
        return iter(list(self._contracts.values()))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, contract: Contract) -> Contract:
        """Add a contract. Returns it for chaining."""
        if self._frozen:
            raise RegistryFrozenError(contract.name)

        if contract.name in self._contracts:
            if self.on_duplicate == "error":
                raise DuplicateContractError(contract.name)
            _logger.warning("Contract '%s' redefined; replacing previous definition", contract.name)

        self._contracts[contract.name] = contract
        _logger.debug("Registered contract '%s' (%d fields)", contract.name, len(contract.fields))
        return contract

    def register_all(self, contracts: Iterable[Contract]) -> List[Contract]:
        """
        Add several contracts, all or nothing.

        Duplicate names (against the registry or within the batch) and a
        frozen registry are detected before anything is registered.
        """
        batch = list(contracts)
        if self._frozen and batch:
            raise RegistryFrozenError(batch[0].name)
        if self.on_duplicate == "error":
            seen = set(self._contracts)
            for contract in batch:
                if contract.name in seen:
                    raise DuplicateContractError(contract.name)
                seen.add(contract.name)
        for contract in batch:
            self.register(contract)
        return batch

    def define(self, name: str, *fields: FieldSpec) -> Contract:
        """Build and register a contract in one step."""
        return self.register(Contract(name=name, fields=tuple(fields)))

    def get(self, name: str) -> Optional[Contract]:
        """Return the contract registered under ``name``, or None."""
        return self._contracts.get(name)

    def names(self) -> List[str]:
        """Contract names in registration order."""
        return list(self._contracts)

    def freeze(self) -> "ContractRegistry":
        """End the registration phase. Further register() calls raise RegistryFrozenError."""
        self._frozen = True
        return self
