# src/perimeter/config/models.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from perimeter.contract.model import Contract, FieldSpec
from perimeter.contract.types import ListOf


class FieldDecl(BaseModel):
    """
    Declarative specification for one field from a contract file.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Key looked up in the validated record.")
    type: str = Field(..., description="Field type (string, integer, ..., list_of).")
    required: bool = Field(False, description="Whether the field must be present.")
    items: Optional[str] = Field(None, description="Item type when type is list_of.")
    constraints: Dict[str, Any] = Field(default_factory=dict, description="Constraint name -> parameter.")
    fields: Optional[List[FieldDecl]] = Field(None, description="Nested fields (map only).")

    @model_validator(mode="after")
    def _items_only_for_lists(self) -> "FieldDecl":
        kind = self.type.strip().lower()
        if kind == "list_of" and not self.items:
            raise ValueError(f"field '{self.name}': type list_of requires 'items'")
        if self.items and kind != "list_of":
            raise ValueError(f"field '{self.name}': 'items' is only valid with type list_of")
        return self

    def to_field_spec(self) -> FieldSpec:
        if self.type.strip().lower() == "list_of":
            type_spec = ListOf(self.items or "")
        else:
            type_spec = self.type
        nested = tuple(f.to_field_spec() for f in self.fields) if self.fields is not None else None
        return FieldSpec(
            name=self.name,
            type=type_spec,
            required=self.required,
            constraints=dict(self.constraints),
            fields=nested,
        )


class ContractDecl(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    description: Optional[str] = None
    fields: List[FieldDecl] = Field(default_factory=list)

    def to_contract(self) -> Contract:
        return Contract(name=self.name, fields=tuple(f.to_field_spec() for f in self.fields))


class ContractFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    contracts: List[ContractDecl]


FieldDecl.model_rebuild()
