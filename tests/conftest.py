# tests/conftest.py
import enum

import pytest

from perimeter import ContractRegistry, fields as f


class Role(enum.Enum):
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"


@pytest.fixture
def registry():
    """Registry with the contracts most tests share."""
    reg = ContractRegistry(on_duplicate="error")

    reg.define(
        "create_user",
        f.required("email", "string", format=r"@"),
        f.required("password", "string", min_length=12),
    )

    reg.define(
        "registration",
        f.required("email", "string", format=r"@"),
        f.required("password", "string", min_length=12),
        f.optional("profile", "map", fields=[
            f.optional("name", "string", max_length=100),
            f.optional("age", "integer", min=18, max=150),
            f.optional("bio", "string", max_length=500),
        ]),
    )

    reg.define(
        "tagged",
        f.required("tags", f.list_of("string")),
    )

    reg.define(
        "search_params",
        f.required("query", "string", min_length=1),
        f.optional("filters", "map", fields=[
            f.optional("category", "symbol", in_=[Role.ADMIN, Role.USER]),
            f.optional("limit", "integer", min=1, max=100),
            f.optional("offset", "integer", min=0),
        ]),
        f.optional("sort", "map", fields=[
            f.required("field", "string", in_=["name", "created_at", "updated_at"]),
            f.required("direction", "string", in_=["asc", "desc"]),
        ]),
    )

    return reg


@pytest.fixture
def contracts_yaml(tmp_path):
    """Contract file covering nesting, lists and constraints."""
    path = tmp_path / "contracts.yml"
    path.write_text("""
contracts:
  - name: create_user
    description: Sign-up payload
    fields:
      - name: email
        type: string
        required: true
        constraints:
          format: "@"
      - name: password
        type: string
        required: true
        constraints:
          min_length: 12
      - name: profile
        type: map
        fields:
          - name: age
            type: integer
            constraints:
              min: 18
      - name: tags
        type: list_of
        items: string

  - name: ping
    fields:
      - {name: id, type: integer, required: true}
""")
    return path


@pytest.fixture
def role():
    """Enum used for symbol-typed fields."""
    return Role
