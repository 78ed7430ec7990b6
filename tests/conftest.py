from __future__ import annotations

from decimal import Decimal
from typing import Any

import pytest
from fastapi.testclient import TestClient

from core.db import get_db
from core.errors import StoreError, UniqueConstraintViolation
from main import create_app

INVENTORY = [
    {
        "id": 1,
        "product_name": "Oak Desk",
        "category": "Furniture",
        "price": Decimal("249.99"),
        "sku": "FUR-001",
        "supplier": "Northwood Supply",
        "dimensions": {"w": 120, "d": 60, "h": 75},
        "status": "in_stock",
    },
    {
        "id": 2,
        "product_name": "Desk Lamp",
        "category": "Lighting",
        "price": Decimal("39.50"),
        "sku": "LGT-014",
        "supplier": None,
        "dimensions": {"w": 15, "d": 15, "h": 45},
        "status": "backorder",
    },
]

LIST_COLUMNS = ("id", "product_name", "category", "price", "sku", "dimensions", "status")


class FakeDatabase:
    """
    In-memory stand-in for `core.db.Database`.

    Answers the repository statements by table and shape, and records every
    call so tests can check that values travel as bound arguments.
    """

    def __init__(self) -> None:
        self.inventory = [dict(row) for row in INVENTORY]
        self.users: list[dict[str, Any]] = []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail: Exception | None = None

    def _record(self, sql: str, args: tuple[Any, ...]) -> None:
        self.calls.append((" ".join(sql.split()), args))
        if self.fail is not None:
            raise self.fail

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        self._record(sql, args)
        if "INSERT INTO usersdb" in sql:
            username, email, password_hash = args
            if any(u["username"] == username or u["email"] == email for u in self.users):
                raise UniqueConstraintViolation("duplicate key value violates unique constraint")
            self.users.append({"username": username, "email": email, "password": password_hash})
            return {"username": username, "email": email}
        if "FROM usersdb" in sql:
            for user in self.users:
                if user["username"] == args[0]:
                    return {"username": user["username"], "password_hash": user["password"]}
            return None
        if "FROM inventory" in sql:
            for row in self.inventory:
                if row["id"] == args[0]:
                    return dict(row)
            return None
        raise AssertionError(f"unexpected statement: {sql}")

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self._record(sql, args)
        if "ANY(" in sql:
            wanted = set(args[0])
            return [dict(row) for row in self.inventory if row["id"] in wanted]
        if "FROM inventory" in sql:
            return [{k: row[k] for k in LIST_COLUMNS} for row in self.inventory]
        raise AssertionError(f"unexpected statement: {sql}")


@pytest.fixture(autouse=True)
def _fast_bcrypt(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("STATIC_DIR", "does-not-exist")


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def client(fake_db: FakeDatabase) -> TestClient:
    # No `with` block: the lifespan (real pool) is not started.
    app = create_app()
    app.dependency_overrides[get_db] = lambda: fake_db
    return TestClient(app)


@pytest.fixture
def store_down(fake_db: FakeDatabase) -> FakeDatabase:
    fake_db.fail = StoreError("connection refused")
    return fake_db
