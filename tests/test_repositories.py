from __future__ import annotations

import pytest

from auth import repository as auth_repository
from inventory import repository as inventory_repository


@pytest.mark.anyio
async def test_list_inventory_never_selects_supplier(fake_db):
    rows = await inventory_repository.list_inventory(fake_db)

    sql, args = fake_db.calls[-1]
    assert "supplier" not in sql
    assert args == ()
    assert len(rows) == 2


@pytest.mark.anyio
async def test_get_inventory_by_id_binds_id(fake_db):
    row = await inventory_repository.get_inventory_by_id(fake_db, 1)

    sql, args = fake_db.calls[-1]
    assert "WHERE id = $1" in sql
    assert args == (1,)
    assert row["supplier"] == "Northwood Supply"


@pytest.mark.anyio
async def test_get_inventory_by_id_missing(fake_db):
    assert await inventory_repository.get_inventory_by_id(fake_db, 404) is None


@pytest.mark.anyio
async def test_list_inventory_by_ids_binds_array(fake_db):
    rows = await inventory_repository.list_inventory_by_ids(fake_db, [2, 3])

    sql, args = fake_db.calls[-1]
    assert "ANY($1::bigint[])" in sql
    assert args == ([2, 3],)
    assert [row["id"] for row in rows] == [2]


@pytest.mark.anyio
async def test_insert_user_returns_row_without_hash(fake_db):
    row = await auth_repository.insert_user(
        fake_db,
        username="alice",
        email="alice@example.com",
        password_hash="$2b$04$hash",
    )

    sql, args = fake_db.calls[-1]
    assert "VALUES ($1, $2, $3)" in sql
    assert args == ("alice", "alice@example.com", "$2b$04$hash")
    assert row == {"username": "alice", "email": "alice@example.com"}


@pytest.mark.anyio
async def test_find_user_by_username(fake_db):
    await auth_repository.insert_user(fake_db, username="alice", email="a@x.io", password_hash="h")

    row = await auth_repository.find_user_by_username(fake_db, "alice")

    assert row == {"username": "alice", "password_hash": "h"}
    assert await auth_repository.find_user_by_username(fake_db, "bob") is None
