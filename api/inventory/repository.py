"""
Inventory persistence (raw SQL, read only).
"""

from __future__ import annotations

from typing import Any

from core.db import Database


async def list_inventory(db: Database) -> list[dict[str, Any]]:
    """
    Every item, without the supplier column.
    """
    return await db.fetch_all(
        """
        SELECT id, product_name, category, price, sku, dimensions, status
        FROM inventory
        ORDER BY id
        """
    )


async def get_inventory_by_id(db: Database, item_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, product_name, category, price, sku, supplier, dimensions, status
        FROM inventory
        WHERE id = $1::bigint
        """,
        item_id,
    )


async def list_inventory_by_ids(db: Database, item_ids: list[int]) -> list[dict[str, Any]]:
    """
    Items whose id is in `item_ids`. Unknown ids are skipped; row order is
    not tied to input order.
    """
    return await db.fetch_all(
        """
        SELECT id, product_name, category, price, sku, supplier, dimensions, status
        FROM inventory
        WHERE id = ANY($1::bigint[])
        """,
        item_ids,
    )
