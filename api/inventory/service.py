"""
Inventory lookups.
"""

from __future__ import annotations

import logging
from typing import Any

from core.db import Database
from core.errors import InternalError, NotFoundError, StoreError

from . import repository, validation

logger = logging.getLogger(__name__)


def _server_error() -> InternalError:
    return InternalError({"message": "Server Error"}, code="store_failure")


async def list_inventory(db: Database) -> list[dict[str, Any]]:
    try:
        return await repository.list_inventory(db)
    except StoreError as exc:
        logger.exception("inventory_list_failed")
        raise _server_error() from exc


async def get_product(db: Database, raw_id: str) -> dict:
    item_id = validation.parse_product_id(raw_id)
    try:
        row = await repository.get_inventory_by_id(db, item_id)
    except StoreError as exc:
        logger.exception("inventory_get_failed id=%s", item_id)
        raise _server_error() from exc

    if row is None:
        raise NotFoundError({"message": "Product Not Found."}, code="product_not_found")
    logger.debug("inventory_get id=%s", item_id)
    return {"message": "Received", "value": row}


async def get_products(db: Database, keys: Any) -> list[dict[str, Any]]:
    item_ids = validation.check_ids(keys)
    if not item_ids:
        return []
    try:
        return await repository.list_inventory_by_ids(db, item_ids)
    except StoreError as exc:
        logger.exception("inventory_bulk_get_failed count=%s", len(item_ids))
        raise _server_error() from exc
