"""
Inventory id checks.
"""

from __future__ import annotations

import re
from typing import Any

from core.errors import NotFoundError, ValidationError

# Ids are bound as Postgres bigint.
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1

_INT_RE = re.compile(r"-?[0-9]+")


def _as_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        item_id = value
    elif isinstance(value, str) and _INT_RE.fullmatch(value.strip()):
        item_id = int(value.strip())
    else:
        return None
    if not MIN_ID <= item_id <= MAX_ID:
        return None
    return item_id


def check_ids(value: Any) -> list[int]:
    """
    Bulk lookup keys must be a JSON array of integer ids (digit strings allowed).
    An empty array is valid.
    """
    error = ValidationError({"message": "error with array"}, code="ids_not_array")
    if not isinstance(value, list):
        raise error

    ids: list[int] = []
    for item in value:
        item_id = _as_id(item)
        if item_id is None:
            raise error
        ids.append(item_id)
    return ids


def parse_product_id(raw: str) -> int:
    # A path segment that is not an id cannot name a product.
    item_id = _as_id(raw)
    if item_id is None:
        raise NotFoundError({"message": "Product Not Found."}, code="product_not_found")
    return item_id
