"""
Inventory API schemas.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ProductKeysRequest(BaseModel):
    # Checked by `inventory/validation.py` so a non-array gets the API's own 400 body.
    keys: Any = None
