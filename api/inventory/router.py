"""
Inventory API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_db

from . import schemas, service

router = APIRouter()


@router.get("/api")
async def list_inventory(db: Database = Depends(get_db)) -> list[dict]:
    return await service.list_inventory(db)


@router.get("/api/product/{product_id}")
async def get_product(product_id: str, db: Database = Depends(get_db)) -> dict:
    return await service.get_product(db, product_id)


@router.post("/api/product/")
@router.post("/api/product", include_in_schema=False)
async def get_products(
    payload: schemas.ProductKeysRequest | None = None,
    db: Database = Depends(get_db),
) -> list[dict]:
    return await service.get_products(db, (payload or schemas.ProductKeysRequest()).keys)
