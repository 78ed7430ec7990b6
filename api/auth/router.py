"""
Account API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_db

from . import schemas, service

router = APIRouter()


# Both slash forms: a 307 redirect would make clients re-send the body.
@router.post("/api/users/")
@router.post("/api/users", include_in_schema=False)
async def register(
    payload: schemas.RegisterRequest | None = None,
    db: Database = Depends(get_db),
) -> dict:
    return await service.register(db, payload or schemas.RegisterRequest())


@router.post("/api/login/")
@router.post("/api/login", include_in_schema=False)
async def login(
    payload: schemas.LoginRequest | None = None,
    db: Database = Depends(get_db),
) -> dict:
    return await service.login(db, payload or schemas.LoginRequest())
