"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. FastAPI creates one per process in the
lifespan hook (see `api/main.py`), keeps it on `app.state.db`, and hands it
to route handlers through the `get_db` dependency.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
- values are always passed as bound arguments, never formatted into SQL.

Store failures leave this module as `StoreError`, or
`UniqueConstraintViolation` for duplicate keys.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from . import config
from .errors import StoreError, UniqueConstraintViolation

logger = logging.getLogger(__name__)

_STORE_FAILURES = (OSError, asyncio.TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError)


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def _init_connection(conn: asyncpg.Connection) -> None:
    # Decode json/jsonb columns (e.g. inventory dimensions) into Python values.
    for type_name in ("json", "jsonb"):
        await conn.set_type_codec(type_name, encoder=json.dumps, decoder=json.loads, schema="pg_catalog")


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(self, dsn: str | None = None) -> None:
        self._dsn = dsn
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self._dsn or database_url(),
            min_size=config.db_pool_min_size(),
            max_size=config.db_pool_max_size(),
            command_timeout=config.db_command_timeout_s(),
            init=_init_connection,
        )

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Borrow a pooled connection; it goes back to the pool on every exit path.
        """
        try:
            async with self.pool.acquire() as conn:
                yield conn
        except asyncpg.UniqueViolationError as exc:
            raise UniqueConstraintViolation(str(exc)) from exc
        except _STORE_FAILURES as exc:
            raise StoreError(str(exc)) from exc

    async def ping(self) -> bool:
        """
        Run a trivial query; log the outcome instead of failing startup.
        """
        try:
            await self.fetch_one("SELECT 1 AS ok")
        except StoreError:
            logger.exception("database_connection_error")
            return False
        logger.info("Connected to PostgreSQL")
        return True

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with self.acquire() as conn:
            row = await conn.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with self.acquire() as conn:
            rows = await conn.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]


def get_db(request: Request) -> Database:
    return request.app.state.db
