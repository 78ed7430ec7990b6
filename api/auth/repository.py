"""
Account persistence helpers.
"""

from __future__ import annotations

from core.db import Database


async def insert_user(db: Database, *, username: str, email: str, password_hash: str) -> dict:
    """
    Insert one account. A duplicate username or email raises
    `UniqueConstraintViolation`.
    """
    row = await db.fetch_one(
        """
        INSERT INTO usersdb (username, email, password)
        VALUES ($1, $2, $3)
        RETURNING username, email
        """,
        username,
        email,
        password_hash,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def find_user_by_username(db: Database, username: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT username, password AS password_hash
        FROM usersdb
        WHERE username = $1
        """,
        username,
    )
