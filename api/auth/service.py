"""
Account business logic: registration and stateless login.
"""

from __future__ import annotations

import logging

from starlette.concurrency import run_in_threadpool

from core import config
from core.db import Database
from core.errors import AuthError, ConflictError, InternalError, StoreError, UniqueConstraintViolation

from . import repository, schemas, security, validation

logger = logging.getLogger(__name__)


async def register(db: Database, payload: schemas.RegisterRequest) -> dict:
    username, email, password = validation.validate_registration(
        payload.username,
        payload.email,
        payload.password,
    )

    try:
        password_hash = await run_in_threadpool(
            security.hash_password,
            password,
            config.bcrypt_rounds(),
        )
        user = await repository.insert_user(
            db,
            username=username,
            email=email,
            password_hash=password_hash,
        )
    except UniqueConstraintViolation as exc:
        logger.info("user_insert_conflict username=%s", username)
        raise ConflictError({"errors": {"email": "Email or username already exists"}}, code="user_exists") from exc
    except (StoreError, security.CredentialError) as exc:
        logger.exception("user_insert_failed username=%s", username)
        raise InternalError({"error": "Database Error: User Insert Error"}, code="user_insert_failed") from exc

    logger.info("user_added username=%s", user["username"])
    return {"message": "User Added.", "user": user}


async def login(db: Database, payload: schemas.LoginRequest) -> dict:
    username, password = validation.validate_login(payload.username, payload.password)

    try:
        user_row = await repository.find_user_by_username(db, username)
        is_valid = user_row is not None and await run_in_threadpool(
            security.verify_password,
            password,
            str(user_row.get("password_hash") or ""),
        )
    except (StoreError, security.CredentialError) as exc:
        logger.exception("login_lookup_failed username=%s", username)
        raise InternalError({"error": "Server error."}, code="login_failed") from exc

    # Same status for both cases so callers cannot probe which usernames exist.
    if user_row is None:
        logger.info("login_unknown_user")
        raise AuthError({"error": "Invalid username and password."}, code="unknown_user")
    if not is_valid:
        logger.info("login_password_mismatch username=%s", username)
        raise AuthError({"message": "Username or password were incorrect."}, code="password_mismatch")

    return {"message": "Login successful."}
