"""
Error taxonomy shared by every feature package.

`ApiError` subclasses carry the HTTP status and the exact JSON body the
client sees. Internal detail (SQL, store codes, tracebacks) never goes into
the body; log it where the error is caught.

`StoreError` / `UniqueConstraintViolation` are raised by `core/db.py` so
handlers can tell a duplicate key from any other store failure without
looking at vendor error codes.
"""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    status_code = 500

    def __init__(self, body: dict[str, Any], *, code: str = "") -> None:
        super().__init__(code or str(body))
        self.body = body
        self.code = code


class ValidationError(ApiError):
    status_code = 400


class AuthError(ApiError):
    status_code = 401


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class InternalError(ApiError):
    status_code = 500


class StoreError(RuntimeError):
    pass


class UniqueConstraintViolation(StoreError):
    pass
