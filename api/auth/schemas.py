"""
Account API schemas (request shapes).

Fields are optional strings: a missing or empty field is reported by
`auth/validation.py` with its own message, while a non-string value is a
shape error rejected before any field is looked at.
"""

from __future__ import annotations

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None
