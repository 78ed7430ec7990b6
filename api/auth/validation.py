"""
Registration and login input checks.

Pure functions: no store access, no side effects. Each check raises
`ValidationError` with a machine code (`username_empty`, ...) and the body
returned to the client.

Field order is username -> email -> password, and for each field emptiness
is checked before format. Only the first failure is reported.
"""

from __future__ import annotations

import re

from core.errors import ValidationError

from .security import BCRYPT_MAX_PASSWORD_BYTES

EMAIL_RE = re.compile(r"[A-Za-z0-9.+\-_]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}")

# Letters, digits and ! # @ % $ & only, at most 72 bytes.
PASSWORD_RE = re.compile(r"[A-Za-z0-9!#@%$&]+")

_ERRORS: dict[str, dict] = {
    "username_empty": {"error": "Username field is empty."},
    "email_empty": {"error": "Email field is empty.", "errors": {"email": "Email is empty."}},
    "email_invalid": {"error": "Email did not match format", "errors": {"email": "Email not valid."}},
    "password_empty": {"error": "Password field is empty.", "errors": {"password": "Password empty."}},
    "password_invalid": {
        "error": "Password did not match format",
        "errors": {"password": "Password not valid."},
    },
    "credentials_missing": {"error": "Username and Password field is empty."},
}


def _fail(code: str) -> ValidationError:
    return ValidationError(_ERRORS[code], code=code)


def check_username(username: str | None) -> str:
    if not username:
        raise _fail("username_empty")
    return username


def check_email(email: str | None) -> str:
    if not email:
        raise _fail("email_empty")
    if EMAIL_RE.fullmatch(email) is None:
        raise _fail("email_invalid")
    return email


def check_password(password: str | None) -> str:
    if not password:
        raise _fail("password_empty")
    if PASSWORD_RE.fullmatch(password) is None or len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise _fail("password_invalid")
    return password


def validate_registration(
    username: str | None,
    email: str | None,
    password: str | None,
) -> tuple[str, str, str]:
    return check_username(username), check_email(email), check_password(password)


def validate_login(username: str | None, password: str | None) -> tuple[str, str]:
    # Presence only: format rules apply to new passwords, not to login attempts.
    if not username or not password:
        raise _fail("credentials_missing")
    return username, password
