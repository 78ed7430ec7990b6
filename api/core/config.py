"""
Process configuration read from environment variables.

Every setting has a default except DATABASE_URL (see `core/db.py`).
Values are read on each call, so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os

DEFAULT_PORT = 3000
DEFAULT_BCRYPT_ROUNDS = 5

# bcrypt only accepts cost factors in this range.
MIN_BCRYPT_ROUNDS = 4
MAX_BCRYPT_ROUNDS = 31


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def host() -> str:
    return _env_str("HOST", "0.0.0.0")


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def cors_origin() -> str:
    return os.environ.get("CORS_ORIGIN", "").strip()


def rate_limit_max() -> int:
    return max(1, _env_int("RATE_LIMIT_MAX", 100))


def rate_limit_window_s() -> int:
    # 15 minutes.
    return max(1, _env_int("RATE_LIMIT_WINDOW_S", 15 * 60))


def bcrypt_rounds() -> int:
    """
    Work factor shared by every hash and verify call site.
    """
    rounds = _env_int("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)
    return max(MIN_BCRYPT_ROUNDS, min(rounds, MAX_BCRYPT_ROUNDS))


def static_dir() -> str:
    return _env_str("STATIC_DIR", "dist")


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO")


def db_pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN", 1))


def db_pool_max_size() -> int:
    return max(db_pool_min_size(), _env_int("DB_POOL_MAX", 5))


def db_command_timeout_s() -> int:
    return max(1, _env_int("DB_COMMAND_TIMEOUT_S", 30))
