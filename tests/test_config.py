from __future__ import annotations

from core import config


def test_defaults(monkeypatch):
    for name in ("PORT", "BCRYPT_ROUNDS", "RATE_LIMIT_MAX", "RATE_LIMIT_WINDOW_S", "CORS_ORIGIN"):
        monkeypatch.delenv(name, raising=False)

    assert config.port() == 3000
    assert config.bcrypt_rounds() == 5
    assert config.rate_limit_max() == 100
    assert config.rate_limit_window_s() == 900
    assert config.cors_origin() == ""


def test_invalid_integer_falls_back(monkeypatch):
    monkeypatch.setenv("PORT", "eighty")

    assert config.port() == 3000


def test_bcrypt_rounds_clamped(monkeypatch):
    monkeypatch.setenv("BCRYPT_ROUNDS", "2")
    assert config.bcrypt_rounds() == 4

    monkeypatch.setenv("BCRYPT_ROUNDS", "40")
    assert config.bcrypt_rounds() == 31


def test_pool_bounds(monkeypatch):
    monkeypatch.setenv("DB_POOL_MIN", "3")
    monkeypatch.setenv("DB_POOL_MAX", "2")

    assert config.db_pool_max_size() == 3
