"""
Password hashing helpers (bcrypt).

Both functions are CPU bound; async callers run them in a worker thread.
"""

from __future__ import annotations

import bcrypt

# bcrypt ignores everything past this many bytes, so longer passwords are
# never hashed (registration rejects them) and never verify.
BCRYPT_MAX_PASSWORD_BYTES = 72


class CredentialError(RuntimeError):
    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code


def hash_password(plain_password: str, rounds: int) -> str:
    """
    Salted one-way hash. Two calls with the same password return different values.
    """
    password = (plain_password or "").encode("utf-8")
    if len(password) > BCRYPT_MAX_PASSWORD_BYTES:
        raise CredentialError("hash_failure")
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        return bcrypt.hashpw(password, salt).decode("utf-8")
    except (TypeError, ValueError) as exc:
        raise CredentialError("hash_failure") from exc


def verify_password(plain_password: str, password_hash: str) -> bool:
    """
    True iff `plain_password` produced `password_hash`.

    A mismatch returns False; a stored value that is not a bcrypt hash raises
    `CredentialError("malformed_hash")`.
    """
    hashed = (password_hash or "").encode("utf-8")
    if not hashed:
        raise CredentialError("malformed_hash")
    password = (plain_password or "").encode("utf-8")
    try:
        matches = bcrypt.checkpw(password[:BCRYPT_MAX_PASSWORD_BYTES], hashed)
    except ValueError as exc:
        raise CredentialError("malformed_hash") from exc
    # A longer password shares its first 72 bytes with some stored one at most;
    # it was never the input that produced the hash.
    return matches and len(password) <= BCRYPT_MAX_PASSWORD_BYTES
