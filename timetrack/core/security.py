from __future__ import annotations

import secrets

import bcrypt

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72
SESSION_TOKEN_BYTES = 32
TIMER_ID_BYTES = 16


def _password_bytes(plain: str) -> bytes:
    return plain.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain: str, rounds: int = 12) -> str:
    """Salted bcrypt hash; two calls with the same input never match."""
    return bcrypt.hashpw(_password_bytes(plain), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        return False


def new_session_token() -> str:
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def new_timer_id() -> str:
    return secrets.token_urlsafe(TIMER_ID_BYTES)
