"""Password hashing for stored credentials.

bcrypt only looks at the first 72 bytes of its input; depending on the library
version longer input is either truncated or refused. Every password is first
reduced to a fixed 44-byte digest (base64 of SHA-256), so any length hashes and
two passwords sharing a long prefix never collide.
"""

from __future__ import annotations

import base64
import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


def hash_password(password: str, rounds: int = 10) -> str:
    """Return a salted bcrypt hash of the password digest."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash.

    bcrypt.checkpw compares in constant time. A malformed stored hash is a
    mismatch, not an error.
    """
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode())
    except (ValueError, TypeError):
        return False
