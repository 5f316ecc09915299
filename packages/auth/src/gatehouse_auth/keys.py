"""Redis key patterns for Auth.

All keys use the `auth:` prefix. Key functions are pure — they compute key
names, never touch Redis.

If we switched to PostgreSQL these would become a users table with a unique
email column and a created_at index. The email key is the uniqueness arbiter:
a record is only ever written to it with SET NX.
"""


def user_email_key(email: str) -> str:
    """User record JSON, keyed by exact (case-sensitive) email."""
    return f"auth:user:email:{email}"


def user_id_key(user_id: str) -> str:
    """String lookup: user ID → email."""
    return f"auth:user:id:{user_id}"


def user_idx_all() -> str:
    """Sorted set of all user IDs (score = creation timestamp)."""
    return "auth:user:idx:all"
