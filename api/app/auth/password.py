"""Password hashing utilities.

Passwords are stored only as bcrypt hashes. bcrypt ignores input beyond
72 bytes, so longer passwords are truncated before hashing.
"""

import bcrypt

from app.config import settings

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")
