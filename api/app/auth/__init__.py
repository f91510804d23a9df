"""Credential utilities for the profiles API."""

from app.auth.password import hash_password

__all__ = [
    "hash_password",
]
