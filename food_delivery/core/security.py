"""
Password hashing and session token helpers.
"""

import secrets

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def new_session_token() -> str:
    """Opaque, URL-safe, unguessable token (256 bits)."""
    return secrets.token_urlsafe(32)
