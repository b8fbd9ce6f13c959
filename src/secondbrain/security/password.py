"""Password hashing and reset token utilities."""

import hashlib
import secrets
from typing import Optional

from passlib.context import CryptContext

# bcrypt_sha256 pre-hashes with SHA-256, so passwords longer than 72 bytes are not truncated
pwd_context = CryptContext(schemes=["bcrypt_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a password against its hash; accounts without one never match."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def needs_update(hashed_password: str) -> bool:
    return pwd_context.needs_update(hashed_password)


def generate_reset_token() -> str:
    """Random single-use password reset token (64 hex chars)."""
    return secrets.token_hex(32)


def hash_reset_token(token: str) -> str:
    """Reset tokens are stored as SHA-256 digests, never in clear."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
