"""
Password hashing.

Salted PBKDF2-SHA256 through passlib; hashes are self-describing modular
crypt strings (`$pbkdf2-sha256$<rounds>$<salt>$<checksum>`).
"""

import functools
import secrets

from passlib.hash import pbkdf2_sha256

from stridelog.config import settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with a fresh random salt."""
    hasher = pbkdf2_sha256.using(rounds=rounds or settings.password_hash_iterations)
    return hasher.hash(password)


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Check a password against a stored hash.

    Hashes in any other format never match.
    """
    if not stored_hash or not pbkdf2_sha256.identify(stored_hash):
        return False
    try:
        return pbkdf2_sha256.verify(password, stored_hash)
    except ValueError:
        return False


@functools.lru_cache(maxsize=1)
def dummy_hash() -> str:
    """Hash checked for unknown usernames so both login failures cost the same."""
    return hash_password(secrets.token_urlsafe(16))
