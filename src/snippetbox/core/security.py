"""
Password hashing helpers built on bcrypt.

bcrypt only looks at the first 72 bytes of its input. Rather than silently
truncating longer passwords (older bcrypt releases) or depending on the library
to reject them (newer ones), longer passwords are refused up front with
PasswordHashingError.
"""
import asyncio

import bcrypt

from snippetbox.exceptions.base import PasswordHashingError

DEFAULT_ROUNDS = 12
BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> bytes:
    """Return a salted bcrypt hash of `password` with the given cost factor."""
    secret = _encode(password)
    if len(secret) > BCRYPT_MAX_PASSWORD_BYTES:
        raise PasswordHashingError(
            f"Password cannot be longer than {BCRYPT_MAX_PASSWORD_BYTES} bytes"
        )
    try:
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=rounds))
    except ValueError as exc:
        raise PasswordHashingError() from exc


def verify_password(password: str, hashed: bytes) -> bool:
    """
    Check `password` against a stored bcrypt hash.

    Returns False for a mismatch. A malformed stored hash is a storage problem,
    not a wrong password, so bcrypt's ValueError is allowed to propagate.
    """
    secret = _encode(password)
    if len(secret) > BCRYPT_MAX_PASSWORD_BYTES:
        # can never have been hashed by hash_password()
        return False
    return bcrypt.checkpw(secret, hashed)


async def hash_password_async(password: str, rounds: int = DEFAULT_ROUNDS) -> bytes:
    """hash_password() in a worker thread; bcrypt is CPU bound by design."""
    return await asyncio.to_thread(hash_password, password, rounds)


async def verify_password_async(password: str, hashed: bytes) -> bool:
    return await asyncio.to_thread(verify_password, password, hashed)


__all__ = [
    "DEFAULT_ROUNDS",
    "BCRYPT_MAX_PASSWORD_BYTES",
    "hash_password",
    "verify_password",
    "hash_password_async",
    "verify_password_async",
]
