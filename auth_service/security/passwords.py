"""bcrypt helpers for hashing and verifying account passwords."""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only consumes the first 72 bytes of a password.
_MAX_PASSWORD_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_MAX_PASSWORD_BYTES]


def hash_password(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash ``plain`` with a freshly generated salt.

    Parameters
    ----------
    plain:
        Plaintext password supplied by the caller.
    rounds:
        bcrypt cost factor; each increment doubles the hashing work.

    Returns
    -------
    str
        Modular-crypt digest (``$2b$<rounds>$<salt><hash>``) embedding the salt
        and cost needed to verify future attempts.
    """
    return bcrypt.hashpw(_encode(plain), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(plain: str, digest: str) -> bool:
    """Return ``True`` when ``plain`` matches ``digest`` (constant-time comparison)."""
    if not plain or not digest:
        return False
    try:
        return bcrypt.checkpw(_encode(plain), digest.encode("ascii"))
    except ValueError:
        # malformed or non-bcrypt digest
        return False
