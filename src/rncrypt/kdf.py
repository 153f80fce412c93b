"""Passphrase stretching.

Key derivation: PBKDF2-HMAC-SHA1 (10 000 iterations, 32-byte output).

Both subkeys of a container come from here: the encryption key is keyed with
the header's encryption salt, the HMAC key with its HMAC salt.
"""

from __future__ import annotations

from typing import Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

KEY_SIZE = 32
SALT_SIZE = 8
PBKDF2_ITERATIONS = 10_000

Secret = Union[bytes, bytearray, memoryview, str]


def to_bytes(secret: Secret) -> bytes:
    """Return *secret* as bytes, encoding text as UTF-8."""
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return bytes(secret)


def derive_key(passphrase: Secret, salt: bytes) -> bytes:
    """Derive a 32-byte subkey from *passphrase* and *salt*.

    Deterministic, and accepts empty passphrases and salts of any length.
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA1(),
        length=KEY_SIZE,
        salt=bytes(salt),
        iterations=PBKDF2_ITERATIONS,
    )
    return kdf.derive(to_bytes(passphrase))
