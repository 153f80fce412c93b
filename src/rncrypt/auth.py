"""Message authentication.

Tags are HMAC-SHA256 over the message, keyed with a PBKDF2 subkey derived from
the passphrase and the header's HMAC salt.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac
from pydantic import BaseModel, ConfigDict, Field

from .errors import AuthenticationError
from .kdf import SALT_SIZE, Secret, derive_key

TAG_SIZE = 32


def _hmac(hmac_salt: bytes, passphrase: Secret) -> crypto_hmac.HMAC:
    key = derive_key(passphrase, hmac_salt)
    return crypto_hmac.HMAC(key, hashes.SHA256())


def make_tag(hmac_salt: bytes, passphrase: Secret, message: bytes) -> bytes:
    """Return the 32-byte authentication tag of *message*."""
    h = _hmac(hmac_salt, passphrase)
    h.update(message)
    return h.finalize()


def verify_tag(hmac_salt: bytes, passphrase: Secret, message: bytes, tag: bytes) -> None:
    """Check *tag* against *message* in constant time.

    Raises :class:`AuthenticationError` on mismatch.
    """
    h = _hmac(hmac_salt, passphrase)
    h.update(message)
    try:
        h.verify(tag)
    except InvalidSignature as exc:
        raise AuthenticationError("Authentication failed: wrong passphrase or corrupted data.") from exc


class Authenticator(BaseModel):
    """:func:`make_tag` with the HMAC salt already bound.

    Calling an instance with ``(passphrase, message)`` returns the tag.
    """

    model_config = ConfigDict(frozen=True)

    hmac_salt: bytes = Field(min_length=SALT_SIZE, max_length=SALT_SIZE)

    def __call__(self, passphrase: Secret, message: bytes) -> bytes:
        return make_tag(self.hmac_salt, passphrase, message)

    def verify(self, passphrase: Secret, message: bytes, tag: bytes) -> None:
        verify_tag(self.hmac_salt, passphrase, message, tag)
