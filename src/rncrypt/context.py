"""Per-session encryption materials.

An :class:`EncryptionContext` binds a :class:`~rncrypt.header.Header` to the
passphrase and an AES instance keyed from the header's encryption salt. The
full 32-byte PBKDF2 output is the AES key (AES-256); AES's block is always
128 bits, matching ``BLOCK_SIZE``.
"""

from __future__ import annotations

import logging

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import CipherInitializationError, ContextClosedError
from .header import Header
from .kdf import Secret, derive_key, to_bytes

logger = logging.getLogger(__name__)


class EncryptionContext:
    """Materials for one encryption or decryption session.

    Use as a context manager, or call :meth:`close`, to zero the passphrase
    and key buffers once the session is over.
    """

    def __init__(self, header: Header, passphrase: bytearray, key: bytearray) -> None:
        self.header = header
        self._passphrase = passphrase
        self._key = key
        try:
            algorithms.AES(bytes(key))
        except ValueError as exc:
            _wipe(passphrase, key)
            raise CipherInitializationError(f"AES rejected a {len(key)}-byte key.") from exc
        self._closed = False

    @classmethod
    def create(cls, passphrase: Secret, header: Header) -> EncryptionContext:
        """Derive the encryption key for *header* and initialise the cipher."""
        key = bytearray(derive_key(passphrase, header.encryption_salt))
        logger.debug("Created encryption context for v%d header", header.version)
        return cls(header, bytearray(to_bytes(passphrase)), key)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def passphrase(self) -> bytes:
        self._check_open()
        return bytes(self._passphrase)

    @property
    def key(self) -> bytes:
        self._check_open()
        return bytes(self._key)

    @property
    def algorithm(self) -> algorithms.AES:
        """A fresh AES instance keyed with a copy of the derived key."""
        self._check_open()
        return algorithms.AES(bytes(self._key))

    def cipher(self) -> Cipher:
        """Return an AES-CBC :class:`Cipher` seeded with the header's IV.

        The cipher owns its own copy of the key, so it keeps the derived key
        after :meth:`close`. Padding and the encrypt/decrypt loop belong to
        the caller.
        """
        self._check_open()
        return Cipher(self.algorithm, modes.CBC(self.header.iv))

    def tag(self, message: bytes) -> bytes:
        """Authenticate *message* with this session's passphrase."""
        self._check_open()
        return self.header.authenticator(self._passphrase, message)

    def close(self) -> None:
        """Overwrite the passphrase and key buffers with zeros."""
        if self._closed:
            return
        _wipe(self._passphrase, self._key)
        self._closed = True
        logger.debug("Encryption context closed")

    def __enter__(self) -> EncryptionContext:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._closed:
            raise ContextClosedError("Encryption context has been closed.")


def _wipe(*buffers: bytearray) -> None:
    for buf in buffers:
        buf[:] = bytes(len(buf))
