"""Container header.

Binary layout
-------------
Offset  Length  Content
0       1       Format version (uint8, currently 3)
1       1       Options (bit 0: password-based key derivation)
2       8       Encryption salt
10      8       HMAC salt
18      16      IV (one AES block)

A complete container appends the AES-256-CBC ciphertext and a 32-byte
HMAC-SHA256 tag over header + ciphertext.
"""

from __future__ import annotations

import logging
import os
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from .auth import Authenticator
from .errors import HeaderTooShortError, RandomSourceError, UnsupportedHeaderError
from .kdf import SALT_SIZE

logger = logging.getLogger(__name__)

FORMAT_VERSION = 3
SUPPORTED_VERSIONS = frozenset({FORMAT_VERSION})
OPTION_USES_PASSWORD = 0x01
BLOCK_SIZE = 16
HEADER_SIZE = 2 + 2 * SALT_SIZE + BLOCK_SIZE

RandomBytes = Callable[[int], bytes]


class Header(BaseModel):
    """The public, unencrypted prefix of a container."""

    model_config = ConfigDict(frozen=True)

    version: int = Field(default=FORMAT_VERSION, ge=0, le=255)
    options: int = Field(default=OPTION_USES_PASSWORD, ge=0, le=255)
    encryption_salt: bytes = Field(min_length=SALT_SIZE, max_length=SALT_SIZE)
    hmac_salt: bytes = Field(min_length=SALT_SIZE, max_length=SALT_SIZE)
    iv: bytes = Field(min_length=BLOCK_SIZE, max_length=BLOCK_SIZE)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def generate(cls, random_bytes: RandomBytes = os.urandom) -> Header:
        """Create a header with fresh salts and IV, suitable for encryption.

        *random_bytes* must be a cryptographically secure source; it is
        drawn for the encryption salt, then the IV, then the HMAC salt.
        """
        encryption_salt = _draw(random_bytes, SALT_SIZE)
        iv = _draw(random_bytes, BLOCK_SIZE)
        hmac_salt = _draw(random_bytes, SALT_SIZE)
        logger.debug("Generated v%d header", FORMAT_VERSION)
        return cls(encryption_salt=encryption_salt, hmac_salt=hmac_salt, iv=iv)

    @classmethod
    def from_bytes(cls, data: bytes) -> Header:
        """Read a header from the first ``HEADER_SIZE`` bytes of *data*."""
        return parse(data)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def authenticator(self) -> Authenticator:
        """Tag function bound to this header's HMAC salt."""
        return Authenticator(hmac_salt=self.hmac_salt)

    def to_bytes(self) -> bytes:
        return serialize(self)

    def __bytes__(self) -> bytes:
        return serialize(self)


def serialize(header: Header) -> bytes:
    """Render *header* as its 34-byte wire prefix."""
    return (
        bytes((header.version, header.options))
        + header.encryption_salt
        + header.hmac_salt
        + header.iv
    )


def parse(data: bytes) -> Header:
    """Return the :class:`Header` at the start of *data*.

    Trailing bytes (ciphertext and tag) are ignored.
    """
    if len(data) < HEADER_SIZE:
        raise HeaderTooShortError(
            f"Header needs {HEADER_SIZE} bytes, got {len(data)}."
        )

    version, options = data[0], data[1]
    if version not in SUPPORTED_VERSIONS:
        raise UnsupportedHeaderError(f"Unsupported format version: {version}.")
    if options != OPTION_USES_PASSWORD:
        raise UnsupportedHeaderError(f"Unsupported options byte: {options:#04x}.")

    offset = 2
    encryption_salt = bytes(data[offset : offset + SALT_SIZE])
    offset += SALT_SIZE
    hmac_salt = bytes(data[offset : offset + SALT_SIZE])
    offset += SALT_SIZE
    iv = bytes(data[offset : offset + BLOCK_SIZE])

    logger.debug("Parsed v%d header (%d bytes available)", version, len(data))
    return Header(
        version=version,
        options=options,
        encryption_salt=encryption_salt,
        hmac_salt=hmac_salt,
        iv=iv,
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _draw(random_bytes: RandomBytes, size: int) -> bytes:
    try:
        value = random_bytes(size)
    except OSError as exc:
        raise RandomSourceError("Random source unavailable.") from exc
    if len(value) != size:
        raise RandomSourceError(f"Random source returned {len(value)} bytes, expected {size}.")
    return bytes(value)
