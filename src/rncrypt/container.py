"""Container framing: header + ciphertext + tag.

The ciphertext itself is produced elsewhere; this module only frames it and
checks the trailing HMAC.
"""

from __future__ import annotations

from .auth import TAG_SIZE
from .errors import MalformedContainerError
from .header import HEADER_SIZE, Header, parse
from .kdf import Secret

MIN_CONTAINER_SIZE = HEADER_SIZE + TAG_SIZE


def split_container(data: bytes) -> tuple[Header, bytes, bytes]:
    """Return *(header, ciphertext, tag)* from raw container bytes."""
    if len(data) < MIN_CONTAINER_SIZE:
        raise MalformedContainerError(
            f"Container needs at least {MIN_CONTAINER_SIZE} bytes, got {len(data)}."
        )
    header = parse(data)
    ciphertext = bytes(data[HEADER_SIZE:-TAG_SIZE])
    tag = bytes(data[-TAG_SIZE:])
    return header, ciphertext, tag


def seal(header: Header, ciphertext: bytes, passphrase: Secret) -> bytes:
    """Frame *ciphertext* under *header* and append its tag."""
    body = header.to_bytes() + bytes(ciphertext)
    return body + header.authenticator(passphrase, body)


def verify_container(data: bytes, passphrase: Secret) -> tuple[Header, bytes]:
    """Check the trailing tag; returns *(header, ciphertext)*.

    Raises :class:`~rncrypt.errors.AuthenticationError` if the tag does not match.
    """
    header, ciphertext, tag = split_container(data)
    header.authenticator.verify(passphrase, bytes(data[:-TAG_SIZE]), tag)
    return header, ciphertext
