"""Exception hierarchy for rncrypt."""

from __future__ import annotations

__all__ = [
    "RNCryptError",
    "RandomSourceError",
    "CipherInitializationError",
    "MalformedHeaderError",
    "HeaderTooShortError",
    "UnsupportedHeaderError",
    "MalformedContainerError",
    "AuthenticationError",
    "ContextClosedError",
]


class RNCryptError(Exception):
    """Base class for every error raised by rncrypt."""


class RandomSourceError(RNCryptError):
    """Raised when the random source fails or returns too few bytes."""


class CipherInitializationError(RNCryptError):
    """Raised when the block cipher rejects the derived key."""


class MalformedHeaderError(RNCryptError):
    """Raised when bytes cannot be read back as a header."""


class HeaderTooShortError(MalformedHeaderError):
    """Raised when fewer than ``HEADER_SIZE`` bytes are available."""


class UnsupportedHeaderError(MalformedHeaderError):
    """Raised for a version or options byte this library does not handle."""


class MalformedContainerError(RNCryptError):
    """Raised when a container is too short to hold a header and a tag."""


class AuthenticationError(RNCryptError):
    """Raised when a container's tag does not match (wrong passphrase or tampered data)."""


class ContextClosedError(RNCryptError):
    """Raised when an :class:`~rncrypt.context.EncryptionContext` is used after close."""
