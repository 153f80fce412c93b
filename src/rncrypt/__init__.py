"""rncrypt: header, key derivation and authentication for RNCryptor v3 containers."""

from .auth import Authenticator, make_tag, verify_tag
from .container import seal, split_container, verify_container
from .context import EncryptionContext
from .errors import (
    AuthenticationError,
    CipherInitializationError,
    ContextClosedError,
    HeaderTooShortError,
    MalformedContainerError,
    MalformedHeaderError,
    RandomSourceError,
    RNCryptError,
    UnsupportedHeaderError,
)
from .header import Header, parse, serialize
from .kdf import derive_key

__version__ = "0.1.0"

__all__ = [
    "Authenticator",
    "AuthenticationError",
    "CipherInitializationError",
    "ContextClosedError",
    "EncryptionContext",
    "Header",
    "HeaderTooShortError",
    "MalformedContainerError",
    "MalformedHeaderError",
    "RandomSourceError",
    "RNCryptError",
    "UnsupportedHeaderError",
    "derive_key",
    "make_tag",
    "parse",
    "seal",
    "serialize",
    "split_container",
    "verify_container",
    "verify_tag",
]
