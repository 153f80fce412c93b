"""Tests for rncrypt.container."""

import os

import pytest

from rncrypt.container import MIN_CONTAINER_SIZE, seal, split_container, verify_container
from rncrypt.errors import AuthenticationError, MalformedContainerError, UnsupportedHeaderError
from rncrypt.header import Header


def test_seal_layout():
    h = Header.generate()
    ct = os.urandom(48)
    data = seal(h, ct, b"pw")
    assert data[:34] == h.to_bytes()
    assert data[34:-32] == ct
    assert data[-32:] == h.authenticator(b"pw", h.to_bytes() + ct)


def test_split_container():
    h = Header.generate()
    ct = os.urandom(32)
    header, ciphertext, tag = split_container(seal(h, ct, b"pw"))
    assert header == h
    assert ciphertext == ct
    assert len(tag) == 32


def test_verify_container_returns_header_and_ciphertext():
    h = Header.generate()
    ct = os.urandom(64)
    header, ciphertext = verify_container(seal(h, ct, "correct horse"), "correct horse")
    assert header == h
    assert ciphertext == ct


def test_verify_container_with_empty_ciphertext():
    h = Header.generate()
    data = seal(h, b"", b"")
    assert len(data) == MIN_CONTAINER_SIZE
    assert verify_container(data, b"") == (h, b"")


def test_wrong_passphrase_raises():
    data = seal(Header.generate(), os.urandom(16), b"correct")
    with pytest.raises(AuthenticationError):
        verify_container(data, b"wrong")


@pytest.mark.parametrize("index", [2, 20, 40, -1])
def test_tampered_byte_raises(index):
    data = bytearray(seal(Header.generate(), os.urandom(16), b"pw"))
    data[index] ^= 0x80
    with pytest.raises(AuthenticationError):
        verify_container(bytes(data), b"pw")


def test_short_container_raises():
    data = seal(Header.generate(), b"", b"pw")[:-1]
    with pytest.raises(MalformedContainerError, match="at least 66 bytes"):
        split_container(data)


def test_bad_version_raises_header_error():
    data = bytearray(seal(Header.generate(), b"", b"pw"))
    data[0] = 2
    with pytest.raises(UnsupportedHeaderError):
        verify_container(bytes(data), b"pw")
