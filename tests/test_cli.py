"""Tests for rncrypt.cli."""

import json

from typer.testing import CliRunner

from rncrypt.cli import app
from rncrypt.container import seal
from rncrypt.header import Header, parse
from rncrypt.kdf import derive_key

runner = CliRunner()


def _header() -> Header:
    return Header(
        encryption_salt=bytes(range(8)),
        hmac_salt=bytes(range(8, 16)),
        iv=bytes(range(16)),
    )


def test_header_prints_parsable_hex():
    result = runner.invoke(app, ["header"])
    assert result.exit_code == 0
    h = parse(bytes.fromhex(result.stdout.strip()))
    assert h.version == 3


def test_header_json():
    result = runner.invoke(app, ["header", "--json"])
    assert result.exit_code == 0
    fields = json.loads(result.stdout)
    assert fields["version"] == 3
    assert fields["options"] == 1
    assert len(bytes.fromhex(fields["hex"])) == 34


def test_inspect_shows_fields():
    h = _header()
    result = runner.invoke(app, ["inspect", h.to_bytes().hex()])
    assert result.exit_code == 0
    assert h.iv.hex() in result.stdout
    assert h.hmac_salt.hex() in result.stdout


def test_inspect_rejects_short_header():
    result = runner.invoke(app, ["inspect", "0301"])
    assert result.exit_code == 1


def test_inspect_rejects_bad_hex():
    result = runner.invoke(app, ["inspect", "zz"])
    assert result.exit_code == 1


def test_derive_uses_env_passphrase():
    salt = bytes(range(8))
    result = runner.invoke(app, ["derive", salt.hex()], env={"RNCRYPT_PASSPHRASE": "correct horse"})
    assert result.exit_code == 0
    assert result.stdout.strip() == derive_key(b"correct horse", salt).hex()


def test_tag_over_file(tmp_path):
    h = _header()
    payload = tmp_path / "ct.bin"
    payload.write_bytes(b"ciphertext")
    result = runner.invoke(app, ["tag", h.to_bytes().hex(), str(payload), "--passphrase", "pw"])
    assert result.exit_code == 0
    assert result.stdout.strip() == h.authenticator(b"pw", h.to_bytes() + b"ciphertext").hex()


def test_verify_ok(tmp_path):
    path = tmp_path / "msg.rnc"
    path.write_bytes(seal(Header.generate(), b"\x00" * 32, b"pw"))
    result = runner.invoke(app, ["verify", str(path), "-p", "pw"])
    assert result.exit_code == 0
    assert "Tag OK" in result.stdout


def test_verify_wrong_passphrase(tmp_path):
    path = tmp_path / "msg.rnc"
    path.write_bytes(seal(Header.generate(), b"\x00" * 32, b"pw"))
    result = runner.invoke(app, ["verify", str(path), "-p", "nope"])
    assert result.exit_code == 1


def test_verify_missing_file(tmp_path):
    result = runner.invoke(app, ["verify", str(tmp_path / "missing.rnc"), "-p", "pw"])
    assert result.exit_code == 1


def test_info():
    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0
    assert "34 bytes" in result.stdout


def test_verify_directory_exits_cleanly(tmp_path):
    result = runner.invoke(app, ["verify", str(tmp_path), "-p", "pw"])
    assert result.exit_code == 1
    assert not isinstance(result.exception, IsADirectoryError)
