"""rncrypt command-line interface.

Commands
--------
  header    Generate a fresh header and print it as hex
  inspect   Decode a hex header into its fields
  derive    Derive the 32-byte key for a salt
  tag       Compute the HMAC tag over header + payload
  verify    Check the trailing tag of a container file
  info      Show version and format constants

The passphrase is taken from --passphrase, then $RNCRYPT_PASSPHRASE, then an
interactive prompt.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.theme import Theme

from . import __version__
from .auth import TAG_SIZE
from .container import MIN_CONTAINER_SIZE, verify_container
from .errors import RNCryptError
from .header import BLOCK_SIZE, FORMAT_VERSION, HEADER_SIZE, Header, parse
from .kdf import KEY_SIZE, PBKDF2_ITERATIONS, SALT_SIZE, derive_key

# ---------------------------------------------------------------------------
# App & consoles
# ---------------------------------------------------------------------------

_THEME = Theme(
    {
        "success": "bold green",
        "warning": "bold yellow",
        "danger": "bold red",
        "muted": "dim",
        "label": "cyan",
        "highlight": "bold white",
    }
)

console = Console(theme=_THEME)
err = Console(stderr=True, theme=_THEME)

app = typer.Typer(
    name="rncrypt",
    help="[bold cyan]rncrypt[/bold cyan]: RNCryptor v3 header and key tooling.",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
)

PassphraseOption = Annotated[
    Optional[str],
    typer.Option(
        "--passphrase",
        "-p",
        envvar="RNCRYPT_PASSPHRASE",
        help="Passphrase (falls back to a prompt).",
        show_default=False,
    ),
]

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


@app.callback()
def _main(
    verbose: Annotated[bool, typer.Option("--verbose", help="Log debug output to stderr.")] = False,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err, show_path=False)],
        )


def _passphrase(value: Optional[str]) -> str:
    if value is not None:
        return value
    return Prompt.ask("Passphrase", password=True, console=console)


def _unhex(value: str, what: str) -> bytes:
    try:
        return bytes.fromhex(value.strip())
    except ValueError as exc:
        err.print(f"[danger]Invalid hex for {what}.[/danger]")
        raise typer.Exit(1) from exc


def _parse_header(value: str) -> Header:
    try:
        return parse(_unhex(value, "header"))
    except RNCryptError as exc:
        err.print(f"[danger]{exc}[/danger]")
        raise typer.Exit(1) from exc


def _header_fields(header: Header) -> dict[str, str | int]:
    return {
        "version": header.version,
        "options": header.options,
        "encryption_salt": header.encryption_salt.hex(),
        "hmac_salt": header.hmac_salt.hex(),
        "iv": header.iv.hex(),
    }


def _render_header(header: Header, title: str = "Header") -> None:
    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("Field", style="label")
    table.add_column("Value", style="highlight")
    for name, value in _header_fields(header).items():
        table.add_row(name.replace("_", " ").title(), str(value))
    console.print(Panel(table, title=f"[bold cyan]{title}[/bold cyan]", border_style="cyan", expand=False))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def header(
    as_json: Annotated[bool, typer.Option("--json", help="Print the fields as JSON.")] = False,
) -> None:
    """Generate a fresh header and print it as hex."""
    try:
        hdr = Header.generate()
    except RNCryptError as exc:
        err.print(f"[danger]{exc}[/danger]")
        raise typer.Exit(1) from exc

    if as_json:
        fields = _header_fields(hdr)
        fields["hex"] = hdr.to_bytes().hex()
        console.print_json(json.dumps(fields))
    else:
        console.print(hdr.to_bytes().hex(), highlight=False, soft_wrap=True)


@app.command()
def inspect(
    header_hex: Annotated[str, typer.Argument(help="Header bytes in hex (at least 34 bytes).")],
) -> None:
    """Decode a hex header into its fields."""
    _render_header(_parse_header(header_hex))


@app.command()
def derive(
    salt_hex: Annotated[str, typer.Argument(help="Salt in hex.")],
    passphrase: PassphraseOption = None,
) -> None:
    """Derive the 32-byte key for a salt."""
    salt = _unhex(salt_hex, "salt")
    if len(salt) != SALT_SIZE:
        err.print(f"[warning]Salt is {len(salt)} bytes; containers use {SALT_SIZE}.[/warning]")
    console.print(derive_key(_passphrase(passphrase), salt).hex(), highlight=False, soft_wrap=True)


@app.command()
def tag(
    header_hex: Annotated[str, typer.Argument(help="Header bytes in hex.")],
    payload: Annotated[
        Optional[Path],
        typer.Argument(help="Ciphertext file (stdin when omitted).", show_default=False),
    ] = None,
    passphrase: PassphraseOption = None,
) -> None:
    """Compute the HMAC tag over header + payload."""
    hdr = _parse_header(header_hex)
    data = payload.read_bytes() if payload else sys.stdin.buffer.read()
    secret = _passphrase(passphrase)
    console.print(hdr.authenticator(secret, hdr.to_bytes() + data).hex(), highlight=False, soft_wrap=True)


@app.command()
def verify(
    container: Annotated[Path, typer.Argument(help="Container file.")],
    passphrase: PassphraseOption = None,
) -> None:
    """Check the trailing tag of a container file."""
    if not container.is_file():
        err.print(f"[danger]No such file:[/danger] {container}")
        raise typer.Exit(1)

    try:
        data = container.read_bytes()
    except OSError as exc:
        err.print(f"[danger]Cannot read {container}: {exc.strerror}[/danger]")
        raise typer.Exit(1) from exc

    try:
        hdr, ciphertext = verify_container(data, _passphrase(passphrase))
    except RNCryptError as exc:
        err.print(f"[danger]{exc}[/danger]")
        raise typer.Exit(1) from exc

    console.print(
        f"[success]Tag OK[/success] [muted]({len(ciphertext)} bytes of ciphertext)[/muted]"
    )
    _render_header(hdr, title=container.name)


@app.command()
def info() -> None:
    """Show version and format constants."""
    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Version", __version__)
    table.add_row("Format version", str(FORMAT_VERSION))
    table.add_row("Header size", f"{HEADER_SIZE} bytes")
    table.add_row("Salt size", f"{SALT_SIZE} bytes")
    table.add_row("Block size", f"{BLOCK_SIZE} bytes")
    table.add_row("Key size", f"{KEY_SIZE} bytes (AES-256)")
    table.add_row("Tag size", f"{TAG_SIZE} bytes (HMAC-SHA256)")
    table.add_row("KDF", f"PBKDF2-HMAC-SHA1, {PBKDF2_ITERATIONS:,} iterations")
    table.add_row("Min container", f"{MIN_CONTAINER_SIZE} bytes")

    console.print(Panel(table, title="[bold cyan]rncrypt info[/bold cyan]", border_style="cyan", expand=False))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    app()


if __name__ == "__main__":
    main()
