"""
Human-readable output formatting.

Centralizes all CLI output formatting. Artifacts that are meant to be copied
(URLs, encoded callbacks) are echoed raw; structured results are rendered
as rich tables or as JSON.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping

import typer
from rich.console import Console
from rich.table import Table

from ..signing import SignResult

_console = Console()


def print_url(url: str) -> None:
    """Print a presigned URL on a line of its own."""
    typer.echo(url)


def print_form_fields(fields: Mapping[str, str], as_json: bool = False) -> None:
    """
    Print post-object form fields.

    Args:
        fields: Form field name -> value
        as_json: Emit a JSON object instead of a table
    """
    if as_json:
        typer.echo(json.dumps(dict(fields), indent=2))
        return

    table = Table(title="Form fields")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="yellow", overflow="fold")
    for name, value in fields.items():
        table.add_row(name, value)
    _console.print(table)


def print_callback(value: str) -> None:
    """Print an encoded callback header value."""
    typer.echo(value)


def print_sign_debug(result: SignResult, verbose: bool = False) -> None:
    """
    Print the string to sign, one escaped line per canonical field.

    The signature itself is only shown in verbose mode.
    """
    _console.print("[bold]String to sign:[/]")
    for line in result.string_to_sign.split("\n"):
        typer.echo(f"  {line!r}")
    if verbose:
        _console.print(f"[bold]Signature:[/] {result.signature}")


def print_settings(settings: Dict[str, Any]) -> None:
    """Print redacted settings."""
    table = Table(title="Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in settings.items():
        table.add_row(key, "" if value is None else str(value))
    _console.print(table)
