"""
alixir-oss CLI

Implements CLI verbs with SigningCommands facade integration:
- presign: Generate a presigned URL for one object
- post-data: Generate form fields for a direct browser upload
- callback: Encode an upload callback header value
- sign-debug: Show the canonical string to sign for a request
- settings: Show effective (redacted) settings
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from .cli_context import CLIContext
from .commands import CommandsConfig, SigningCommands, run_and_exit
from .commands.printers import (
    print_callback, print_form_fields, print_settings, print_sign_debug, print_url
)

app = typer.Typer(name="alixir-oss", help="Aliyun OSS signing CLI")


@app.callback()
def main_options(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", envvar="ALIXIR_OSS_CONFIG", help="YAML settings file"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Aliyun OSS presigned URLs, post policies and callbacks."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = CLIContext(config_path=config, verbose=verbose)


def _context(ctx: typer.Context) -> CLIContext:
    if isinstance(ctx.obj, CLIContext):
        return ctx.obj
    return CLIContext.from_env()


@app.command()
def presign(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="HTTP method the URL grants (GET, PUT, HEAD)"),
    bucket: str = typer.Argument(..., help="Bucket name"),
    key: str = typer.Argument(..., help="Object key"),
    expires: Optional[int] = typer.Option(None, "--expires", help="Lifetime in seconds (default from settings)"),
    header: List[str] = typer.Option([], "--header", "-H", help="Signed header NAME:VALUE (repeatable)"),
    param: List[str] = typer.Option([], "--param", "-p", help="Extra query parameter KEY=VALUE (repeatable)"),
) -> None:
    """Generate a presigned URL."""

    def _presign() -> None:
        context = _context(ctx)
        cmds = SigningCommands(CommandsConfig(verbose=context.verbose), settings=context.settings)
        url = cmds.presign(method, bucket, key, expires=expires, headers=header, params=param)
        print_url(url)

    run_and_exit(_presign)


@app.command("post-data")
def post_data(
    ctx: typer.Context,
    bucket: str = typer.Argument(..., help="Bucket name"),
    key: str = typer.Argument(..., help="Object key; may contain ${filename}"),
    ttl: Optional[int] = typer.Option(None, "--ttl", help="Policy lifetime in seconds (default from settings)"),
    key_prefix: Optional[str] = typer.Option(None, "--key-prefix", help="Allow any key with this prefix"),
    min_size: Optional[int] = typer.Option(None, "--min-size", help="Minimum upload size in bytes"),
    max_size: Optional[int] = typer.Option(None, "--max-size", help="Maximum upload size in bytes"),
    callback_url: Optional[str] = typer.Option(None, "--callback-url", help="Upload callback URL"),
    callback_body: Optional[str] = typer.Option(None, "--callback-body", help="Upload callback body as JSON object"),
    success_status: Optional[int] = typer.Option(None, "--success-status", help="success_action_status form value"),
    json_output: bool = typer.Option(False, "--json", help="Print fields as JSON"),
) -> None:
    """Generate form fields for a direct browser upload."""

    def _post_data() -> None:
        context = _context(ctx)
        cmds = SigningCommands(CommandsConfig(json_output=json_output, verbose=context.verbose), settings=context.settings)
        fields = cmds.post_data(
            bucket, key,
            ttl=ttl,
            key_prefix=key_prefix,
            min_size=min_size,
            max_size=max_size,
            callback_url=callback_url,
            callback_body=callback_body,
            success_status=success_status,
        )
        print_form_fields(fields, as_json=cmds.cfg.json_output)

    run_and_exit(_post_data)


@app.command()
def callback(
    url: str = typer.Argument(..., help="Callback URL"),
    body: str = typer.Argument(..., help="Callback body as JSON object"),
    host: Optional[str] = typer.Option(None, "--host", help="Host header for the callback request"),
) -> None:
    """Encode an upload callback header value."""

    def _callback() -> None:
        cmds = SigningCommands(CommandsConfig())
        print_callback(cmds.callback(url, body, host=host))

    run_and_exit(_callback)


@app.command("sign-debug")
def sign_debug(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="HTTP method"),
    bucket: str = typer.Argument(..., help="Bucket name"),
    key: str = typer.Argument(..., help="Object key"),
    expires: Optional[int] = typer.Option(None, "--expires", help="Expires Unix timestamp"),
    header: List[str] = typer.Option([], "--header", "-H", help="Header NAME:VALUE (repeatable)"),
) -> None:
    """Show the canonical string to sign for a request."""

    def _sign_debug() -> None:
        context = _context(ctx)
        cmds = SigningCommands(CommandsConfig(verbose=context.verbose), settings=context.settings)
        result = cmds.sign_debug(method, bucket, key, expires=expires, headers=header)
        print_sign_debug(result, verbose=context.verbose)

    run_and_exit(_sign_debug)


@app.command("settings")
def show_settings(ctx: typer.Context) -> None:
    """Show effective settings with secrets redacted."""

    def _show() -> None:
        print_settings(_context(ctx).settings.redacted())

    run_and_exit(_show)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
