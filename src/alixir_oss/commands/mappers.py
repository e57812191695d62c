"""
Error mapping and CLI utilities.

Provides centralized exception-to-exit-code mapping and CLI command wrappers
to ensure consistent error handling across all Typer commands.
"""
from __future__ import annotations

import typer
from typing import Callable, TypeVar

T = TypeVar('T')

EXIT_CODES = {
    "InvalidArgument": 2,
    "InvalidHeaderValue": 2,
    "InvalidCondition": 2,
    "ValidationError": 2,
    "ValueError": 2,
    "UnsupportedMethod": 4,
    "InvalidMethod": 4,
    "MissingCredentials": 5,
    "ExpirationInPast": 6,
    "UnsupportedBodyType": 7,
}

FALLBACK_EXIT_CODE = 1


def exit_code_for(exc: BaseException) -> int:
    """
    Map exception to standardized exit code.

    Returns:
    - 2: Invalid argument, header, condition or settings value
    - 4: Unsupported or disallowed HTTP method
    - 5: Missing credentials
    - 6: Expiration in the past
    - 7: Unsupported callback body
    - 1: Anything else
    """
    return EXIT_CODES.get(type(exc).__name__, FALLBACK_EXIT_CODE)


def run_and_exit(func: Callable[[], T]) -> T:
    """
    Unified error wrapper for CLI commands.

    Executes the given function, reports any exception on stderr and maps it
    to an exit code using typer.Exit, so CLI commands don't need individual
    try/except blocks.

    Raises:
        typer.Exit: With appropriate exit code if function raises exception
    """
    try:
        return func()
    except (typer.Exit, typer.BadParameter):
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=exit_code_for(e)) from e
