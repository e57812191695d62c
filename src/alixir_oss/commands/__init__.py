"""
Commands package - Application service layer between CLI and signing.

This package provides the SigningCommands facade that orchestrates CLI
commands, centralizes error mapping, and handles output formatting while
keeping CLI commands thin and testable.
"""
from .facade import CommandsConfig, SigningCommands
from .mappers import exit_code_for, run_and_exit

__all__ = ["SigningCommands", "CommandsConfig", "exit_code_for", "run_and_exit"]
