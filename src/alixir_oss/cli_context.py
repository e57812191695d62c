"""
CLI Context for managing application dependencies.

Provides a clean way to manage CLI-level dependencies like settings,
avoiding global state and enabling proper dependency injection.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .settings import Settings, create_settings_from_env, read_settings_file


@dataclass
class CLIContext:
    """
    Shared context for CLI commands.

    Holds the options given before the command name and loads settings
    lazily, so commands that fail argument parsing never touch configuration.
    """
    config_path: Optional[Path] = None
    verbose: bool = False
    _settings: Optional[Settings] = None

    @classmethod
    def from_env(cls) -> CLIContext:
        """Create CLI context that reads settings from environment variables only."""
        return cls()

    @property
    def settings(self) -> Settings:
        """
        Get or load settings (lazy initialization).

        Values from the YAML config file, when given, are overridden by
        environment variables.
        """
        if self._settings is None:
            base = read_settings_file(self.config_path) if self.config_path else None
            self._settings = create_settings_from_env(base)
        return self._settings
