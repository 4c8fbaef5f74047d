"""
settings.py

This module provides application configuration management for the tokensync
plugin.

Features:
- Centralized application configuration using Pydantic settings
- Constants for application-wide use

Usage:
Import appsettings for application configuration values.
"""

from pathlib import Path
from typing import Final
from appdirs import user_config_dir
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console

# Console instance for rich output
console: Final[Console] = Console()

# Set up the configuration directory using appdirs
CONFIG_DIR: Final[Path] = Path(user_config_dir("tokensync", ""))


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with TKS_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        libraryName: File name of the style library read and written by the plugin
        cleanPrefixLength: Characters stripped from token names when cleaning
    """

    beQuiet: bool = False
    libraryName: str = "styles.json"
    cleanPrefixLength: int = Field(default=2, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="TKS_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        extra="allow",  # Allow additional attributes not defined in the model
    )

    def library_pathDefault(self) -> Path:
        """
        Location of the style library used when none is given on the CLI.

        Returns:
            Path: CONFIG_DIR joined with the configured library name
        """
        return CONFIG_DIR / self.libraryName


# Create the application settings instance
appsettings: Final[App] = App()
