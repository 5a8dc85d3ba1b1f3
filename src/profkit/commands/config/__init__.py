"""
Config document commands.

- config_manager: typer commands (init, convert, show, list-profiles,
  paths, log level, reset)
- settings: value prompting and display helpers

Usage:
    from profkit.commands.config import app
"""

from .config_manager import app
from .settings import get_credential_value, make_value_prompter, display_config

__all__ = [
    "app",
    "get_credential_value",
    "make_value_prompter",
    "display_config",
]
