"""
Configuration management commands.

This module contains the typer commands that build, convert and display
the v2 config document.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from profkit.config.builder import ConfigBuilder
from profkit.config.converter import LegacyProfileConverter
from profkit.config.profile_types import default_app_config
from profkit.config.vault import CredentialVault, secure_config_values
from profkit.logging import LogLevel, get_logger, setup_logging
from profkit.logging.config import get_log_file_path
from profkit.utils.config_store import ConfigStore
from profkit.utils.console import console, create_table, error, info, success, warning
from .settings import display_config, display_conversion_result, make_value_prompter

app = typer.Typer(help="Manage the profkit config document")
config_store = ConfigStore()

# settings `reset` can clear, with the value that applies once cleared
RESETTABLE_SETTINGS = {"log_level": LogLevel.INFO.value}


def _refuse_overwrite(overwrite: bool, dry_run: bool) -> None:
    if config_store.config_exists() and not overwrite and not dry_run:
        error(f"A config file already exists at {config_store.config_file}")
        info("Use --overwrite to replace it or --dry-run to preview the result")
        raise typer.Exit(1)


@app.command()
def init(
    prompt: bool = typer.Option(
        True, "--prompt/--no-prompt", help="Prompt for base profile values"
    ),
    overwrite: bool = typer.Option(
        False, "--overwrite", help="Replace an existing config file"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Display the result without saving it"
    ),
):
    """Initialize a config file from the declared profile types"""
    logger = get_logger("profkit.commands.config.init")
    _refuse_overwrite(overwrite, dry_run)

    get_value_back = make_value_prompter() if prompt else None
    document = asyncio.run(
        ConfigBuilder.build(
            default_app_config(),
            populate_properties=True,
            get_value_back=get_value_back,
        )
    )

    if dry_run:
        console.print_json(json.dumps(document.to_dict()))
        return

    try:
        moved = asyncio.run(secure_config_values(document, CredentialVault()))
        path = config_store.save_config(document)
    except Exception as e:
        logger.error(f"Failed to save config: {e}")
        error(f"Failed to save config: {e}")
        raise typer.Exit(1)

    logger.info(f"Initialized config at {path} ({moved} secure value(s) stored)")
    success(f"Saved config to {path}")


@app.command()
def convert(
    profiles_dir: Optional[Path] = typer.Option(
        None, "--profiles-dir", help="Root directory of the v1 profiles"
    ),
    overwrite: bool = typer.Option(
        False, "--overwrite", help="Replace an existing config file"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Display the result without saving it"
    ),
):
    """Convert v1 profiles into a config file"""
    logger = get_logger("profkit.commands.config.convert")
    _refuse_overwrite(overwrite, dry_run)

    root = profiles_dir or config_store.profiles_dir
    if not root.is_dir():
        error(f"No v1 profiles found at {root}")
        raise typer.Exit(1)

    result = asyncio.run(LegacyProfileConverter().convert(root))
    display_conversion_result(result)

    if result.converted_count == 0:
        warning("No profiles were converted")
        raise typer.Exit(1)

    if dry_run:
        console.print_json(json.dumps(result.config.to_dict()))
        return

    try:
        asyncio.run(secure_config_values(result.config, CredentialVault()))
        path = config_store.save_config(result.config)
    except Exception as e:
        logger.error(f"Failed to save converted config: {e}")
        error(f"Failed to save converted config: {e}")
        raise typer.Exit(1)

    success(f"Converted {result.converted_count} profile(s) into {path}")
    if result.profiles_failed:
        warning(f"{len(result.profiles_failed)} item(s) could not be converted")


@app.command("show")
def show():
    """Show the current config document"""
    display_config(config_store.load_config(), f"Config '{config_store.config_file}'")


@app.command("list-profiles")
def list_profiles():
    """List the profiles of the config document with their types"""
    document = config_store.load_config()
    if document is None or not document.profiles:
        warning("No profiles found. Run 'profkit config init' or 'profkit config convert'")
        return

    default_keys = set(document.defaults.values())
    rows = [
        (key, profile.type, "*" if key in default_keys else "")
        for key, profile in document.profiles.items()
    ]
    console.print(create_table("Profiles", ["Profile", "Type", "Default"], rows))


@app.command("paths")
def paths():
    """Show where profkit reads and writes its files"""
    rows = [
        ("Config file", str(config_store.config_file)),
        ("Legacy profiles", str(config_store.profiles_dir)),
        ("Settings", str(config_store.settings_file)),
        ("Log file", str(get_log_file_path())),
    ]
    console.print(create_table("profkit paths", ["Item", "Path"], rows))


@app.command("set-log-level")
def set_log_level(
    level: str = typer.Argument(..., help="Log level (DEBUG, INFO, WARNING, ERROR)")
) -> None:
    """Set the logging level for profkit"""
    setup_logging()
    logger = get_logger("profkit.config.log_level")

    level_upper = level.upper()
    valid_levels = [lev.value for lev in LogLevel]
    if level_upper not in valid_levels:
        error(f"Invalid log level '{level}'. Valid levels: {', '.join(valid_levels)}")
        raise typer.Exit(1)

    try:
        config_store.save_setting("log_level", level_upper)
    except OSError as e:
        logger.error(f"Failed to set log level: {str(e)}")
        error(f"Failed to set log level: {str(e)}")
        raise typer.Exit(1)

    success(f"Log level set to {level_upper}")
    info("The new log level will take effect on the next profkit command.")
    logger.info(f"Log level changed to {level_upper}")


@app.command("get-log-level")
def get_log_level() -> None:
    """Get the current logging level for profkit"""
    current_level = config_store.get_settings().get("log_level", "INFO")
    info(f"Current log level: {current_level}")


@app.command("reset")
def reset(
    setting: str = typer.Argument(..., help=f"Setting to restore ({', '.join(RESETTABLE_SETTINGS)})")
) -> None:
    """Restore a CLI setting to its default value"""
    if setting not in RESETTABLE_SETTINGS:
        error(f"Unknown setting '{setting}'. Valid settings: {', '.join(RESETTABLE_SETTINGS)}")
        raise typer.Exit(1)

    if config_store.reset_setting(setting):
        get_logger("profkit.config.reset").info(f"Reset setting {setting}")
        success(f"{setting} reset to its default ({RESETTABLE_SETTINGS[setting]})")
    else:
        info(f"{setting} already uses its default ({RESETTABLE_SETTINGS[setting]})")
