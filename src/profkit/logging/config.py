"""
Logging configuration for profkit.

Resolves the per-platform log directory and holds the tunables used by
setup_logging().
"""

import os
import platform
from pathlib import Path
from enum import Enum
from typing import Optional
from dataclasses import dataclass
from profkit.constants import LOG_FILE_NAME, LOG_RETENTION_DAYS, SENSITIVE_KEYS


class LogLevel(Enum):
    """Log levels accepted by `profkit config set-log-level`"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class LogConfig:
    """Settings for the profkit log handlers"""

    log_filename: str = f"{LOG_FILE_NAME}.log"
    log_retention_days: int = LOG_RETENTION_DAYS

    default_level: LogLevel = LogLevel.INFO
    console_level: LogLevel = LogLevel.WARNING

    include_timestamps: bool = True
    include_process_info: bool = False

    # Record HTTP calls made by auth services
    log_api_calls: bool = True

    sanitize_sensitive_data: bool = True
    sensitive_keys: tuple = SENSITIVE_KEYS


def get_log_directory() -> Path:
    """
    Get the log directory for the current operating system.

    Falls back to ./logs when the platform directory cannot be created.
    """
    system = platform.system().lower()

    if system == "windows":
        base_dir = Path(os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA", ""))
        if not base_dir.exists():
            base_dir = Path.home()
        log_dir = base_dir / LOG_FILE_NAME / "logs"
    elif system == "darwin":
        log_dir = Path.home() / "Library" / "Logs" / LOG_FILE_NAME
    else:
        xdg_state_home = os.environ.get("XDG_STATE_HOME")
        if xdg_state_home:
            base_dir = Path(xdg_state_home)
        else:
            base_dir = Path.home() / ".local" / "state"
        log_dir = base_dir / LOG_FILE_NAME / "logs"

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir
    except OSError:
        fallback_dir = Path.cwd() / "logs"
        fallback_dir.mkdir(exist_ok=True)
        return fallback_dir


def get_log_file_path(config: Optional[LogConfig] = None) -> Path:
    """Full path of the active log file"""
    if config is None:
        config = LogConfig()
    return get_log_directory() / config.log_filename
