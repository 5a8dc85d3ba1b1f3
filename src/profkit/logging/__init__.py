"""
profkit logging package.

Wraps the standard library logging module with a rotating log file in a
platform-specific directory, console echo for warnings and errors, and
sanitization of credentials and tokens before anything is written.

Structured helpers record HTTP calls made during login/logout, conversion
steps and authentication outcomes.
"""

from .logger import (
    get_logger,
    setup_logging,
    log_api_call,
    log_transaction,
    log_authentication_event,
)
from .config import LogConfig, LogLevel, get_log_directory
from .utils import sanitize_data

__all__ = [
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_transaction",
    "log_authentication_event",
    "LogLevel",
    "LogConfig",
    "sanitize_data",
    "get_log_directory",
]
