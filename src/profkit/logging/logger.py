"""
Main logging module for profkit.

Configures the "profkit" logger hierarchy once per process and provides
structured helpers for API calls, conversion transactions and
authentication events.
"""

import logging
import logging.handlers
import sys
from typing import Optional, Dict, Any

from .config import LogConfig, LogLevel, get_log_file_path
from .formatters import ProfkitFormatter, APICallFormatter
from .utils import cleanup_old_logs, sanitize_data


_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False
_log_config: Optional[LogConfig] = None


def _configured_level() -> Optional[LogLevel]:
    """Log level stored by `profkit config set-log-level`, if any"""
    from profkit.utils.config_store import ConfigStore

    level = ConfigStore().get_settings().get("log_level")
    if level and level in [lev.value for lev in LogLevel]:
        return LogLevel(level)
    return None


def _rotating_handler(log_file_path, config: LogConfig) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file_path,
        when="midnight",
        interval=1,
        backupCount=config.log_retention_days,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    return handler


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Set up the profkit logging system.

    Args:
        config: LogConfig instance, uses default if None
        force_reconfigure: Force reconfiguration even if already set up
    """
    global _logging_configured, _log_config

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = LogConfig()
        try:
            user_level = _configured_level()
        except (OSError, ValueError):
            user_level = None
        if user_level is not None:
            config.default_level = user_level

    _log_config = config
    log_file_path = get_log_file_path(config)

    root_logger = logging.getLogger("profkit")
    root_logger.setLevel(getattr(logging, config.default_level.value))
    root_logger.handlers.clear()

    file_handler = _rotating_handler(log_file_path, config)
    file_handler.setLevel(getattr(logging, config.default_level.value))
    file_handler.setFormatter(
        ProfkitFormatter(
            include_timestamps=config.include_timestamps,
            include_process_info=config.include_process_info,
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys,
        )
    )
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, config.console_level.value))
    console_handler.setFormatter(
        ProfkitFormatter(
            include_timestamps=False,
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys,
        )
    )
    root_logger.addHandler(console_handler)

    api_logger = logging.getLogger("profkit.api")
    api_logger.handlers.clear()
    api_logger.setLevel(logging.DEBUG)
    if config.log_api_calls:
        api_handler = _rotating_handler(log_file_path, config)
        api_handler.setLevel(logging.DEBUG)
        api_handler.setFormatter(APICallFormatter())
        api_logger.addHandler(api_handler)
    api_logger.propagate = False

    try:
        cleanup_old_logs(log_file_path.parent, config.log_retention_days)
    except OSError:
        pass

    _logging_configured = True

    get_logger("profkit.setup").debug(
        f"Logging initialized - File: {log_file_path}, "
        f"Level: {config.default_level.value}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g., 'profkit.config.converter')
    """
    if not _logging_configured:
        setup_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def log_api_call(
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration: Optional[float] = None,
    error: Optional[str] = None,
    logger_name: str = "profkit.api",
) -> None:
    """
    Log an HTTP call made by an auth service.

    Server errors and transport failures are logged as errors, 4xx as
    warnings, everything else at DEBUG.
    """
    logger = get_logger(logger_name)
    extra = {
        "api_method": method,
        "api_url": url,
        "api_status": status_code,
        "api_duration": duration or 0,
    }
    if error:
        extra["api_error"] = error

    if error or (status_code and status_code >= 500):
        logger.error("API call failed", extra=extra)
    elif status_code and 400 <= status_code < 500:
        logger.warning("API call client error", extra=extra)
    else:
        logger.debug("API call completed", extra=extra)


def log_transaction(
    operation: str,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "profkit.transaction",
) -> None:
    """Log a config build/convert step at DEBUG level with sanitized details"""
    logger = get_logger(logger_name)
    if details:
        from profkit.constants import SENSITIVE_KEYS
        details = sanitize_data(details, SENSITIVE_KEYS)
        logger.debug(f"Transaction: {operation} {details}")
    else:
        logger.debug(f"Transaction: {operation}")


def log_authentication_event(
    auth_type: str,
    success: bool,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "profkit.auth",
) -> None:
    """
    Log a login or logout outcome.

    Args:
        auth_type: Action and service, e.g. "login:zosmf"
        success: Whether the exchange succeeded
        details: Additional details, always sanitized
    """
    logger = get_logger(logger_name)
    suffix = ""
    if details:
        from profkit.constants import SENSITIVE_KEYS
        suffix = f" {sanitize_data(details, SENSITIVE_KEYS)}"

    if success:
        logger.info(f"Authentication successful: {auth_type}{suffix}")
    else:
        logger.error(f"Authentication failed: {auth_type}{suffix}")
