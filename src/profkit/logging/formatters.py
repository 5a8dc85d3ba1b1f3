"""
Formatters for profkit log records.
"""

import logging
from .utils import sanitize_data, sanitize_string
from profkit.constants import SENSITIVE_KEYS


class ProfkitFormatter(logging.Formatter):
    """
    Plain text formatter that masks credentials in messages and arguments.

    Dict and list arguments are sanitized key by key; string messages are
    scrubbed for bearer tokens, JWTs and token query parameters.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        include_process_info: bool = False,
        sanitize_sensitive: bool = True,
        sensitive_keys: tuple = None,
    ):
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        fmt_parts = []
        if include_timestamps:
            fmt_parts.append("%(asctime)s")
        fmt_parts.extend(["%(levelname)s", "[%(name)s]", "%(message)s"])
        if include_process_info:
            fmt_parts.insert(-1, "[PID:%(process)d]")
        super().__init__(fmt=" ".join(fmt_parts), datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        if self.sanitize_sensitive:
            if isinstance(record.msg, (dict, list)):
                record.msg = sanitize_data(record.msg, self.sensitive_keys)
            elif isinstance(record.msg, str):
                record.msg = sanitize_string(record.msg, self.sensitive_keys)
            if isinstance(record.args, (tuple, list)):
                record.args = tuple(
                    sanitize_data(arg, self.sensitive_keys)
                    if isinstance(arg, (dict, list))
                    else arg
                    for arg in record.args
                )
        return super().format(record)


class APICallFormatter(logging.Formatter):
    """
    One-line formatter for records produced by log_api_call().

    Example: 2026-01-02 10:11:12 DEBUG [profkit.api] POST https://host/login -> 204 (88.1ms)
    """

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        method = getattr(record, "api_method", "UNKNOWN")
        url = sanitize_string(getattr(record, "api_url", ""), SENSITIVE_KEYS)
        status = getattr(record, "api_status", None) or "---"
        duration = round(getattr(record, "api_duration", 0) * 1000, 2)

        lines = [
            f"{timestamp} {record.levelname} [{record.name}] "
            f"{method} {url} -> {status} ({duration}ms)"
        ]
        api_error = getattr(record, "api_error", None)
        if api_error:
            lines.append(f"    Error: {api_error}")
        return "\n".join(lines)
