"""
Helpers for masking secrets and pruning old log files.
"""

import re
from typing import Any, Dict, List, Tuple
from pathlib import Path
from datetime import datetime, timedelta
from profkit.constants import LOG_FILE_NAME


def sanitize_data(data: Any, sensitive_keys: Tuple[str, ...]) -> Any:
    """
    Recursively mask sensitive values in dicts, lists and strings.

    Args:
        data: Value to sanitize
        sensitive_keys: Key fragments that mark a value as sensitive

    Returns:
        A sanitized copy of the value
    """
    if isinstance(data, dict):
        return sanitize_dict(data, sensitive_keys)
    if isinstance(data, list):
        return sanitize_list(data, sensitive_keys)
    if isinstance(data, str):
        return sanitize_string(data, sensitive_keys)
    return data


def _is_sensitive_key(key: str, sensitive_keys: Tuple[str, ...]) -> bool:
    key_lower = str(key).lower()
    return any(sensitive_key.lower() in key_lower for sensitive_key in sensitive_keys)


def sanitize_dict(data: Dict[str, Any], sensitive_keys: Tuple[str, ...]) -> Dict[str, Any]:
    """Mask values whose key matches a sensitive key fragment"""
    sanitized = {}
    for key, value in data.items():
        if _is_sensitive_key(key, sensitive_keys):
            if isinstance(value, str) and len(value) > 8:
                sanitized[key] = f"{value[:4]}...{value[-4:]}"
            else:
                sanitized[key] = "***"
        else:
            sanitized[key] = sanitize_data(value, sensitive_keys)
    return sanitized


def sanitize_list(data: List[Any], sensitive_keys: Tuple[str, ...]) -> List[Any]:
    """Sanitize every item of a list"""
    return [sanitize_data(item, sensitive_keys) for item in data]


_STRING_PATTERNS = [
    (r"Bearer\s+[A-Za-z0-9\-._~+/]+=*", "Bearer ***"),
    (r"Basic\s+[A-Za-z0-9+/]+=*", "Basic ***"),
    (r"([?&](?:token|password|secret)=)[^&\s]+", r"\1***"),
    (r"eyJ[A-Za-z0-9\-_]+=*\.eyJ[A-Za-z0-9\-_]+=*\.[A-Za-z0-9\-_.+/]*=*", "***JWT***"),
]


def sanitize_string(data: str, sensitive_keys: Tuple[str, ...]) -> str:
    """Mask tokens embedded in free text such as URLs or headers"""
    sanitized = data
    for pattern, replacement in _STRING_PATTERNS:
        sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)
    return sanitized


def cleanup_old_logs(log_directory: Path, retention_days: int = 30) -> int:
    """
    Delete rotated log files older than the retention window.

    Returns:
        int: Number of files removed
    """
    if not log_directory.exists():
        return 0

    cutoff = (datetime.now() - timedelta(days=retention_days)).timestamp()
    removed = 0
    for log_file in log_directory.glob(f"{LOG_FILE_NAME}.log.*"):
        try:
            if log_file.stat().st_mtime < cutoff:
                log_file.unlink()
                removed += 1
        except OSError:
            continue
    return removed
