"""
Error types raised by profkit.
"""

from typing import Any, Dict, Optional


class ImperativeError(Exception):
    """Raised for contract violations and failed validations.

    Carries a user-facing message and optional details that are logged but
    not printed.
    """

    def __init__(self, msg: str, additional_details: Optional[Dict[str, Any]] = None):
        super().__init__(msg)
        self.msg = msg
        self.additional_details = additional_details or {}

    def __str__(self) -> str:
        return self.msg


def expect_not_none(value: Any, message: str) -> None:
    """Raise ImperativeError when a required value was not supplied"""
    if value is None:
        raise ImperativeError(message)
