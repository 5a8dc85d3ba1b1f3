"""
Token login/logout commands.

Usage:
    from profkit.commands.auth import app
"""

from .auth_manager import app

__all__ = ["app"]
