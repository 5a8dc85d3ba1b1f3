"""
Token authentication: session model, the login/logout driver and HTTP
token services.
"""

from .handler import AuthHandler, AuthService, AuthState, HandlerParameters
from .session import Session, SessionConfig, add_creds_or_prompt

__all__ = [
    "AuthHandler",
    "AuthService",
    "AuthState",
    "HandlerParameters",
    "Session",
    "SessionConfig",
    "add_creds_or_prompt",
]
