"""
Login/logout driver shared by every auth service.

An AuthHandler is given an AuthService describing one profile type's
service (how to build a session from arguments, how to log in and out) and
runs the common protocol around it:

    IDLE -> SESSION_BUILT -> TOKEN_ACQUIRED -> PROFILE_UPDATED   (login)
    IDLE -> SESSION_BUILT -> SESSION_REVOKED -> PROFILE_CLEARED  (logout)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, Tuple

from profkit.constants import LOGIN_ACTION, LOGOUT_ACTION
from profkit.errors import ImperativeError, expect_not_none
from profkit.logging import get_logger, log_authentication_event
from .session import (
    AUTH_TYPE_TOKEN,
    Prompter,
    Session,
    SessionConfig,
    add_creds_or_prompt,
    rich_prompter,
)


class AuthState(Enum):
    IDLE = "idle"
    SESSION_BUILT = "session_built"
    TOKEN_ACQUIRED = "token_acquired"
    PROFILE_UPDATED = "profile_updated"
    SESSION_REVOKED = "session_revoked"
    PROFILE_CLEARED = "profile_cleared"


@dataclass
class AuthService:
    """Capabilities of the service behind one profile type"""

    profile_type: str
    default_token_type: str
    create_session_cfg_from_args: Callable[[Dict[str, Any]], SessionConfig]
    do_login: Callable[[Session], Awaitable[str]]
    do_logout: Callable[[Session], Awaitable[None]]
    service_description: Optional[str] = None


class ProfileStoreLike(Protocol):
    async def get_meta(self, profile_type: str, strict: bool = True) -> Any: ...

    async def update(self, profile_type: str, name: str, args: Dict[str, Any], merge: bool = True) -> None: ...

    async def save(self, name: str, profile_type: str, profile: Dict[str, Any], overwrite: bool = False) -> None: ...


class ResponseLike(Protocol):
    def log(self, message: str) -> None: ...


@dataclass
class HandlerParameters:
    """Everything a login or logout invocation needs"""

    action: str
    profiles: ProfileStoreLike
    response: ResponseLike
    arguments: Dict[str, Any] = field(default_factory=dict)


class AuthHandler:
    def __init__(self, service: AuthService, prompter: Optional[Prompter] = rich_prompter):
        self.service = service
        self.prompter = prompter
        self.session: Optional[Session] = None
        self.state = AuthState.IDLE
        self.logger = get_logger("profkit.auth.handler")

    async def process(self, params: HandlerParameters) -> None:
        """
        Run the login or logout protocol selected by ``params.action``.

        Raises:
            ImperativeError: The action is neither login nor logout
        """
        if params.action == LOGIN_ACTION:
            await self._process_login(params)
        elif params.action == LOGOUT_ACTION:
            await self._process_logout(params)
        else:
            raise ImperativeError(
                f'The group name "{params.action}" was passed to the AuthHandler, but it is not valid.'
            )

    def get_prompt_params(self) -> Tuple[Dict[str, Any], Callable[[Session], Awaitable[str]]]:
        """Options for adding connection properties and the login coroutine,
        used when secure config values are filled in from a fresh token."""
        options = {
            "default_token_type": self.service.default_token_type,
            "service_description": self.service.service_description,
        }
        return options, self.service.do_login

    async def _process_login(self, params: HandlerParameters) -> None:
        service = self.service
        args = params.arguments
        loaded_profile = await params.profiles.get_meta(service.profile_type, strict=False)

        session_cfg = service.create_session_cfg_from_args(args)
        session_cfg = await add_creds_or_prompt(
            session_cfg,
            args,
            request_token=True,
            default_token_type=service.default_token_type,
            prompter=self.prompter,
            service_description=service.service_description,
        )
        self.session = Session(session_cfg)
        self.state = AuthState.SESSION_BUILT

        try:
            token_value = await service.do_login(self.session)
        except Exception:
            log_authentication_event(f"login:{service.profile_type}", False,
                                     {"host": session_cfg.hostname})
            raise
        self.state = AuthState.TOKEN_ACQUIRED
        log_authentication_event(f"login:{service.profile_type}", True,
                                 {"host": session_cfg.hostname, "tokenType": session_cfg.token_type})

        show_token = bool(args.get("show_token"))
        if loaded_profile.name is not None and not show_token:
            await params.profiles.update(
                profile_type=service.profile_type,
                name=loaded_profile.name,
                args={
                    "token-type": self.session.config.token_type,
                    "token-value": token_value,
                },
                merge=True,
            )
            self.state = AuthState.PROFILE_UPDATED
            self.logger.info(f"Stored token in profile '{loaded_profile.name}'")

        params.response.log("Login successful.")

        if show_token:
            params.response.log(
                f"\nReceived a token of type = {self.session.config.token_type}.\n"
                "The following token was retrieved and will not be stored in your profile:\n"
                f"{token_value}"
            )

    async def _process_logout(self, params: HandlerParameters) -> None:
        service = self.service
        args = params.arguments
        loaded_profile = await params.profiles.get_meta(service.profile_type, strict=False)

        session_cfg = service.create_session_cfg_from_args(args)

        expect_not_none(args.get("token_type"), "Token type not supplied, but is required for logout.")
        expect_not_none(args.get("token_value"), "Token value not supplied, but is required for logout.")
        expect_not_none(args.get("host"), "Host not supplied, but is required for logout.")
        expect_not_none(args.get("port"), "Port not supplied, but is required for logout.")

        self.session = Session(session_cfg)
        self.state = AuthState.SESSION_BUILT

        self.session.config.type = AUTH_TYPE_TOKEN
        self.session.config.token_type = args["token_type"]
        self.session.config.token_value = args["token_value"]

        try:
            await service.do_logout(self.session)
        except Exception:
            log_authentication_event(f"logout:{service.profile_type}", False,
                                     {"host": session_cfg.hostname})
            raise
        self.state = AuthState.SESSION_REVOKED
        log_authentication_event(f"logout:{service.profile_type}", True,
                                 {"host": session_cfg.hostname})

        # a token passed on the command line may belong to another identity
        if (
            loaded_profile.name is not None
            and args["token_value"] == loaded_profile.profile.get("tokenValue")
        ):
            profile = dict(loaded_profile.profile)
            profile["tokenType"] = None
            profile["tokenValue"] = None
            await params.profiles.save(
                name=loaded_profile.name,
                profile_type=loaded_profile.type,
                profile=profile,
                overwrite=True,
            )
            self.state = AuthState.PROFILE_CLEARED
            self.logger.info(f"Removed token from profile '{loaded_profile.name}'")

        self.session.reset_to_basic()
        params.response.log("Logout successful.")
