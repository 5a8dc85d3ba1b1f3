"""
Session model used by auth services.

A SessionConfig describes how to reach a service and which credentials to
present; a Session wraps one for the duration of a login or logout.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from rich.prompt import Prompt

from profkit.errors import ImperativeError

AUTH_TYPE_NONE = "none"
AUTH_TYPE_BASIC = "basic"
AUTH_TYPE_TOKEN = "token"

TOKEN_TYPE_JWT = "jwtToken"
TOKEN_TYPE_APIML = "apimlAuthenticationToken"

HTTPS_PROTOCOL = "https"

# (message, hide_input) -> answer
Prompter = Callable[[str, bool], Awaitable[str]]


@dataclass
class SessionConfig:
    hostname: Optional[str] = None
    port: Optional[int] = None
    protocol: str = HTTPS_PROTOCOL
    base_path: str = ""
    type: str = AUTH_TYPE_NONE
    user: Optional[str] = None
    password: Optional[str] = None
    token_type: Optional[str] = None
    token_value: Optional[str] = None
    reject_unauthorized: bool = True

    @classmethod
    def from_args(cls, args: Dict[str, Any]) -> "SessionConfig":
        """Connection fields taken from command arguments"""
        port = args.get("port")
        return cls(
            hostname=args.get("host"),
            port=int(port) if port is not None else None,
            protocol=args.get("protocol") or HTTPS_PROTOCOL,
            base_path=args.get("base_path") or "",
            reject_unauthorized=args.get("reject_unauthorized", True),
        )


class Session:
    """A live session built from a complete SessionConfig"""

    def __init__(self, config: SessionConfig):
        if not config.hostname:
            raise ImperativeError("Session requires a host name")
        self.config = config

    @property
    def base_url(self) -> str:
        url = f"{self.config.protocol}://{self.config.hostname}"
        if self.config.port:
            url += f":{self.config.port}"
        if self.config.base_path:
            url += "/" + self.config.base_path.strip("/")
        return url

    def reset_to_basic(self) -> None:
        self.config.type = AUTH_TYPE_BASIC
        self.config.token_type = None
        self.config.token_value = None


async def rich_prompter(message: str, hide_input: bool = False) -> str:
    """Ask on the terminal without blocking the event loop"""
    return await asyncio.to_thread(Prompt.ask, message, password=hide_input)


async def _value_or_prompt(
    current: Any, arg_value: Any, message: str, hide: bool, prompter: Optional[Prompter]
) -> Any:
    if current is not None:
        return current
    if arg_value is not None:
        return arg_value
    if prompter is None:
        return None
    answer = await prompter(message, hide)
    return answer or None


async def add_creds_or_prompt(
    session_cfg: SessionConfig,
    args: Dict[str, Any],
    request_token: bool = False,
    default_token_type: Optional[str] = None,
    prompter: Optional[Prompter] = rich_prompter,
    service_description: Optional[str] = None,
) -> SessionConfig:
    """
    Complete a session config with credentials.

    Values already on the config win over arguments, arguments win over
    prompting. When ``request_token`` is set the session is switched to
    token mode so the login exchange returns a token of
    ``args["token_type"]`` or ``default_token_type``.

    Raises:
        ImperativeError: A required value is still missing after prompting
    """
    service = service_description or "your service"

    session_cfg.hostname = await _value_or_prompt(
        session_cfg.hostname, args.get("host"), f"Enter the host name of {service}", False, prompter
    )
    port = await _value_or_prompt(
        session_cfg.port, args.get("port"), f"Enter the port number of {service}", False, prompter
    )
    session_cfg.port = int(port) if port is not None else None

    if args.get("token_value") is not None and not request_token:
        session_cfg.type = AUTH_TYPE_TOKEN
        session_cfg.token_type = args.get("token_type") or default_token_type
        session_cfg.token_value = args["token_value"]
        return session_cfg

    session_cfg.user = await _value_or_prompt(
        session_cfg.user, args.get("user"), f"Enter the user name for {service}", False, prompter
    )
    session_cfg.password = await _value_or_prompt(
        session_cfg.password, args.get("password"), f"Enter the password for {service}", True, prompter
    )

    for field_name, label in (("hostname", "host"), ("user", "user"), ("password", "password")):
        if getattr(session_cfg, field_name) is None:
            raise ImperativeError(f"No value was supplied for the required option '{label}'")

    if request_token:
        session_cfg.type = AUTH_TYPE_TOKEN
        session_cfg.token_type = args.get("token_type") or default_token_type
    else:
        session_cfg.type = AUTH_TYPE_BASIC
    return session_cfg
