"""
Auth commands.

`profkit auth login <service>` obtains a token and stores it in the
service's profile; `profkit auth logout <service>` revokes it.
"""

import asyncio
from typing import Any, Dict, Optional

import typer

from profkit.auth.handler import AuthHandler, AuthService, HandlerParameters
from profkit.auth.http_service import AUTH_SERVICES
from profkit.config.profile_store import ProfileStore
from profkit.config.vault import CredentialVault
from profkit.constants import LOGIN_ACTION, LOGOUT_ACTION
from profkit.errors import ImperativeError
from profkit.logging import get_logger
from profkit.utils.config_store import ConfigStore
from profkit.utils.console import ConsoleResponse, error

app = typer.Typer(help="Log in to and out of token-based services")
config_store = ConfigStore()

SERVICE_HELP = f"Service to authenticate with ({', '.join(AUTH_SERVICES)})"

# profile property -> command argument filled in when the flag is omitted
PROFILE_ARGUMENTS = {
    LOGIN_ACTION: {"host": "host", "port": "port", "user": "user", "password": "password",
                   "tokenType": "token_type"},
    LOGOUT_ACTION: {"host": "host", "port": "port", "tokenType": "token_type",
                    "tokenValue": "token_value"},
}


async def _merge_profile_arguments(
    action: str, profiles: ProfileStore, profile_type: str, arguments: Dict[str, Any]
) -> Dict[str, Any]:
    """Fill arguments not given on the command line from the loaded profile"""
    loaded = await profiles.get_meta(profile_type, strict=False)
    merged = dict(arguments)
    for prop_name, arg_name in PROFILE_ARGUMENTS[action].items():
        value = loaded.profile.get(prop_name)
        if merged.get(arg_name) is None and value is not None:
            merged[arg_name] = value
    return merged


async def _process(action: str, service: AuthService, params: HandlerParameters) -> None:
    params.arguments = await _merge_profile_arguments(
        action, params.profiles, service.profile_type, params.arguments
    )
    await AuthHandler(service).process(params)


def _run(action: str, service_name: str, profile: Optional[str], arguments: Dict[str, Any]) -> None:
    logger = get_logger(f"profkit.commands.auth.{action}")

    factory = AUTH_SERVICES.get(service_name)
    if factory is None:
        error(f"Unknown service '{service_name}'. Choose one of: {', '.join(AUTH_SERVICES)}")
        raise typer.Exit(1)

    service = factory()
    selected = {service.profile_type: profile} if profile else None
    params = HandlerParameters(
        action=action,
        arguments={k: v for k, v in arguments.items() if v is not None},
        profiles=ProfileStore(config_store.profiles_dir, selected=selected, vault=CredentialVault()),
        response=ConsoleResponse(),
    )

    try:
        asyncio.run(_process(action, service, params))
    except ImperativeError as e:
        logger.error(f"{action} failed for {service_name}: {e}")
        error(str(e))
        raise typer.Exit(1)


@app.command()
def login(
    service: str = typer.Argument(..., help=SERVICE_HELP),
    host: Optional[str] = typer.Option(None, "--host", help="Host name of the service"),
    port: Optional[int] = typer.Option(None, "--port", help="Port of the service"),
    user: Optional[str] = typer.Option(None, "--user", help="User name"),
    password: Optional[str] = typer.Option(None, "--password", help="Password"),
    token_type: Optional[str] = typer.Option(None, "--token-type", help="Type of token to request"),
    reject_unauthorized: bool = typer.Option(
        True, "--reject-unauthorized/--allow-self-signed", help="Verify TLS certificates"
    ),
    show_token: bool = typer.Option(
        False, "--show-token", help="Show the token instead of storing it in the profile"
    ),
    profile: Optional[str] = typer.Option(None, "--profile", help="Profile to store the token in"),
):
    """Log in and store a token in a profile"""
    _run(
        LOGIN_ACTION,
        service,
        profile,
        {
            "host": host,
            "port": port,
            "user": user,
            "password": password,
            "token_type": token_type,
            "reject_unauthorized": reject_unauthorized,
            "show_token": show_token,
        },
    )


@app.command()
def logout(
    service: str = typer.Argument(..., help=SERVICE_HELP),
    host: Optional[str] = typer.Option(None, "--host", help="Host name of the service"),
    port: Optional[int] = typer.Option(None, "--port", help="Port of the service"),
    token_type: Optional[str] = typer.Option(None, "--token-type", help="Type of the token"),
    token_value: Optional[str] = typer.Option(None, "--token-value", help="Token to revoke"),
    reject_unauthorized: bool = typer.Option(
        True, "--reject-unauthorized/--allow-self-signed", help="Verify TLS certificates"
    ),
    profile: Optional[str] = typer.Option(None, "--profile", help="Profile holding the token"),
):
    """Revoke a token and remove it from its profile"""
    _run(
        LOGOUT_ACTION,
        service,
        profile,
        {
            "host": host,
            "port": port,
            "token_type": token_type,
            "token_value": token_value,
            "reject_unauthorized": reject_unauthorized,
        },
    )
