"""
Token login/logout over HTTP.

Services hand out their token as a cookie named after the token type in
response to a basic-authenticated request, and revoke it when the cookie is
presented to the logout endpoint.
"""

import time
from typing import Any, Dict, Optional

import httpx

from profkit.constants import BASE_PROFILE_TYPE, DEFAULT_HEADERS
from profkit.errors import ImperativeError
from profkit.logging import get_logger, log_api_call
from .handler import AuthService
from .session import Session, SessionConfig, TOKEN_TYPE_APIML, TOKEN_TYPE_JWT


class HttpTokenAuth:
    """
    Cookie-token exchange against a single service.

    Args:
        login_path: Path receiving the basic-authenticated login request
        logout_path: Path revoking the token
        logout_method: HTTP method of the logout request
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        login_path: str,
        logout_path: str,
        logout_method: str = "POST",
        timeout: float = 30.0,
    ):
        self.login_path = login_path
        self.logout_path = logout_path
        self.logout_method = logout_method
        self.timeout = timeout
        self.logger = get_logger("profkit.auth.http_service")

    def _client(self, session: Session) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=session.base_url,
            headers=DEFAULT_HEADERS,
            verify=session.config.reject_unauthorized,
            timeout=self.timeout,
        )

    async def _send(self, session: Session, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{session.base_url}{path}"
        start = time.monotonic()
        try:
            async with self._client(session) as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_api_call(method, url, duration=time.monotonic() - start, error=str(e))
            raise ImperativeError(
                f"Unable to reach {url}: {e}", additional_details={"method": method}
            )
        log_api_call(method, url, status_code=response.status_code,
                     duration=time.monotonic() - start)
        if response.is_error:
            raise ImperativeError(
                f"{method} {url} failed with status {response.status_code}",
                additional_details={"body": response.text[:512]},
            )
        return response

    async def login(self, session: Session) -> str:
        """Obtain a token of the session's token type"""
        token_type = session.config.token_type
        if not token_type:
            raise ImperativeError("Token type must be set on the session before login")
        response = await self._send(
            session, "POST", self.login_path,
            auth=(session.config.user, session.config.password),
        )
        token_value = response.cookies.get(token_type)
        if not token_value:
            raise ImperativeError(
                f"The service did not return a token of type '{token_type}'"
            )
        self.logger.debug(f"Received {token_type} token from {session.base_url}")
        return token_value

    async def logout(self, session: Session) -> None:
        """Revoke the session's token"""
        await self._send(
            session, self.logout_method, self.logout_path,
            headers={"Cookie": f"{session.config.token_type}={session.config.token_value}"},
        )
        self.logger.debug(f"Revoked {session.config.token_type} token at {session.base_url}")


def _session_cfg_from_args(args: Dict[str, Any]) -> SessionConfig:
    return SessionConfig.from_args(args)


def zosmf_auth_service(http: Optional[HttpTokenAuth] = None) -> AuthService:
    """z/OSMF: JWT issued by the authenticate service"""
    http = http or HttpTokenAuth(
        login_path="/zosmf/services/authenticate",
        logout_path="/zosmf/services/authenticate",
        logout_method="DELETE",
    )
    return AuthService(
        profile_type="zosmf",
        default_token_type=TOKEN_TYPE_JWT,
        create_session_cfg_from_args=_session_cfg_from_args,
        do_login=http.login,
        do_logout=http.logout,
        service_description="z/OSMF",
    )


def apiml_auth_service(http: Optional[HttpTokenAuth] = None) -> AuthService:
    """API Mediation Layer: token stored in the base profile"""
    http = http or HttpTokenAuth(
        login_path="/gateway/api/v1/auth/login",
        logout_path="/gateway/api/v1/auth/logout",
    )
    return AuthService(
        profile_type=BASE_PROFILE_TYPE,
        default_token_type=TOKEN_TYPE_APIML,
        create_session_cfg_from_args=_session_cfg_from_args,
        do_login=http.login,
        do_logout=http.logout,
        service_description="your API Mediation Layer",
    )


AUTH_SERVICES = {
    "zosmf": zosmf_auth_service,
    "apiml": apiml_auth_service,
}
