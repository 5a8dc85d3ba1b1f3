import pytest

from profkit.auth.handler import AuthHandler, AuthService, AuthState, HandlerParameters
from profkit.auth.session import AUTH_TYPE_BASIC, AUTH_TYPE_TOKEN, SessionConfig
from profkit.config.profile_store import ProfileMeta, ProfileStore
from profkit.errors import ImperativeError


@pytest.fixture
def service(mocker):
    return AuthService(
        profile_type="fruit",
        default_token_type="jwtToken",
        create_session_cfg_from_args=mocker.Mock(
            side_effect=lambda args: SessionConfig.from_args(args)
        ),
        do_login=mocker.AsyncMock(return_value="new-token"),
        do_logout=mocker.AsyncMock(return_value=None),
        service_description="the fruit service",
    )


@pytest.fixture
def profiles(mocker):
    store = mocker.Mock()
    store.get_meta = mocker.AsyncMock()
    store.update = mocker.AsyncMock()
    store.save = mocker.AsyncMock()
    store.get_meta.return_value = ProfileMeta(
        type="fruit", name="fruit1",
        profile={"host": "h", "tokenType": "jwtToken", "tokenValue": "stored-token"},
    )
    return store


@pytest.fixture
def response(mocker):
    return mocker.Mock()


def _login_args(**extra):
    args = {"host": "h", "port": 443, "user": "u", "password": "p"}
    args.update(extra)
    return args


def _logout_args(**extra):
    args = {"host": "h", "port": 443, "token_type": "jwtToken", "token_value": "stored-token"}
    args.update(extra)
    return args


def _messages(response):
    return [c.args[0] for c in response.log.call_args_list]


@pytest.mark.asyncio
async def test_unknown_action_fails_without_side_effects(service, profiles, response):
    handler = AuthHandler(service, prompter=None)

    with pytest.raises(ImperativeError) as exc:
        await handler.process(HandlerParameters("refresh", profiles, response))

    assert "refresh" in str(exc.value)
    profiles.get_meta.assert_not_called()
    service.create_session_cfg_from_args.assert_not_called()
    assert handler.state == AuthState.IDLE


@pytest.mark.asyncio
async def test_login_stores_token_in_profile(service, profiles, response):
    handler = AuthHandler(service, prompter=None)

    await handler.process(HandlerParameters("login", profiles, response, _login_args()))

    service.do_login.assert_awaited_once_with(handler.session)
    profiles.update.assert_called_once_with(
        profile_type="fruit",
        name="fruit1",
        args={"token-type": "jwtToken", "token-value": "new-token"},
        merge=True,
    )
    assert handler.session.config.type == AUTH_TYPE_TOKEN
    assert handler.state == AuthState.PROFILE_UPDATED
    assert _messages(response) == ["Login successful."]


@pytest.mark.asyncio
async def test_login_show_token_does_not_update_profile(service, profiles, response):
    handler = AuthHandler(service, prompter=None)

    await handler.process(
        HandlerParameters("login", profiles, response, _login_args(show_token=True))
    )

    profiles.update.assert_not_called()
    messages = _messages(response)
    assert messages[0] == "Login successful."
    assert "new-token" in messages[1]
    assert handler.state == AuthState.TOKEN_ACQUIRED


@pytest.mark.asyncio
async def test_login_without_profile_skips_update(service, profiles, response):
    profiles.get_meta.return_value = ProfileMeta(type="fruit")
    handler = AuthHandler(service, prompter=None)

    await handler.process(HandlerParameters("login", profiles, response, _login_args()))

    profiles.update.assert_not_called()
    assert _messages(response) == ["Login successful."]


@pytest.mark.asyncio
async def test_login_error_propagates(service, profiles, response):
    service.do_login.side_effect = ConnectionError("refused")
    handler = AuthHandler(service, prompter=None)

    with pytest.raises(ConnectionError):
        await handler.process(HandlerParameters("login", profiles, response, _login_args()))

    profiles.update.assert_not_called()
    response.log.assert_not_called()
    assert handler.state == AuthState.SESSION_BUILT


@pytest.mark.asyncio
async def test_login_profile_store_error_propagates(service, profiles, response):
    profiles.update.side_effect = OSError("read-only")
    handler = AuthHandler(service, prompter=None)

    with pytest.raises(OSError):
        await handler.process(HandlerParameters("login", profiles, response, _login_args()))
    response.log.assert_not_called()


@pytest.mark.asyncio
async def test_logout_clears_matching_token(service, profiles, response):
    handler = AuthHandler(service, prompter=None)

    await handler.process(HandlerParameters("logout", profiles, response, _logout_args()))

    session = service.do_logout.await_args.args[0]
    assert session is handler.session
    profiles.save.assert_called_once_with(
        name="fruit1",
        profile_type="fruit",
        profile={"host": "h", "tokenType": None, "tokenValue": None},
        overwrite=True,
    )
    assert handler.session.config.type == AUTH_TYPE_BASIC
    assert handler.session.config.token_value is None
    assert handler.state == AuthState.PROFILE_CLEARED
    assert _messages(response) == ["Logout successful."]


@pytest.mark.asyncio
async def test_logout_mismatched_token_keeps_profile(service, profiles, response):
    handler = AuthHandler(service, prompter=None)

    await handler.process(
        HandlerParameters("logout", profiles, response, _logout_args(token_value="other"))
    )

    service.do_logout.assert_awaited_once()
    profiles.save.assert_not_called()
    assert handler.session.config.type == AUTH_TYPE_BASIC
    assert handler.session.config.token_type is None
    assert handler.state == AuthState.SESSION_REVOKED


@pytest.mark.asyncio
async def test_logout_uses_supplied_token(service, profiles, response):
    captured = {}

    async def do_logout(session):
        captured["type"] = session.config.type
        captured["token"] = (session.config.token_type, session.config.token_value)

    service.do_logout = do_logout
    await AuthHandler(service, prompter=None).process(
        HandlerParameters("logout", profiles, response, _logout_args(token_value="other"))
    )
    assert captured == {"type": AUTH_TYPE_TOKEN, "token": ("jwtToken", "other")}


@pytest.mark.asyncio
@pytest.mark.parametrize("missing, label", [
    ("token_type", "Token type"),
    ("token_value", "Token value"),
    ("host", "Host"),
    ("port", "Port"),
])
async def test_logout_requires_arguments(service, profiles, response, missing, label):
    args = _logout_args()
    del args[missing]
    handler = AuthHandler(service, prompter=None)

    with pytest.raises(ImperativeError) as exc:
        await handler.process(HandlerParameters("logout", profiles, response, args))

    assert str(exc.value).startswith(label)
    service.do_logout.assert_not_awaited()
    profiles.save.assert_not_called()
    assert handler.session is None


@pytest.mark.asyncio
async def test_logout_error_propagates(service, profiles, response):
    service.do_logout.side_effect = RuntimeError("boom")
    handler = AuthHandler(service, prompter=None)

    with pytest.raises(RuntimeError):
        await handler.process(HandlerParameters("logout", profiles, response, _logout_args()))
    profiles.save.assert_not_called()


def test_get_prompt_params(service):
    options, login = AuthHandler(service, prompter=None).get_prompt_params()
    assert options["default_token_type"] == "jwtToken"
    assert login is service.do_login


@pytest.fixture
def base_store(tmp_path, write_yaml, make_vault):
    root = tmp_path / "profiles"
    write_yaml(root / "base" / "base_meta.yaml", {"defaultProfile": "b1"})
    write_yaml(root / "base" / "b1.yaml", {"host": "h", "port": 443})
    return ProfileStore(root, vault=make_vault())


@pytest.mark.asyncio
async def test_login_then_logout_keeps_token_in_vault(service, base_store, response):
    service.profile_type = "base"
    profile_file = base_store.profiles_root / "base" / "b1.yaml"
    service.do_login.return_value = "SECRET-TOKEN"

    await AuthHandler(service, prompter=None).process(
        HandlerParameters("login", base_store, response, _login_args())
    )

    assert "SECRET-TOKEN" not in profile_file.read_text(encoding="utf-8")
    assert base_store.vault.secrets["base_b1_tokenValue"] == '"SECRET-TOKEN"'

    await AuthHandler(service, prompter=None).process(
        HandlerParameters("logout", base_store, response,
                          _logout_args(token_value="SECRET-TOKEN"))
    )

    assert "tokenValue" not in profile_file.read_text(encoding="utf-8")
    assert "base_b1_tokenValue" in base_store.vault.deleted
    assert (await base_store.get_meta("base")).profile == {"host": "h", "port": 443}
