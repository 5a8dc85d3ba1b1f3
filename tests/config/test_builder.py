import pytest

from profkit.config.builder import ConfigBuilder
from profkit.config.document import AppProfileConfig
from profkit.config.profile_types import default_app_config

BASE = {
    "type": "base",
    "schema": {
        "properties": {
            "host": {"type": "string", "includeInTemplate": True},
            "user": {"type": "string", "secure": True, "includeInTemplate": True},
            "password": {"type": "string", "secure": True, "includeInTemplate": True},
            "tokenValue": {"type": "string", "secure": True},
        }
    },
}

FRUIT = {
    "type": "fruit",
    "schema": {
        "properties": {
            "host": {"type": "string", "includeInTemplate": True},
            "amount": {"type": "number", "includeInTemplate": True,
                       "optionDefinition": {"defaultValue": 5}},
            "price": {"type": ["number", "string"], "includeInTemplate": True},
            "color": {"type": "string"},
        }
    },
}

VEGETABLE = {
    "type": "vegetable",
    "schema": {
        "properties": {
            "host": {"type": "string", "includeInTemplate": True},
            "amount": {"type": "number", "includeInTemplate": True,
                       "optionDefinition": {"defaultValue": 3}},
        }
    },
}


def _app_config(with_base=True):
    profiles = [BASE, FRUIT, VEGETABLE] if with_base else [FRUIT, VEGETABLE]
    return AppProfileConfig.from_dict(
        {"profiles": profiles, "baseProfile": BASE if with_base else None}
    )


@pytest.mark.asyncio
async def test_build_without_populating_creates_empty_profiles():
    config = await ConfigBuilder.build(_app_config())

    assert config.auto_store is True
    assert config.defaults == {}
    assert set(config.profiles) == {"base", "fruit", "vegetable"}
    for profile in config.profiles.values():
        assert profile.properties == {}
        assert profile.secure == []


@pytest.mark.asyncio
async def test_build_populates_template_properties():
    config = await ConfigBuilder.build(_app_config(), populate_properties=True)

    fruit = config.profiles["fruit"]
    assert fruit.properties == {"amount": 5, "price": 0}
    assert "color" not in fruit.properties
    assert config.profiles["base"].secure == ["user", "password"]
    assert config.defaults == {"base": "base", "fruit": "fruit", "vegetable": "vegetable"}


@pytest.mark.asyncio
async def test_build_hoists_duplicate_defaults_into_base():
    config = await ConfigBuilder.build(_app_config(), populate_properties=True)

    assert config.profiles["base"].properties == {"host": ""}
    assert "host" not in config.profiles["fruit"].properties
    assert "host" not in config.profiles["vegetable"].properties
    # different defaults stay with their profiles
    assert config.profiles["vegetable"].properties == {"amount": 3}


@pytest.mark.asyncio
async def test_build_without_base_profile_does_not_hoist():
    config = await ConfigBuilder.build(_app_config(with_base=False), populate_properties=True)
    assert config.profiles["fruit"].properties["host"] == ""
    assert config.profiles["vegetable"].properties["host"] == ""


@pytest.mark.asyncio
async def test_get_value_back_called_for_hoisted_and_secure_properties():
    calls = []

    async def get_value_back(name, schema_prop):
        calls.append(name)
        return {"host": "example.com", "user": "ibmuser"}.get(name)

    config = await ConfigBuilder.build(
        _app_config(), populate_properties=True, get_value_back=get_value_back
    )

    assert calls == ["host", "user", "password"]
    base = config.profiles["base"]
    assert base.properties == {"host": "example.com", "user": "ibmuser"}
    # secure values stay listed until moved to the vault
    assert base.secure == ["user", "password"]


@pytest.mark.asyncio
async def test_get_value_back_none_leaves_properties_unchanged():
    async def get_value_back(name, schema_prop):
        return None

    config = await ConfigBuilder.build(
        _app_config(), populate_properties=True, get_value_back=get_value_back
    )
    assert config.profiles["base"].properties == {"host": ""}


@pytest.mark.asyncio
async def test_build_default_app_config():
    config = await ConfigBuilder.build(default_app_config(), populate_properties=True)

    assert config.profiles["base"].properties["host"] == ""
    assert config.profiles["base"].properties["rejectUnauthorized"] is True
    assert config.profiles["zosmf"].properties == {"port": 443, "rejectUnauthorized": True}
    assert config.profiles["ssh"].properties == {"port": 22}
    for default_key in config.defaults.values():
        assert default_key in config.profiles
