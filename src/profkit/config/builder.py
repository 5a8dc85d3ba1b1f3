"""
Builds a new v2 config document from an application's profile declarations.
"""

from typing import Any, Awaitable, Callable, Optional

from profkit.logging import get_logger, log_transaction
from .document import AppProfileConfig, ConfigDocument, ConfigProfile, ProfileSchemaProperty
from .hoist import hoist_template_properties
from .schema import inspect_property

# Coroutine used to obtain a live value for a base profile property.
# Returning None leaves the property untouched.
GetValueBack = Callable[[str, ProfileSchemaProperty], Awaitable[Optional[Any]]]


class ConfigBuilder:
    """Synthesizes config documents from profile type declarations"""

    @staticmethod
    async def build(
        app_config: AppProfileConfig,
        populate_properties: bool = False,
        get_value_back: Optional[GetValueBack] = None,
    ) -> ConfigDocument:
        """
        Build a new config document.

        Args:
            app_config: Profile types declared by the application
            populate_properties: Include template properties and make each
                profile the default for its type
            get_value_back: Optional coroutine asked for the value of every
                hoisted or secure base profile property

        Returns:
            ConfigDocument with auto_store set
        """
        logger = get_logger("profkit.config.builder")
        config = ConfigDocument.empty()

        for profile_type in app_config.profiles:
            profile = ConfigProfile(type=profile_type.type)
            for prop_name, schema_prop in profile_type.properties.items():
                entry = inspect_property(schema_prop, populate_properties)
                if not entry.included:
                    continue
                if entry.secure:
                    profile.secure.append(prop_name)
                else:
                    profile.properties[prop_name] = entry.value

            config.profiles[profile_type.type] = profile
            if populate_properties:
                config.defaults[profile_type.type] = profile_type.type

            log_transaction(
                "build profile",
                {
                    "type": profile_type.type,
                    "properties": list(profile.properties),
                    "secure": list(profile.secure),
                },
            )

        base_profile = app_config.base_profile
        if config.profiles and base_profile is not None:
            hoisted = hoist_template_properties(config.profiles, base_profile.type)
            if hoisted:
                logger.debug(f"Hoisted properties into '{base_profile.type}': {hoisted}")

            if get_value_back is not None and base_profile.type in config.profiles:
                target = config.profiles[base_profile.type]
                for prop_name, schema_prop in base_profile.properties.items():
                    if prop_name in hoisted or (
                        schema_prop.include_in_template and schema_prop.secure
                    ):
                        value = await get_value_back(prop_name, schema_prop)
                        if value is not None:
                            # secure values are written in plain text here and
                            # moved to the vault when the document is saved
                            target.properties[prop_name] = value

        config.auto_store = True
        return config
