"""
Value prompting and display helpers for the config commands.
"""

import asyncio
import json
from typing import Any, Optional

from rich.prompt import Prompt

from profkit.config.document import ConfigDocument, ConversionResult, ProfileSchemaProperty
from profkit.utils.console import create_table, console, display_panel, warning


def get_credential_value(
    arg_value: Optional[str],
    prompt_text: str,
    secure: bool = False,
    default: Optional[str] = None,
) -> Optional[str]:
    """Get a value with priority: argument > prompt. Empty answers become None."""
    if arg_value:
        return arg_value
    if default is not None:
        answer = Prompt.ask(prompt_text, password=secure, default=default)
    else:
        answer = Prompt.ask(prompt_text, password=secure, default="", show_default=False)
    return answer or None


def coerce_value(raw: Optional[str], schema_property: ProfileSchemaProperty) -> Any:
    """Convert a prompted string to the property's declared type"""
    if raw is None:
        return None
    prop_type = schema_property.type
    if isinstance(prop_type, (list, tuple)):
        prop_type = prop_type[0] if prop_type else None
    if prop_type == "number":
        try:
            return int(raw)
        except ValueError:
            return float(raw)
    if prop_type == "boolean":
        return raw.strip().lower() in ("true", "yes", "y", "1")
    if prop_type in ("object", "array"):
        return json.loads(raw)
    return raw


def make_value_prompter():
    """
    Build the get_value_back coroutine used by `config init`.

    Secure properties are asked for with hidden input; leaving an answer
    empty skips the property.
    """

    async def get_value_back(prop_name: str, schema_property: ProfileSchemaProperty) -> Any:
        description = schema_property.description or prop_name
        text = f"{description} ({prop_name}, leave blank to skip)"
        raw = await asyncio.to_thread(
            get_credential_value, None, text, schema_property.secure
        )
        return coerce_value(raw, schema_property)

    return get_value_back


def display_config(document: Optional[ConfigDocument], title: str) -> None:
    """Display a config document with secure values masked"""
    if document is None:
        warning("No configuration found. Run 'profkit config init' or 'profkit config convert'")
        return

    data = document.to_dict()
    for profile in data["profiles"].values():
        for prop_name in profile["secure"]:
            if prop_name in profile["properties"]:
                profile["properties"][prop_name] = "****"
    display_panel(json.dumps(data, indent=2), title, "blue")


def display_conversion_result(result: ConversionResult) -> None:
    """Summarize converted and failed profiles"""
    if result.profiles_converted:
        console.print(create_table(
            "Converted profiles",
            ["Type", "Profiles"],
            [(profile_type, ", ".join(names)) for profile_type, names in result.profiles_converted.items()],
        ))

    if result.profiles_failed:
        console.print(create_table(
            "Failed to convert",
            ["Type", "Profile", "Error"],
            [(f.type, f.name or "(meta file)", str(f.error)) for f in result.profiles_failed],
        ))
