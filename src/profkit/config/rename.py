"""
Renaming of v1 property names that changed in the v2 config format.
"""

from typing import Any, List, Tuple

from .document import ConversionResult

PROPERTY_RENAMES: List[Tuple[str, str]] = [
    ("hostname", "host"),
    ("username", "user"),
    ("pass", "password"),
]


def _renamed(prop_name: str):
    for old_name, new_name in PROPERTY_RENAMES:
        if prop_name == old_name:
            return new_name
    return None


def rename_properties(conversion_result: ConversionResult) -> None:
    """Rename obsolete property names of every converted profile in place."""
    for profile in conversion_result.config.profiles.values():
        # collect first; the properties dict must not change while iterated
        staged: List[Tuple[str, str, Any]] = []
        for prop_name, prop_value in profile.properties.items():
            new_name = _renamed(prop_name)
            if new_name is not None:
                staged.append((prop_name, new_name, prop_value))

        for old_name, new_name, prop_value in staged:
            del profile.properties[old_name]
            profile.properties[new_name] = prop_value

        for index, prop_name in enumerate(profile.secure):
            new_name = _renamed(prop_name)
            if new_name is not None:
                profile.secure[index] = new_name
