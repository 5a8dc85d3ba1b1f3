"""
Hoisting of duplicated profile properties into the base profile.
"""

from typing import Any, Dict, List

from .document import ConfigProfile


def _all_equal(values: List[Any]) -> bool:
    # 0 and False (1 and True) compare equal but are distinct values
    first = values[0]
    return all(type(value) is type(first) and value == first for value in values[1:])


def hoist_template_properties(
    profiles: Dict[str, ConfigProfile], base_profile_type: str
) -> List[str]:
    """
    Move properties that child profiles share with an identical value into
    the base profile.

    Args:
        profiles: Profiles of the config document, keyed by profile key
        base_profile_type: Type of the base profile. The base profile is
            looked up under this key.

    Returns:
        Names of the properties that were hoisted
    """
    base_profile = profiles.get(base_profile_type)
    if base_profile is None:
        return []

    children = [p for p in profiles.values() if p.type != base_profile_type]

    flattened: Dict[str, List[Any]] = {}
    for child in children:
        for name, value in child.properties.items():
            flattened.setdefault(name, []).append(value)

    hoisted = [
        name for name, values in flattened.items()
        if len(values) > 1 and _all_equal(values)
    ]

    for name in hoisted:
        merged = {name: flattened[name][0]}
        for key, value in base_profile.properties.items():
            merged[key] = value
        base_profile.properties = merged
        for child in children:
            child.properties.pop(name, None)

    return hoisted
