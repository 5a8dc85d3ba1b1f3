"""
Inspection of declared profile schema properties.
"""

from typing import Any, List, NamedTuple, Union

from .document import ProfileSchemaProperty


class TemplateEntry(NamedTuple):
    """How a schema property appears in a freshly built profile"""

    included: bool
    secure: bool
    value: Any = None


def default_value_for(prop_type: Union[str, List[str], None]) -> Any:
    """
    Return an empty value appropriate for a property type.

    Only the first tag of a multi-type property is consulted.
    """
    # TODO: pick a better default for multi-type properties such as ["number", "string"]
    if isinstance(prop_type, (list, tuple)):
        prop_type = prop_type[0] if prop_type else None
    if prop_type == "string":
        return ""
    if prop_type == "number":
        return 0
    if prop_type == "object":
        return {}
    if prop_type == "array":
        return []
    if prop_type == "boolean":
        return False
    return None


def inspect_property(schema_property: ProfileSchemaProperty, populate: bool) -> TemplateEntry:
    """
    Decide whether a schema property goes into a built profile.

    Secure properties are listed by name only. Plain properties take the
    option definition's default value, even a declared None, and fall
    back to the empty value of their type when no default is declared.
    """
    if not (populate and schema_property.include_in_template):
        return TemplateEntry(included=False, secure=False)
    if schema_property.secure:
        return TemplateEntry(included=True, secure=True)

    if schema_property.has_default:
        value = schema_property.default_value
    else:
        value = default_value_for(schema_property.type)
    return TemplateEntry(included=True, secure=False, value=value)
