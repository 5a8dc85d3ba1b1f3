"""
Config document building and legacy profile conversion.

- document: data model of the v2 config document
- builder: builds a document from declared profile types
- converter: migrates v1 profile directories
- hoist / rename / schema: helpers used by the builder and converter
- profile_io / profile_store / vault: file and secret access
"""

from .document import (
    AppProfileConfig,
    ConfigDocument,
    ConfigProfile,
    ConversionFailure,
    ConversionResult,
    ProfileSchemaProperty,
    ProfileTypeConfig,
)
from .builder import ConfigBuilder
from .converter import LegacyProfileConverter
from .hoist import hoist_template_properties
from .rename import rename_properties
from .schema import default_value_for

__all__ = [
    "AppProfileConfig",
    "ConfigDocument",
    "ConfigProfile",
    "ConversionFailure",
    "ConversionResult",
    "ProfileSchemaProperty",
    "ProfileTypeConfig",
    "ConfigBuilder",
    "LegacyProfileConverter",
    "hoist_template_properties",
    "rename_properties",
    "default_value_for",
]
