"""
In-memory model of the v2 config document and conversion results.

The JSON layout written to disk uses camelCase keys (``autoStore``,
``profilesConverted``) so documents stay readable by other tooling built on
the same format.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class ConfigProfile:
    """One named, typed profile.

    ``properties`` holds plain values; ``secure`` lists property names whose
    values live in the credential vault.
    """

    type: str
    properties: Dict[str, Any] = field(default_factory=dict)
    secure: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "properties": dict(self.properties),
            "secure": list(self.secure),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigProfile":
        return cls(
            type=data.get("type"),
            properties=dict(data.get("properties") or {}),
            secure=list(data.get("secure") or []),
        )


@dataclass
class ConfigDocument:
    """Root of a v2 config document"""

    defaults: Dict[str, str] = field(default_factory=dict)
    profiles: Dict[str, ConfigProfile] = field(default_factory=dict)
    plugins: List[str] = field(default_factory=list)
    secure: List[str] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)
    auto_store: bool = False

    @classmethod
    def empty(cls) -> "ConfigDocument":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "defaults": dict(self.defaults),
            "profiles": {key: profile.to_dict() for key, profile in self.profiles.items()},
            "plugins": list(self.plugins),
            "secure": list(self.secure),
            "properties": dict(self.properties),
            "autoStore": self.auto_store,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigDocument":
        return cls(
            defaults=dict(data.get("defaults") or {}),
            profiles={
                key: ConfigProfile.from_dict(value)
                for key, value in (data.get("profiles") or {}).items()
            },
            plugins=list(data.get("plugins") or []),
            secure=list(data.get("secure") or []),
            properties=dict(data.get("properties") or {}),
            auto_store=bool(data.get("autoStore", False)),
        )


@dataclass
class ProfileSchemaProperty:
    """Declared property of a profile type.

    ``type`` is a JSON-schema style tag ("string", "number", ...) or a list
    of tags. ``option_definition`` mirrors the CLI option the property is
    bound to; only its ``defaultValue`` is consulted here.
    """

    type: Union[str, List[str], None] = None
    secure: bool = False
    include_in_template: bool = False
    option_definition: Optional[Dict[str, Any]] = None
    description: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.option_definition is not None and "defaultValue" in self.option_definition

    @property
    def default_value(self) -> Any:
        if self.option_definition is None:
            return None
        return self.option_definition.get("defaultValue")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileSchemaProperty":
        return cls(
            type=data.get("type"),
            secure=bool(data.get("secure", False)),
            include_in_template=bool(data.get("includeInTemplate", False)),
            option_definition=data.get("optionDefinition"),
            description=data.get("description"),
        )


@dataclass
class ProfileTypeConfig:
    """A profile type declared by the application"""

    type: str
    properties: Dict[str, ProfileSchemaProperty] = field(default_factory=dict)
    title: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileTypeConfig":
        schema = data["schema"]
        return cls(
            type=data["type"],
            title=schema.get("title"),
            properties={
                name: ProfileSchemaProperty.from_dict(prop)
                for name, prop in schema["properties"].items()
            },
        )


@dataclass
class AppProfileConfig:
    """Profile declarations of an application: its types and base type"""

    profiles: List[ProfileTypeConfig] = field(default_factory=list)
    base_profile: Optional[ProfileTypeConfig] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppProfileConfig":
        profiles = [ProfileTypeConfig.from_dict(p) for p in data.get("profiles") or []]
        base = data.get("baseProfile")
        return cls(
            profiles=profiles,
            base_profile=ProfileTypeConfig.from_dict(base) if base else None,
        )


@dataclass
class ConversionFailure:
    """A legacy profile, or a type's meta file, that could not be converted"""

    type: str
    error: Exception
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"type": self.type, "error": str(self.error)}
        if self.name is not None:
            data["name"] = self.name
        return data


@dataclass
class ConversionResult:
    config: ConfigDocument = field(default_factory=ConfigDocument.empty)
    profiles_converted: Dict[str, List[str]] = field(default_factory=dict)
    profiles_failed: List[ConversionFailure] = field(default_factory=list)

    @property
    def converted_count(self) -> int:
        return sum(len(names) for names in self.profiles_converted.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "profilesConverted": {k: list(v) for k, v in self.profiles_converted.items()},
            "profilesFailed": [failure.to_dict() for failure in self.profiles_failed],
        }
