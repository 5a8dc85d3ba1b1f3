"""
File-backed store of legacy (v1) profiles used by the auth commands.

Properties declared secure by their profile type never reach the YAML file:
the file holds a "managed by <vault>" placeholder and the value lives in the
credential vault under the property's v1 key.
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Set

from profkit.constants import PROFILE_EXTENSION
from profkit.errors import ImperativeError
from profkit.logging import get_logger
from .document import AppProfileConfig
from .profile_io import ProfileIO, meta_file_name, profile_property_key
from .profile_types import default_app_config
from .vault import CredentialVault, is_securely_stored, parse_secret, secured_marker


@dataclass
class ProfileMeta:
    """Profile loaded for a command. ``name`` is None when none was found."""

    type: str
    name: Optional[str] = None
    profile: Dict[str, Any] = field(default_factory=dict)


def _camel_case(option_name: str) -> str:
    return re.sub(r"-([a-z0-9])", lambda m: m.group(1).upper(), option_name)


class ProfileStore:
    """
    Loads and updates v1 profiles.

    Args:
        profiles_root: Directory holding one sub-directory per profile type
        selected: Profile name to use per type instead of the type's default
        profile_io: File access for profile directories
        vault: Credential vault holding secure property values
        app_config: Profile type declarations naming the secure properties
    """

    def __init__(
        self,
        profiles_root: Path,
        selected: Optional[Dict[str, str]] = None,
        profile_io: Optional[ProfileIO] = None,
        vault: Optional[CredentialVault] = None,
        app_config: Optional[AppProfileConfig] = None,
    ):
        self.profiles_root = Path(profiles_root)
        self.selected = dict(selected or {})
        self.profile_io = profile_io or ProfileIO()
        self.vault = vault or CredentialVault()
        self.app_config = app_config or default_app_config()
        self.logger = get_logger("profkit.config.profile_store")

    def _profile_path(self, profile_type: str, name: str) -> Path:
        return self.profiles_root / profile_type / f"{name}{PROFILE_EXTENSION}"

    def _default_name(self, profile_type: str) -> Optional[str]:
        meta_path = self.profiles_root / profile_type / f"{meta_file_name(profile_type)}{PROFILE_EXTENSION}"
        if not meta_path.exists():
            return None
        return self.profile_io.read_meta_file(meta_path).get("defaultProfile")

    def secure_properties(self, profile_type: str) -> Set[str]:
        """Names of the properties a profile type declares secure"""
        for declared in self.app_config.profiles:
            if declared.type == profile_type:
                return {name for name, prop in declared.properties.items() if prop.secure}
        return set()

    async def _load_secure_values(
        self, profile_type: str, name: str, properties: Dict[str, Any]
    ) -> Dict[str, Any]:
        loaded = dict(properties)
        for key, value in properties.items():
            if not is_securely_stored(value):
                continue
            secret = await self.vault.load(
                profile_property_key(profile_type, name, key), optional=True
            )
            if secret is None:
                self.logger.warning(f"Secure value '{key}' of profile '{name}' is missing from the vault")
                del loaded[key]
            else:
                loaded[key] = parse_secret(secret)
        return loaded

    async def _store_property(
        self, profile_type: str, name: str, properties: Dict[str, Any], key: str, value: Any
    ) -> None:
        secure = key in self.secure_properties(profile_type)
        vault_key = profile_property_key(profile_type, name, key)
        if value is None:
            if secure or is_securely_stored(properties.get(key)):
                await self.vault.delete(vault_key)
            properties.pop(key, None)
        elif secure:
            await self.vault.save(vault_key, json.dumps(value))
            properties[key] = secured_marker(self.vault)
        else:
            properties[key] = value

    async def get_meta(self, profile_type: str, strict: bool = True) -> ProfileMeta:
        """
        Load the selected (or default) profile of a type, with secure values
        read back from the vault.

        Raises:
            ImperativeError: ``strict`` is set and no profile could be loaded
        """
        name = self.selected.get(profile_type) or self._default_name(profile_type)
        if name is not None:
            path = self._profile_path(profile_type, name)
            if path.exists():
                properties = self.profile_io.read_profile_file(path, profile_type)
                profile = await self._load_secure_values(profile_type, name, properties)
                return ProfileMeta(type=profile_type, name=name, profile=profile)
            if strict:
                raise ImperativeError(f"Profile '{name}' of type '{profile_type}' does not exist")
        elif strict:
            raise ImperativeError(f"No default profile set for type '{profile_type}'")
        return ProfileMeta(type=profile_type)

    async def update(
        self, profile_type: str, name: str, args: Dict[str, Any], merge: bool = True
    ) -> None:
        """
        Update a profile from command-line style arguments.

        ``token-value`` becomes ``tokenValue``; a None value removes the
        property.
        """
        path = self._profile_path(profile_type, name)
        if not path.exists():
            raise ImperativeError(f"Profile '{name}' of type '{profile_type}' does not exist")

        properties = self.profile_io.read_profile_file(path, profile_type) if merge else {}
        for option_name, value in args.items():
            await self._store_property(profile_type, name, properties, _camel_case(option_name), value)

        self.profile_io.write_profile_file(path, properties)
        self.logger.info(f"Updated profile '{name}' of type '{profile_type}'")

    async def save(
        self, name: str, profile_type: str, profile: Dict[str, Any], overwrite: bool = False
    ) -> None:
        """
        Write a profile. Properties set to None are not written.

        Raises:
            ImperativeError: The profile exists and ``overwrite`` is not set
        """
        path = self._profile_path(profile_type, name)
        if path.exists() and not overwrite:
            raise ImperativeError(
                f"Profile '{name}' of type '{profile_type}' already exists and overwrite was not specified"
            )
        properties: Dict[str, Any] = {}
        for key, value in profile.items():
            await self._store_property(profile_type, name, properties, key, value)
        self.profile_io.write_profile_file(path, properties)
        self.logger.info(f"Saved profile '{name}' of type '{profile_type}'")
