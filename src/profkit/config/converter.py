"""
Conversion of legacy (v1) profile directories into a v2 config document.
"""

from pathlib import Path
from typing import Optional

from profkit.constants import PROFILE_EXTENSION
from profkit.logging import get_logger, log_transaction
from .document import ConfigProfile, ConversionFailure, ConversionResult
from .profile_io import ProfileIO, meta_file_name, profile_map_key, profile_property_key
from .rename import rename_properties
from .vault import CredentialVault, is_securely_stored, parse_secret


class LegacyProfileConverter:
    """
    Converts v1 profiles into a ConversionResult.

    A profile that fails to read is recorded in ``profiles_failed`` and the
    conversion moves on to the next one.
    """

    def __init__(
        self,
        profile_io: Optional[ProfileIO] = None,
        vault: Optional[CredentialVault] = None,
    ):
        self.profile_io = profile_io or ProfileIO()
        self.vault = vault or CredentialVault()
        self.logger = get_logger("profkit.config.converter")

    async def convert(self, profiles_root: Path) -> ConversionResult:
        """
        Convert every profile found under the profiles root directory.

        Args:
            profiles_root: Directory holding one sub-directory per profile type

        Returns:
            ConversionResult with the new config document, converted profile
            names per type and failure records
        """
        profiles_root = Path(profiles_root)
        result = ConversionResult()
        self.logger.info(f"Converting v1 profiles under {profiles_root}")

        for profile_type in self.profile_io.get_all_profile_directories(profiles_root):
            type_dir = profiles_root / profile_type
            profile_names = self.profile_io.get_all_profile_names(
                type_dir, PROFILE_EXTENSION, meta_file_name(profile_type)
            )
            if not profile_names:
                self.logger.debug(f"No profiles of type '{profile_type}', skipping")
                continue

            for profile_name in profile_names:
                try:
                    profile = await self._convert_profile(type_dir, profile_type, profile_name)
                except Exception as e:
                    self.logger.warning(
                        f"Failed to convert profile '{profile_name}' of type '{profile_type}': {e}"
                    )
                    result.profiles_failed.append(
                        ConversionFailure(type=profile_type, name=profile_name, error=e)
                    )
                    continue

                result.config.profiles[profile_map_key(profile_type, profile_name)] = profile
                result.profiles_converted.setdefault(profile_type, []).append(profile_name)
                log_transaction(
                    "convert profile",
                    {"type": profile_type, "name": profile_name, "secure": profile.secure},
                )

            try:
                meta_path = type_dir / f"{meta_file_name(profile_type)}{PROFILE_EXTENSION}"
                meta = self.profile_io.read_meta_file(meta_path)
                default_profile = meta.get("defaultProfile")
                if default_profile is not None:
                    result.config.defaults[profile_type] = profile_map_key(
                        profile_type, default_profile
                    )
            except Exception as e:
                self.logger.warning(f"Failed to read meta file for type '{profile_type}': {e}")
                result.profiles_failed.append(ConversionFailure(type=profile_type, error=e))

        rename_properties(result)
        result.config.auto_store = True

        self.logger.info(
            f"Converted {result.converted_count} profile(s), "
            f"{len(result.profiles_failed)} failure(s)"
        )
        return result

    async def _convert_profile(
        self, type_dir: Path, profile_type: str, profile_name: str
    ) -> ConfigProfile:
        path = type_dir / f"{profile_name}{PROFILE_EXTENSION}"
        properties = self.profile_io.read_profile_file(path, profile_type)
        secure = []

        for key, value in list(properties.items()):
            if not is_securely_stored(value):
                continue
            secret = await self.vault.load(
                profile_property_key(profile_type, profile_name, key), optional=True
            )
            if secret is not None:
                properties[key] = parse_secret(secret)
                secure.append(key)
            else:
                del properties[key]

        return ConfigProfile(type=profile_type, properties=properties, secure=secure)
