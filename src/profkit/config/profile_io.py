"""
File access for legacy (v1) profiles.

v1 profiles live one directory per profile type, one YAML file per profile,
plus a ``<type>_meta.yaml`` file naming the type's default profile::

    profiles/
        zosmf/
            zosmf_meta.yaml
            lpar1.yaml
            lpar2.yaml
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from profkit.constants import META_FILE_SUFFIX, PROFILE_EXTENSION
from profkit.errors import ImperativeError


def profile_map_key(profile_type: str, profile_name: str) -> str:
    """Key of a converted profile inside ConfigDocument.profiles"""
    return f"{profile_type}_{profile_name}"


def profile_property_key(profile_type: str, profile_name: str, prop_name: str) -> str:
    """Vault key of a secure v1 profile property"""
    return f"{profile_type}_{profile_name}_{prop_name.replace('.', '_')}"


def meta_file_name(profile_type: str) -> str:
    return f"{profile_type}{META_FILE_SUFFIX}"


class ProfileIO:
    """Reads and writes v1 profile directories"""

    def get_all_profile_directories(self, profiles_root: Path) -> List[str]:
        """Names of the profile type directories under the root, sorted"""
        root = Path(profiles_root)
        if not root.is_dir():
            return []
        return sorted(entry.name for entry in root.iterdir() if entry.is_dir())

    def get_all_profile_names(
        self, type_dir: Path, extension: str = PROFILE_EXTENSION, exclude: Optional[str] = None
    ) -> List[str]:
        """Profile names in a type directory, without extension, sorted"""
        type_dir = Path(type_dir)
        if not type_dir.is_dir():
            return []
        names = []
        for entry in type_dir.iterdir():
            if not entry.is_file() or entry.suffix != extension:
                continue
            if exclude is not None and entry.stem == exclude:
                continue
            names.append(entry.stem)
        return sorted(names)

    def _read_yaml(self, path: Path) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ImperativeError(
                f"Error parsing profile file {path}: {e}",
                additional_details={"path": str(path)},
            )
        except OSError as e:
            raise ImperativeError(
                f"Error reading profile file {path}: {e}",
                additional_details={"path": str(path)},
            )

    def read_profile_file(self, path: Path, profile_type: str) -> Dict[str, Any]:
        """
        Load the properties of a v1 profile.

        Raises:
            ImperativeError: The file is unreadable, is not YAML, or does not
                hold a mapping
        """
        data = self._read_yaml(path)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ImperativeError(
                f"Profile file {path} of type '{profile_type}' does not contain a mapping"
            )
        return data

    def read_meta_file(self, path: Path) -> Dict[str, Any]:
        """Load a profile type's meta file"""
        data = self._read_yaml(path)
        if not isinstance(data, dict):
            raise ImperativeError(f"Meta file {path} does not contain a mapping")
        return data

    def write_profile_file(self, path: Path, properties: Dict[str, Any]) -> None:
        os.makedirs(Path(path).parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(properties, f, default_flow_style=False, sort_keys=False)
