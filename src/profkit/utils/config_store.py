import os
import json
import platform
from pathlib import Path
from typing import Dict, Optional

from profkit.constants import CONFIG_FILE_NAME
from profkit.config.document import ConfigDocument


class ConfigStore:
    """Locates profkit's home directory and persists its files.

    Layout under the home directory:
        profiles/<type>/<name>.yaml   legacy v1 profiles
        profkit.config.json           v2 config document
        settings.json                 CLI settings (log level)
    """

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir else self._get_config_dir()
        self.profiles_dir = self.base_dir / "profiles"
        self.config_file = self.base_dir / CONFIG_FILE_NAME
        self.settings_file = self.base_dir / "settings.json"
        self._ensure_config_dir()

    def _get_config_dir(self) -> Path:
        """Get platform-specific config directory"""
        override = os.environ.get("PROFKIT_HOME")
        if override:
            return Path(override)
        system = platform.system()
        if system == "Windows":
            base_dir = os.environ.get("APPDATA", "")
            return Path(base_dir) / "profkit"
        elif system == "Darwin":  # macOS
            return Path.home() / "Library" / "Application Support" / "profkit"
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
            if xdg_config:
                return Path(xdg_config) / "profkit"
            return Path.home() / ".profkit"

    def _ensure_config_dir(self):
        """Ensure config directory exists"""
        os.makedirs(self.base_dir, exist_ok=True)

    def config_exists(self) -> bool:
        return self.config_file.exists()

    def load_config(self) -> Optional[ConfigDocument]:
        """Read the v2 config document, None when absent or unreadable"""
        if not self.config_file.exists():
            return None
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                return ConfigDocument.from_dict(json.load(f))
        except (json.JSONDecodeError, IOError):
            return None

    def save_config(self, document: ConfigDocument) -> Path:
        """Write the v2 config document and return its path"""
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(document.to_dict(), f, indent=4)
            f.write("\n")
        return self.config_file

    def get_settings(self) -> Dict:
        """Get CLI settings"""
        if not self.settings_file.exists():
            return {}
        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            return {}

    def save_setting(self, key: str, value) -> None:
        """Store a single CLI setting"""
        settings = self.get_settings()
        settings[key] = value
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)

    def reset_setting(self, key: str) -> bool:
        """Remove a CLI setting so its default applies. False when it was not set."""
        settings = self.get_settings()
        if key not in settings:
            return False
        del settings[key]
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)
        return True
