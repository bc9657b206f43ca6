"""
Configuration management for the icon conversion utility.
Handles reading and writing the optional project config file.
"""
import json
import logging
from pathlib import Path

from painicons.scanner import Identity

logger = logging.getLogger(__name__)

CONFIG_FILE = "icons_config.json"

DEFAULT_CONFIG = {
    "source_dir": "resources/icons/png",
    "windows_dir": "resources/icons/windows",
    "macos_dir": "resources/icons/macos",
    "identities": [
        {"name": "pain", "purpose": "primary application"},
        {"name": "lsp", "purpose": "auxiliary tool"},
    ],
    "resolutions": [16, 32, 48, 64, 128, 256, 512],
    "log_level": "INFO",
    "log_file": None,
}


def validate_config(config):
    """Raise ValueError when a merged config has the wrong shape."""
    for key in ("source_dir", "windows_dir", "macos_dir"):
        if not isinstance(config.get(key), str) or not config[key]:
            raise ValueError(f"'{key}' must be a non-empty path string")

    identities = config.get("identities")
    if not isinstance(identities, list) or not identities:
        raise ValueError("'identities' must be a non-empty list")
    names = set()
    for item in identities:
        if not isinstance(item, dict) or not isinstance(item.get("name"), str) or not item["name"]:
            raise ValueError(f"identity {item!r} needs a non-empty 'name'")
        if not isinstance(item.get("purpose", ""), str):
            raise ValueError(f"identity '{item['name']}' has a non-string 'purpose'")
        if item["name"] in names:
            raise ValueError(f"identity '{item['name']}' is listed twice")
        names.add(item["name"])

    resolutions = config.get("resolutions")
    if not isinstance(resolutions, list) or not resolutions:
        raise ValueError("'resolutions' must be a non-empty list")
    for r in resolutions:
        # bool is an int subclass
        if isinstance(r, bool) or not isinstance(r, int) or r <= 0:
            raise ValueError(f"resolution {r!r} is not a positive integer")

    for key in ("log_level", "log_file"):
        if config.get(key) is not None and not isinstance(config[key], str):
            raise ValueError(f"'{key}' must be a string")


class IconConfig:
    def __init__(self, project_dir=None, config_path=None):
        self.project_dir = Path(project_dir) if project_dir is not None else Path.cwd()
        if config_path is None:
            self.config_path = self.project_dir / CONFIG_FILE
        else:
            self.config_path = Path(config_path)

        self.config = self._load_config()

    def _load_config(self):
        """Load configuration from file, falling back to defaults."""
        merged = json.loads(json.dumps(DEFAULT_CONFIG))
        if not self.config_path.exists():
            return merged
        try:
            with open(self.config_path, 'r') as f:
                config = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Error loading config %s: %s; using defaults", self.config_path, e)
            return merged
        if not isinstance(config, dict):
            logger.error("Config %s is not a JSON object; using defaults", self.config_path)
            return merged
        # Merge with defaults to ensure all keys exist
        defaults = json.loads(json.dumps(merged))
        merged.update(config)
        try:
            validate_config(merged)
        except ValueError as e:
            logger.error("Invalid config %s: %s; using defaults", self.config_path, e)
            return defaults
        return merged

    def save_config(self, config=None):
        """Save configuration to file."""
        if config is not None:
            self.config = config
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=4)
        return self.config_path

    def get(self, key, default=None):
        """Get a configuration value."""
        return self.config.get(key, default)

    def set(self, key, value):
        """Set a configuration value."""
        self.config[key] = value

    def _resolve(self, key):
        path = Path(self.config[key])
        if not path.is_absolute():
            path = self.project_dir / path
        return path

    def get_source_dir(self):
        """Directory holding the committed PNG sources."""
        return self._resolve('source_dir')

    def get_windows_dir(self):
        """Directory receiving the generated .ico files."""
        return self._resolve('windows_dir')

    def get_macos_dir(self):
        """Directory receiving .iconset staging trees and .icns files."""
        return self._resolve('macos_dir')

    def get_identities(self):
        return [Identity(item['name'], item.get('purpose', '')) for item in self.config['identities']]

    def get_resolutions(self):
        return sorted({int(r) for r in self.config['resolutions']})

    def get_log_level(self):
        level = str(self.config.get('log_level') or 'INFO').upper()
        return getattr(logging, level, logging.INFO)

    def get_log_file(self):
        """Get the configured log file path, or None when file logging is off."""
        log_file = self.config.get('log_file')
        if not log_file:
            return None
        path = Path(log_file)
        if not path.is_absolute():
            path = self.project_dir / path
        return path
