"""User-level configuration: defaults for the CLI and the lock directory."""

import configparser
import os
import platform
from pathlib import Path
from typing import Any, Optional

from promoter.constants import DEFAULT_DEFINITION_FILE, DEFAULT_TARGET_BRANCH

APP_NAME = "promoter"

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")

default_cfg = {
    "defaults": {
        "target_branch": DEFAULT_TARGET_BRANCH,
        "definition": DEFAULT_DEFINITION_FILE,
    },
    "dirs": {"lock_dir": ""},
}

if platform.system() == "Darwin":
    config_dir = Path(f"~/Library/Application Support/{APP_NAME}").expanduser()
else:
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file() -> Path:
    return config_dir / f"{APP_NAME}.cfg"


class ConfigAccessor:
    """
    A read-only accessor for the configuration file.

    Missing files, sections and keys fall back to defaults, so the tool works
    without any configuration.

    Usage:
        config = ConfigAccessor()
        value = config.get('defaults', 'target_branch', default='master')
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Path to the configuration file. If None, uses the default path.
        """
        self.config_path = Path(config_path) if config_path else get_config_file()

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get a configuration value, or ``default`` if the section or key is missing.
        """
        try:
            return self.config[section][key]
        except KeyError:
            return default


# Create a global config accessor instance
config = ConfigAccessor()


def get_default_target_branch() -> str:
    return config.get(
        "defaults", "target_branch", default_cfg["defaults"]["target_branch"]
    )


def get_default_definition() -> Path:
    return Path(
        config.get("defaults", "definition", default_cfg["defaults"]["definition"])
    )


def get_lock_dir() -> Optional[Path]:
    """
    Directory for version descriptor locks, or None for the system temp dir.
    """
    lock_dir = config.get("dirs", "lock_dir", default_cfg["dirs"]["lock_dir"])
    if not lock_dir:
        return None
    return Path(lock_dir).expanduser()
