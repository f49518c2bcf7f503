"""
Configuration file paths and constants for haikal-markdown.

Packaged defaults and the JSON schema live next to this module; the
project configuration file and ``.env`` are resolved against the project
root.
"""

from dataclasses import dataclass
from pathlib import Path

_CONFIG_PACKAGE_DIR = Path(__file__).resolve().parent


@dataclass
class ConfigPaths:
    """Configuration file paths and constants."""

    DEFAULT_CONFIG_FILE: str = "haikal.config.json"
    ENV_FILE: str = ".env"
    DEFAULT_CONFIG_DIR: Path = _CONFIG_PACKAGE_DIR / "defaults"
    SCHEMA_DIR: Path = _CONFIG_PACKAGE_DIR / "schema"
    DEFAULTS_FILE: str = "haikal.defaults.json"
    DEFAULT_CONFIG_SCHEMA: str = "config_schema.json"

    @property
    def defaults_path(self) -> Path:
        return self.DEFAULT_CONFIG_DIR / self.DEFAULTS_FILE

    @property
    def schema_path(self) -> Path:
        return self.SCHEMA_DIR / self.DEFAULT_CONFIG_SCHEMA
