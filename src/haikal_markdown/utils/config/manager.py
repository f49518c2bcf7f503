"""
Main configuration manager for haikal-markdown.

This module provides the ConfigManager class that merges packaged defaults,
an optional project configuration file and environment overrides, and
validates the result against the packaged JSON schema.
"""

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ...exceptions.config_exceptions import ConfigurationFileNotFoundError
from ...core.document_processor.markdown_parser import MarkdownParser
from ...core.formatter import MarkdownFormatter
from .environment import EnvironmentHandler
from .file_operations import FileOperations
from .paths import ConfigPaths
from .schema_validation import SchemaValidator


logger = logging.getLogger(__name__)


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``; nested dicts merge key by key."""
    result = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = deepcopy(value)
    return result


class ConfigManager:
    """
    Configuration manager for haikal-markdown.

    Sources, in increasing precedence:
    - packaged defaults (``haikal.defaults.json``)
    - the project file (``haikal.config.json`` or an explicit path)
    - ``HAIKAL_*`` environment variables, optionally loaded from ``.env``

    A missing default project file is skipped; an explicitly requested file
    that is missing raises ``ConfigurationFileNotFoundError``.
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        project_root: Optional[Union[str, Path]] = None,
        load_env: bool = True,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Initialize the ConfigManager.

        Args:
            config_file: Path to the project configuration file
            project_root: Project root directory (default: current working directory)
            load_env: Whether to load environment variables from a .env file
            environ: Environment mapping to read overrides from (default: ``os.environ``)
        """
        self.project_root = Path(project_root or os.getcwd()).resolve()
        self.paths = ConfigPaths()
        self.explicit_config_file = config_file is not None
        self.config_file = config_file or self.paths.DEFAULT_CONFIG_FILE

        self._config: Dict[str, Any] = {}
        self._loaded = False
        self.logger = logger

        self.file_ops = FileOperations(self.project_root, self.paths.ENV_FILE)
        self.schema_validator = SchemaValidator(self.file_ops, self.paths)
        self.env_handler = EnvironmentHandler(environ)

        if load_env:
            self.file_ops.load_environment_variables()

    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration. Loads if not already loaded."""
        if not self._loaded:
            self.load_config()
        return deepcopy(self._config)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def config_path(self) -> Path:
        return self.file_ops.resolve_path(self.config_file)

    def load_config(self, force_reload: bool = False, validate: bool = True) -> Dict[str, Any]:
        """
        Load configuration from all sources.

        Args:
            force_reload: Force reloading even if already loaded
            validate: Whether to validate configuration against the schema

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigurationFileNotFoundError: If an explicitly requested file is missing
            ConfigurationError: If a file cannot be read or parsed
            ConfigurationValidationError: If the merged configuration is invalid
            EnvironmentVariableError: If an override cannot be converted
        """
        if self._loaded and not force_reload:
            return deepcopy(self._config)

        config = self.file_ops.load_json_file(self.paths.defaults_path)

        if self.config_path.exists():
            self.logger.debug(f"Loading project configuration from {self.config_path}")
            config = merge_configs(config, self.file_ops.load_json_file(self.config_path))
        elif self.explicit_config_file:
            raise ConfigurationFileNotFoundError(
                f"Configuration file not found: {self.config_path}",
                str(self.config_path),
            )
        else:
            self.logger.debug("No project configuration file, using packaged defaults")

        config = self.env_handler.apply_environment_overrides(config)

        if validate:
            self.schema_validator.validate_config_against_schema(config, config_file=str(self.config_path))

        self._config = config
        self._loaded = True
        self.logger.debug("Configuration loaded successfully")
        return deepcopy(self._config)

    def reload_config(self) -> Dict[str, Any]:
        return self.load_config(force_reload=True)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key using dot notation.

        Args:
            key: Configuration key (e.g. 'parser.max_quote_depth')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        config = self.config
        try:
            for k in key.split('.'):
                config = config[k]
            return config
        except (KeyError, TypeError):
            return default

    def has(self, key: str) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel

    def create_parser(self) -> MarkdownParser:
        """Build a parser from the ``parser`` settings."""
        return MarkdownParser(max_quote_depth=self.get('parser.max_quote_depth'))

    def create_formatter(self) -> MarkdownFormatter:
        """Build a formatter from the ``formatter`` settings."""
        return MarkdownFormatter(tab_size=self.get('formatter.tab_size'))
