"""
Environment variable handling for configuration management.

Maps ``HAIKAL_*`` environment variables onto dotted configuration keys and
converts their string values to the type each key expects.
"""

import logging
import os
from copy import deepcopy
from typing import Any, Dict, Mapping, Optional, Tuple

from ...exceptions.config_exceptions import EnvironmentVariableError


logger = logging.getLogger(__name__)


class EnvironmentHandler:
    """
    Environment variable handling for configuration management.

    Handles environment variable overrides and type conversion.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """
        Initialize environment handler.

        Args:
            environ: Mapping to read variables from (default: ``os.environ``)
        """
        self.environ = environ if environ is not None else os.environ
        self.logger = logger

    def get_env_mapping(self) -> Dict[str, Tuple[str, str]]:
        """
        Get mapping of environment variable names to configuration keys.

        Returns:
            Dictionary mapping env var name to (config key, target type)
        """
        return {
            'HAIKAL_LOG_LEVEL': ('logging.level', 'upper'),
            'HAIKAL_LOG_FORMAT': ('logging.format', 'string'),
            'HAIKAL_LOG_FILE': ('logging.file', 'string'),
            'HAIKAL_MAX_QUOTE_DEPTH': ('parser.max_quote_depth', 'integer'),
            'HAIKAL_TAB_SIZE': ('formatter.tab_size', 'integer'),
        }

    def convert_env_value(self, value: str, target_type: str = 'string', variable: Optional[str] = None) -> Any:
        """
        Convert environment variable string to appropriate Python type.

        Args:
            value: Environment variable value (always string)
            target_type: Target type ('string', 'upper', 'integer')
            variable: Variable name for error reporting

        Returns:
            Converted value

        Raises:
            EnvironmentVariableError: If conversion fails
        """
        value = value.strip()
        if target_type == 'integer':
            try:
                return int(value)
            except ValueError as e:
                raise EnvironmentVariableError(
                    f"Environment variable {variable or ''} must be an integer, got '{value}'",
                    variable,
                ) from e
        if target_type == 'upper':
            return value.upper()
        return value

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Args:
            config: Base configuration dictionary

        Returns:
            New configuration with overrides applied

        Raises:
            EnvironmentVariableError: If a set variable cannot be converted
        """
        result = deepcopy(config)

        for env_var, (config_key, target_type) in self.get_env_mapping().items():
            env_value = self.environ.get(env_var)
            if env_value is None or not env_value.strip():
                continue
            converted_value = self.convert_env_value(env_value, target_type, env_var)
            self._set_nested_value(result, config_key, converted_value)
            self.logger.debug(f"Applied environment override: {env_var} -> {config_key}")

        return result

    def _set_nested_value(self, config: Dict[str, Any], key_path: str, value: Any) -> None:
        """Set a nested value in configuration using dot notation."""
        keys = key_path.split('.')
        current = config

        for key in keys[:-1]:
            current = current.setdefault(key, {})

        current[keys[-1]] = value
