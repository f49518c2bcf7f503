"""
Schema validation for configuration management.

This module loads the packaged JSON schema and validates merged
configuration against it with ``jsonschema``.
"""

import logging
from typing import Any, Dict, Optional

import jsonschema

from ...exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationSchemaError,
    ConfigurationValidationError,
)
from .file_operations import FileOperations
from .paths import ConfigPaths


logger = logging.getLogger(__name__)


class SchemaValidator:
    """
    Schema validation for configuration management.

    Handles JSON schema loading, validation, and error reporting.
    """

    def __init__(self, file_ops: FileOperations, paths: ConfigPaths) -> None:
        self.file_ops = file_ops
        self.paths = paths
        self.logger = logger
        self._schema: Optional[Dict[str, Any]] = None

    def load_schema(self) -> Dict[str, Any]:
        """
        Load the packaged configuration schema (cached after the first call).

        Raises:
            ConfigurationSchemaError: If the schema is missing or not valid JSON
        """
        if self._schema is None:
            try:
                self._schema = self.file_ops.load_json_file(self.paths.schema_path)
            except ConfigurationError as e:
                raise ConfigurationSchemaError(
                    f"Configuration schema could not be loaded: {e.args[0]}",
                    str(self.paths.schema_path),
                ) from e
        return self._schema

    def validate_config_against_schema(
        self,
        config: Dict[str, Any],
        schema: Optional[Dict[str, Any]] = None,
        config_file: str = "unknown"
    ) -> None:
        """
        Validate configuration against JSON schema.

        Args:
            config: Configuration dictionary to validate
            schema: JSON schema (loads the packaged schema if not provided)
            config_file: Configuration file name for error reporting

        Raises:
            ConfigurationValidationError: If validation fails
            ConfigurationSchemaError: If the schema itself is invalid
        """
        if schema is None:
            schema = self.load_schema()

        try:
            jsonschema.validate(config, schema)
        except jsonschema.ValidationError as e:
            validation_errors = [e.message]
            invalid_fields = []

            if e.absolute_path:
                invalid_fields.append(".".join(str(p) for p in e.absolute_path))

            for ctx_error in getattr(e, 'context', None) or []:
                validation_errors.append(ctx_error.message)
                if ctx_error.absolute_path:
                    invalid_fields.append(".".join(str(p) for p in ctx_error.absolute_path))

            raise ConfigurationValidationError(
                f"Configuration validation failed: {e.message}",
                config_file,
                validation_errors,
                invalid_fields
            ) from e
        except jsonschema.SchemaError as e:
            raise ConfigurationSchemaError(
                f"Invalid JSON schema: {e.message}",
            ) from e

        self.logger.debug("Configuration passed schema validation")
