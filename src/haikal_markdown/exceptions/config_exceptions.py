"""
Configuration-related exceptions for haikal-markdown.
"""

from typing import List, Optional


class ConfigurationError(Exception):
    """Base exception for configuration loading errors."""

    hint: Optional[str] = None

    def __init__(self, message: str, config_file: Optional[str] = None) -> None:
        super().__init__(message)
        self.config_file = config_file

    def __str__(self) -> str:
        msg = super().__str__()
        if self.config_file:
            msg = f"{msg}\nConfig file: {self.config_file}"
        if self.hint:
            msg = f"{msg}\nHint: {self.hint}"
        return msg


class ConfigurationFileNotFoundError(ConfigurationError):
    """A file passed through --config-path does not exist."""

    hint = "Omit --config-path to use haikal.config.json or the packaged defaults"


class ConfigurationValidationError(ConfigurationError):
    """The merged configuration fails the packaged JSON schema."""

    hint = "Check haikal.config.json and any HAIKAL_* environment variables"

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        validation_errors: Optional[List[str]] = None,
        invalid_fields: Optional[List[str]] = None
    ) -> None:
        super().__init__(message, config_file)
        self.validation_errors = validation_errors or []
        self.invalid_fields = invalid_fields or []

    def __str__(self) -> str:
        msg = super().__str__()
        for field in self.invalid_fields:
            msg += f"\n  - {field}"
        return msg


class EnvironmentVariableError(ConfigurationError):
    """A HAIKAL_* override cannot be converted to its setting's type."""

    def __init__(self, message: str, variable_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.variable_name = variable_name
        if variable_name:
            self.hint = f"Unset or correct {variable_name} in the environment or .env file"


class ConfigurationSchemaError(ConfigurationError):
    """The packaged configuration schema is missing or broken."""

    hint = "Reinstall haikal-markdown; the schema ships with the package"
