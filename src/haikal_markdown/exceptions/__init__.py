"""
Exceptions package for haikal-markdown.

This package contains custom exception classes for parsing, editing and
configuration error scenarios.
"""

from .format_exceptions import (
    FormatError,
    EditIndexError,
)

from .config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    EnvironmentVariableError,
    ConfigurationSchemaError,
)

__all__ = [
    # Document errors
    'FormatError',
    'EditIndexError',

    # Configuration errors
    'ConfigurationError',
    'ConfigurationFileNotFoundError',
    'ConfigurationValidationError',
    'EnvironmentVariableError',
    'ConfigurationSchemaError',
]
