"""
Configuration management package for haikal-markdown.

Loading, merging, environment overrides and schema validation.
"""

from .manager import ConfigManager, merge_configs
from .paths import ConfigPaths
from .file_operations import FileOperations
from .schema_validation import SchemaValidator
from .environment import EnvironmentHandler

__all__ = [
    'ConfigManager',
    'merge_configs',
    'ConfigPaths',
    'FileOperations',
    'SchemaValidator',
    'EnvironmentHandler',
]
