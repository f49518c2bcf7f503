"""
Haikal CLI Package.

Command-line interface for parsing, validating, formatting and structurally
editing Haikal markdown files.
"""

from .cli import app, cli_main

__all__ = ["app", "cli_main"]
