"""
Core package for haikal-markdown.

Parsing and serialization live in ``document_processor``; validation,
formatting, structural editing and document queries build on it.
"""

from .validator import (
    ValidationResult,
    MarkdownValidator,
    validate_markdown,
    is_valid_haikal,
)
from .formatter import (
    FormattingRule,
    MarkdownFormatter,
    format_markdown,
    auto_correct,
    apply_formatting_rule,
)
from .editor import StructuralEditor

__all__ = [
    'ValidationResult',
    'MarkdownValidator',
    'validate_markdown',
    'is_valid_haikal',
    'FormattingRule',
    'MarkdownFormatter',
    'format_markdown',
    'auto_correct',
    'apply_formatting_rule',
    'StructuralEditor',
]
