"""
Document processor package for the Haikal dialect.

Provides the document model, paragraph type detection, the inline format
engine, the per-kind handlers and the parser/serializer built on them.
"""

from .types import (
    ParagraphType,
    ListType,
    MediaType,
    TextFormatType,
    CodeLanguage,
    MEDIA_EXTENSIONS,
    TextFormat,
    FormattedText,
    Footnote,
    Paragraph,
    TextParagraph,
    HeaderParagraph,
    ListParagraph,
    MediaParagraph,
    FootnoteParagraph,
    QuoteParagraph,
    CodeParagraph,
    TableParagraph,
    Section,
    Document,
)

from .patterns import Pattern, Rule, apply_rules

from .detection import (
    DetectionMode,
    DetectionRule,
    DETECTION_RULES,
    NORMALIZE_LENIENCY,
    detect_paragraph_type,
)

from .inline_formats import extract_text_formats, apply_text_formats

from .handlers import (
    ParagraphHandler,
    TextHandler,
    HeaderHandler,
    ListHandler,
    MediaHandler,
    FootnoteHandler,
    QuoteHandler,
    CodeHandler,
    TableHandler,
    fix_text_formatting,
)

from .registry import ParagraphHandlerRegistry, default_registry

from .structure import StructureSplitter, split_into_sections, split_into_paragraphs

from .markdown_parser import (
    DEFAULT_MAX_QUOTE_DEPTH,
    MarkdownParser,
    parse_markdown,
    parse_section,
    parse_paragraph,
    serialize_markdown,
    serialize_section,
    serialize_paragraph,
)

__all__ = [
    # Model
    'ParagraphType',
    'ListType',
    'MediaType',
    'TextFormatType',
    'CodeLanguage',
    'MEDIA_EXTENSIONS',
    'TextFormat',
    'FormattedText',
    'Footnote',
    'Paragraph',
    'TextParagraph',
    'HeaderParagraph',
    'ListParagraph',
    'MediaParagraph',
    'FootnoteParagraph',
    'QuoteParagraph',
    'CodeParagraph',
    'TableParagraph',
    'Section',
    'Document',

    # Patterns and detection
    'Pattern',
    'Rule',
    'apply_rules',
    'DetectionMode',
    'DetectionRule',
    'DETECTION_RULES',
    'NORMALIZE_LENIENCY',
    'detect_paragraph_type',

    # Inline formats
    'extract_text_formats',
    'apply_text_formats',

    # Handlers
    'ParagraphHandler',
    'TextHandler',
    'HeaderHandler',
    'ListHandler',
    'MediaHandler',
    'FootnoteHandler',
    'QuoteHandler',
    'CodeHandler',
    'TableHandler',
    'fix_text_formatting',
    'ParagraphHandlerRegistry',
    'default_registry',

    # Structure
    'StructureSplitter',
    'split_into_sections',
    'split_into_paragraphs',

    # Parsing and serialization
    'DEFAULT_MAX_QUOTE_DEPTH',
    'MarkdownParser',
    'parse_markdown',
    'parse_section',
    'parse_paragraph',
    'serialize_markdown',
    'serialize_section',
    'serialize_paragraph',
]
