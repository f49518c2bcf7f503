"""
haikal-markdown: parser, serializer, validator, formatter and structural
editor for the Haikal markdown dialect.

Usage:
    >>> import haikal_markdown as hk
    >>> doc = hk.parse_markdown("# Title\\n\\nSome *text*\\n\\n---\\n\\n- item")
    >>> hk.calc_section_count("# Title\\n\\n---\\n\\nBody")
    2
    >>> hk.format_markdown("##   Title   \\n\\n\\nText")
    '## Title\\n\\nText'
"""

__version__ = "0.1.0"

from .exceptions import FormatError, EditIndexError

from .core.document_processor import (
    ParagraphType,
    ListType,
    MediaType,
    TextFormatType,
    CodeLanguage,
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
    DetectionMode,
    detect_paragraph_type,
    extract_text_formats,
    apply_text_formats,
    split_into_sections,
    split_into_paragraphs,
    MarkdownParser,
    parse_markdown,
    parse_section,
    parse_paragraph,
    serialize_markdown,
    serialize_section,
    serialize_paragraph,
)

from .core.validator import ValidationResult, MarkdownValidator, validate_markdown, is_valid_haikal
from .core.formatter import (
    FormattingRule,
    MarkdownFormatter,
    format_markdown,
    auto_correct,
    apply_formatting_rule,
)
from .core.editor import (
    StructuralEditor,
    replace_section_at,
    replace_first_section,
    replace_last_section,
    insert_section_at,
    insert_first_section,
    insert_last_section,
    remove_section_at,
    remove_first_section,
    remove_last_section,
    replace_paragraph_at,
    replace_first_paragraph,
    replace_last_paragraph,
    insert_paragraph_at,
    insert_first_paragraph,
    insert_last_paragraph,
    remove_paragraph_at,
    remove_first_paragraph,
    remove_last_paragraph,
)
from .core.content import (
    is_empty,
    calc_section_count,
    calc_paragraph_count,
    calc_total_paragraph_count,
    find_section_index_with_paragraph_type,
    find_section_with_paragraph_type,
    find_sections_with_paragraph_type,
    find_paragraph_by_type,
    find_paragraphs_by_type,
    find_headers,
    find_headers_by_level,
)

__all__ = [
    '__version__',
    'FormatError',
    'EditIndexError',
    'ParagraphType',
    'ListType',
    'MediaType',
    'TextFormatType',
    'CodeLanguage',
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
    'DetectionMode',
    'detect_paragraph_type',
    'extract_text_formats',
    'apply_text_formats',
    'split_into_sections',
    'split_into_paragraphs',
    'MarkdownParser',
    'parse_markdown',
    'parse_section',
    'parse_paragraph',
    'serialize_markdown',
    'serialize_section',
    'serialize_paragraph',
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
    'replace_section_at',
    'replace_first_section',
    'replace_last_section',
    'insert_section_at',
    'insert_first_section',
    'insert_last_section',
    'remove_section_at',
    'remove_first_section',
    'remove_last_section',
    'replace_paragraph_at',
    'replace_first_paragraph',
    'replace_last_paragraph',
    'insert_paragraph_at',
    'insert_first_paragraph',
    'insert_last_paragraph',
    'remove_paragraph_at',
    'remove_first_paragraph',
    'remove_last_paragraph',
    'is_empty',
    'calc_section_count',
    'calc_paragraph_count',
    'calc_total_paragraph_count',
    'find_section_index_with_paragraph_type',
    'find_section_with_paragraph_type',
    'find_sections_with_paragraph_type',
    'find_paragraph_by_type',
    'find_paragraphs_by_type',
    'find_headers',
    'find_headers_by_level',
]
