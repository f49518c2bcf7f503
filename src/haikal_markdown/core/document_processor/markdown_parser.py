"""
Markdown Parser Module - Document Parsing and Serialization

This module converts Haikal dialect text into the document tree and back.
Parsing runs splitter -> type detection -> kind parser; serialization runs
the kind serializers and joins paragraphs with a blank line and sections
with a ``---`` separator line.

Key Components:
- MarkdownParser: Parser/serializer bound to a handler registry and a quote
  nesting limit
- parse_markdown / parse_section / parse_paragraph: module-level parsing
- serialize_markdown / serialize_section / serialize_paragraph: the inverse

Serialization is canonical rather than byte-preserving, but re-parsing
serialized output reproduces the same tree.

Usage:
    >>> document = parse_markdown("# Title\\n\\nSome **bold** text")
    >>> document[0][0].level
    1
    >>> serialize_markdown(document)
    '# Title\\n\\nSome **bold** text'
"""

import logging
from typing import Optional

from .detection import DetectionMode, detect_paragraph_type
from .registry import ParagraphHandlerRegistry, default_registry
from .structure.splitter import split_into_paragraphs, split_into_sections
from .types import Document, Paragraph, Section

logger = logging.getLogger(__name__)

DEFAULT_MAX_QUOTE_DEPTH = 32

SECTION_JOIN = "\n\n---\n\n"
PARAGRAPH_JOIN = "\n\n"


class MarkdownParser:
    """
    Parser and serializer for Haikal documents.

    Holds configuration only; every call is independent and side-effect free.

    Attributes:
        registry: Kind -> handler map used for every dispatch
        max_quote_depth: Maximum nesting of quote paragraphs before parsing fails
    """

    def __init__(
        self,
        registry: Optional[ParagraphHandlerRegistry] = None,
        max_quote_depth: int = DEFAULT_MAX_QUOTE_DEPTH
    ) -> None:
        """
        Initialize MarkdownParser.

        Args:
            registry: Handler registry (default: the shared registry)
            max_quote_depth: Maximum quote nesting depth, at least 1

        Raises:
            ValueError: If max_quote_depth is smaller than 1
        """
        if max_quote_depth < 1:
            raise ValueError(f"max_quote_depth must be at least 1, got {max_quote_depth}")

        self.registry = registry or default_registry
        self.max_quote_depth = max_quote_depth

    def parse_markdown(self, text: str) -> Document:
        """
        Parse a whole document.

        Args:
            text: Raw document text (body only, no frontmatter)

        Returns:
            List of sections, each a non-empty list of paragraphs

        Raises:
            FormatError: If a block cannot be parsed as its detected kind
        """
        document = [self.parse_section(section) for section in split_into_sections(text)]
        document = [section for section in document if section]
        logger.debug(
            f"Parsed document with {len(document)} sections and "
            f"{sum(len(s) for s in document)} paragraphs"
        )
        return document

    def parse_section(self, text: str, depth: int = 0) -> Section:
        """Parse one section's text into its paragraphs."""
        return [self.parse_paragraph(paragraph, depth) for paragraph in split_into_paragraphs(text)]

    def parse_paragraph(self, text: str, depth: int = 0) -> Paragraph:
        """
        Classify and parse a single paragraph block.

        Args:
            text: Paragraph text; surrounding whitespace is ignored
            depth: Current quote nesting depth

        Returns:
            The paragraph node for the detected kind

        Raises:
            FormatError: If the kind parser rejects the block
        """
        text = text.strip()
        paragraph_type = detect_paragraph_type(text, DetectionMode.STRICT)
        return self.registry.require(paragraph_type).parse(text, self, depth)

    def serialize_markdown(self, document: Document) -> str:
        """Serialize a document to canonical text."""
        return SECTION_JOIN.join(self.serialize_section(section) for section in document)

    def serialize_section(self, section: Section) -> str:
        """Serialize one section to canonical text."""
        return PARAGRAPH_JOIN.join(self.serialize_paragraph(paragraph) for paragraph in section)

    def serialize_paragraph(self, paragraph: Paragraph) -> str:
        """Serialize one paragraph to canonical text."""
        return self.registry.require(paragraph.type).serialize(paragraph, self)


default_parser = MarkdownParser()


def parse_markdown(text: str) -> Document:
    """Parse a whole document with the default parser."""
    return default_parser.parse_markdown(text)


def parse_section(text: str) -> Section:
    """Parse one section with the default parser."""
    return default_parser.parse_section(text)


def parse_paragraph(text: str) -> Paragraph:
    """Parse one paragraph with the default parser."""
    return default_parser.parse_paragraph(text)


def serialize_markdown(document: Document) -> str:
    return default_parser.serialize_markdown(document)


def serialize_section(section: Section) -> str:
    return default_parser.serialize_section(section)


def serialize_paragraph(paragraph: Paragraph) -> str:
    return default_parser.serialize_paragraph(paragraph)
