"""
Structural Splitter Module - Sections and Paragraphs

This module provides the StructureSplitter class that cuts raw dialect text
into sections (on separator lines) and sections into paragraphs (on blank
lines). Every piece is trimmed and empty pieces are dropped, so a parsed
section is never empty.

Key Components:
- StructureSplitter: Section/paragraph splitting with a configurable separator

Usage:
    >>> split_into_sections("# A\\n\\n---\\n\\n# B")
    ['# A', '# B']
    >>> split_into_paragraphs("# A\\n\\nText")
    ['# A', 'Text']
"""

import re
import logging
from typing import List

logger = logging.getLogger(__name__)


class StructureSplitter:
    """
    Splitter for the two structural levels of a document.

    A section separator is a line consisting of ``---`` optionally surrounded
    by whitespace. Paragraphs are separated by an empty line (``\\n\\n``).

    Attributes:
        _separator_pattern: Compiled regex matching a separator line
    """

    PARAGRAPH_SEPARATOR = "\n\n"

    def __init__(self) -> None:
        self._separator_pattern = re.compile(r"^\s*---\s*$")

    def is_separator(self, line: str) -> bool:
        """Return True if ``line`` is a section separator line."""
        return self._separator_pattern.match(line) is not None

    def split_into_sections(self, text: str) -> List[str]:
        """
        Split a document into trimmed, non-empty section texts.

        Args:
            text: Raw document text

        Returns:
            List of section texts in document order
        """
        sections: List[str] = []
        current: List[str] = []

        for line in text.split("\n"):
            if self.is_separator(line):
                sections.append("\n".join(current))
                current = []
            else:
                current.append(line)
        sections.append("\n".join(current))

        result = [section.strip() for section in sections if section.strip()]
        logger.debug(f"Split document into {len(result)} sections")
        return result

    def split_into_paragraphs(self, section: str) -> List[str]:
        """
        Split a section into trimmed, non-empty paragraph texts.

        Args:
            section: Raw section text

        Returns:
            List of paragraph texts in section order
        """
        return [
            paragraph.strip()
            for paragraph in section.split(self.PARAGRAPH_SEPARATOR)
            if paragraph.strip()
        ]


_splitter = StructureSplitter()


def split_into_sections(text: str) -> List[str]:
    """Split a document into trimmed, non-empty section texts."""
    return _splitter.split_into_sections(text)


def split_into_paragraphs(section: str) -> List[str]:
    """Split a section into trimmed, non-empty paragraph texts."""
    return _splitter.split_into_paragraphs(section)
