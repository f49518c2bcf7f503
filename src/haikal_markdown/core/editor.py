"""
Structural Editor Module

Targeted insert/replace/remove operations at section granularity (on a whole
document's text) and at paragraph granularity (on one section's text).

Every operation is a total rebuild: parse, splice the plain list, serialize.
Content outside the edited position is re-emitted in canonical form. New
content is parsed with the single-section or single-paragraph parser before
it is spliced in, so parser errors on it propagate to the caller.

Index contract:
- replace/remove: ``0 <= index < length``
- insert: ``0 <= index <= length``
- violations raise ``EditIndexError`` (an ``IndexError``) carrying the index

Usage:
    >>> insert_section_at("# A\\n\\n---\\n\\n# B", 1, "# M")
    '# A\\n\\n---\\n\\n# M\\n\\n---\\n\\n# B'
"""

import logging
from typing import List, Optional, TypeVar

from ..exceptions.format_exceptions import EditIndexError
from .document_processor.markdown_parser import MarkdownParser, default_parser

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_index(index: int, length: int, inserting: bool = False) -> None:
    upper = length if inserting else length - 1
    if index < 0 or index > upper:
        raise EditIndexError.out_of_bounds(index, length)


def _replaced(items: List[T], index: int, item: T) -> List[T]:
    return items[:index] + [item] + items[index + 1:]


def _inserted(items: List[T], index: int, item: T) -> List[T]:
    return items[:index] + [item] + items[index:]


def _removed(items: List[T], index: int) -> List[T]:
    return items[:index] + items[index + 1:]


class StructuralEditor:
    """
    Section and paragraph editing on raw text.

    Attributes:
        parser: Parser/serializer used for every round-trip
    """

    def __init__(self, parser: Optional[MarkdownParser] = None) -> None:
        self.parser = parser or default_parser

    # Sections

    def replace_section_at(self, content: str, index: int, new_content: str) -> str:
        """
        Replace the section at ``index`` with the section parsed from ``new_content``.

        Raises:
            EditIndexError: If ``index`` is out of bounds
            FormatError: If ``new_content`` cannot be parsed
        """
        sections = self.parser.parse_markdown(content)
        _check_index(index, len(sections))
        new_section = self.parser.parse_section(new_content)
        logger.debug(f"Replacing section {index} of {len(sections)}")
        return self.parser.serialize_markdown(_replaced(sections, index, new_section))

    def replace_first_section(self, content: str, new_content: str) -> str:
        if not self.parser.parse_markdown(content):
            raise EditIndexError("No sections to replace", length=0)
        return self.replace_section_at(content, 0, new_content)

    def replace_last_section(self, content: str, new_content: str) -> str:
        sections = self.parser.parse_markdown(content)
        if not sections:
            raise EditIndexError("No sections to replace", length=0)
        return self.replace_section_at(content, len(sections) - 1, new_content)

    def insert_section_at(self, content: str, index: int, new_content: str) -> str:
        """
        Insert the section parsed from ``new_content`` before position ``index``.

        ``index == len(sections)`` appends.

        Raises:
            EditIndexError: If ``index`` is out of bounds
            FormatError: If ``new_content`` cannot be parsed
        """
        sections = self.parser.parse_markdown(content)
        _check_index(index, len(sections), inserting=True)
        new_section = self.parser.parse_section(new_content)
        logger.debug(f"Inserting section at {index} of {len(sections)}")
        return self.parser.serialize_markdown(_inserted(sections, index, new_section))

    def insert_first_section(self, content: str, new_content: str) -> str:
        return self.insert_section_at(content, 0, new_content)

    def insert_last_section(self, content: str, new_content: str) -> str:
        sections = self.parser.parse_markdown(content)
        return self.insert_section_at(content, len(sections), new_content)

    def remove_section_at(self, content: str, index: int) -> str:
        """
        Remove the section at ``index``.

        Raises:
            EditIndexError: If ``index`` is out of bounds
        """
        sections = self.parser.parse_markdown(content)
        _check_index(index, len(sections))
        logger.debug(f"Removing section {index} of {len(sections)}")
        return self.parser.serialize_markdown(_removed(sections, index))

    def remove_first_section(self, content: str) -> str:
        if not self.parser.parse_markdown(content):
            raise EditIndexError("No sections to remove", length=0)
        return self.remove_section_at(content, 0)

    def remove_last_section(self, content: str) -> str:
        sections = self.parser.parse_markdown(content)
        if not sections:
            raise EditIndexError("No sections to remove", length=0)
        return self.remove_section_at(content, len(sections) - 1)

    # Paragraphs (``content`` is one section's text)

    def replace_paragraph_at(self, content: str, index: int, new_content: str) -> str:
        """
        Replace the paragraph at ``index`` with the paragraph parsed from ``new_content``.

        Raises:
            EditIndexError: If ``index`` is out of bounds
            FormatError: If ``new_content`` cannot be parsed
        """
        paragraphs = self.parser.parse_section(content)
        _check_index(index, len(paragraphs))
        new_paragraph = self.parser.parse_paragraph(new_content)
        logger.debug(f"Replacing paragraph {index} of {len(paragraphs)}")
        return self.parser.serialize_section(_replaced(paragraphs, index, new_paragraph))

    def replace_first_paragraph(self, content: str, new_content: str) -> str:
        if not self.parser.parse_section(content):
            raise EditIndexError("No paragraphs to replace", length=0)
        return self.replace_paragraph_at(content, 0, new_content)

    def replace_last_paragraph(self, content: str, new_content: str) -> str:
        paragraphs = self.parser.parse_section(content)
        if not paragraphs:
            raise EditIndexError("No paragraphs to replace", length=0)
        return self.replace_paragraph_at(content, len(paragraphs) - 1, new_content)

    def insert_paragraph_at(self, content: str, index: int, new_content: str) -> str:
        """
        Insert the paragraph parsed from ``new_content`` before position ``index``.

        Raises:
            EditIndexError: If ``index`` is out of bounds
            FormatError: If ``new_content`` cannot be parsed
        """
        paragraphs = self.parser.parse_section(content)
        _check_index(index, len(paragraphs), inserting=True)
        new_paragraph = self.parser.parse_paragraph(new_content)
        logger.debug(f"Inserting paragraph at {index} of {len(paragraphs)}")
        return self.parser.serialize_section(_inserted(paragraphs, index, new_paragraph))

    def insert_first_paragraph(self, content: str, new_content: str) -> str:
        return self.insert_paragraph_at(content, 0, new_content)

    def insert_last_paragraph(self, content: str, new_content: str) -> str:
        paragraphs = self.parser.parse_section(content)
        return self.insert_paragraph_at(content, len(paragraphs), new_content)

    def remove_paragraph_at(self, content: str, index: int) -> str:
        """
        Remove the paragraph at ``index``.

        Raises:
            EditIndexError: If ``index`` is out of bounds
        """
        paragraphs = self.parser.parse_section(content)
        _check_index(index, len(paragraphs))
        logger.debug(f"Removing paragraph {index} of {len(paragraphs)}")
        return self.parser.serialize_section(_removed(paragraphs, index))

    def remove_first_paragraph(self, content: str) -> str:
        if not self.parser.parse_section(content):
            raise EditIndexError("No paragraphs to remove", length=0)
        return self.remove_paragraph_at(content, 0)

    def remove_last_paragraph(self, content: str) -> str:
        paragraphs = self.parser.parse_section(content)
        if not paragraphs:
            raise EditIndexError("No paragraphs to remove", length=0)
        return self.remove_paragraph_at(content, len(paragraphs) - 1)


default_editor = StructuralEditor()

replace_section_at = default_editor.replace_section_at
replace_first_section = default_editor.replace_first_section
replace_last_section = default_editor.replace_last_section
insert_section_at = default_editor.insert_section_at
insert_first_section = default_editor.insert_first_section
insert_last_section = default_editor.insert_last_section
remove_section_at = default_editor.remove_section_at
remove_first_section = default_editor.remove_first_section
remove_last_section = default_editor.remove_last_section

replace_paragraph_at = default_editor.replace_paragraph_at
replace_first_paragraph = default_editor.replace_first_paragraph
replace_last_paragraph = default_editor.replace_last_paragraph
insert_paragraph_at = default_editor.insert_paragraph_at
insert_first_paragraph = default_editor.insert_first_paragraph
insert_last_paragraph = default_editor.insert_last_paragraph
remove_paragraph_at = default_editor.remove_paragraph_at
remove_first_paragraph = default_editor.remove_first_paragraph
remove_last_paragraph = default_editor.remove_last_paragraph
