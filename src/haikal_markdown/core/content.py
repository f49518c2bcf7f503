"""
Document queries.

Read-only counting and lookup helpers over raw document text. Every helper
parses its input with the default parser, so parser errors propagate.
"""

from typing import List, Optional, Union

from .document_processor.markdown_parser import parse_markdown, parse_section
from .document_processor.types import HeaderParagraph, Paragraph, ParagraphType, Section

TypeArg = Optional[Union[ParagraphType, str]]


def _coerce(paragraph_type: TypeArg) -> Optional[ParagraphType]:
    return ParagraphType(paragraph_type) if paragraph_type is not None else None


def _has_type(section: Section, paragraph_type: ParagraphType) -> bool:
    return any(p.type is paragraph_type for p in section)


def is_empty(content: str) -> bool:
    """True if ``content`` has no sections or only empty ones."""
    sections = parse_markdown(content)
    return not sections or all(not s for s in sections)


def calc_section_count(content: str, paragraph_type: TypeArg = None) -> int:
    """Number of sections, or of sections holding a paragraph of ``paragraph_type``."""
    sections = parse_markdown(content)
    target = _coerce(paragraph_type)
    if target is None:
        return len(sections)
    return sum(1 for s in sections if _has_type(s, target))


def calc_paragraph_count(content: str, paragraph_type: TypeArg = None) -> int:
    """Number of paragraphs in one section's text, optionally of one kind."""
    paragraphs = parse_section(content)
    target = _coerce(paragraph_type)
    if target is None:
        return len(paragraphs)
    return sum(1 for p in paragraphs if p.type is target)


def calc_total_paragraph_count(content: str, paragraph_type: TypeArg = None) -> int:
    """Number of paragraphs across all sections, optionally of one kind."""
    target = _coerce(paragraph_type)
    return sum(
        1
        for section in parse_markdown(content)
        for p in section
        if target is None or p.type is target
    )


def find_section_index_with_paragraph_type(content: str, paragraph_type: TypeArg) -> int:
    """Index of the first section holding a paragraph of the kind, or -1."""
    target = _coerce(paragraph_type)
    for i, section in enumerate(parse_markdown(content)):
        if _has_type(section, target):
            return i
    return -1


def find_section_with_paragraph_type(content: str, paragraph_type: TypeArg) -> Optional[Section]:
    target = _coerce(paragraph_type)
    return next((s for s in parse_markdown(content) if _has_type(s, target)), None)


def find_sections_with_paragraph_type(content: str, paragraph_type: TypeArg) -> List[Section]:
    target = _coerce(paragraph_type)
    return [s for s in parse_markdown(content) if _has_type(s, target)]


def find_paragraph_by_type(content: str, paragraph_type: TypeArg) -> Optional[Paragraph]:
    """First paragraph of the kind in document order, or None."""
    return next(iter(find_paragraphs_by_type(content, paragraph_type)), None)


def find_paragraphs_by_type(content: str, paragraph_type: TypeArg) -> List[Paragraph]:
    """All paragraphs of the kind in document order."""
    target = _coerce(paragraph_type)
    return [p for section in parse_markdown(content) for p in section if p.type is target]


def find_headers(content: str) -> List[HeaderParagraph]:
    return find_paragraphs_by_type(content, ParagraphType.HEADER)


def find_headers_by_level(content: str, level: int) -> List[HeaderParagraph]:
    return [h for h in find_headers(content) if h.level == level]
