"""
Inline Format Engine

Converts between marked-up inline text (``**bold** and *italic*``) and the
``FormattedText`` model: plain text plus half-open format spans whose offsets
refer to the markup-stripped text.

Key Components:
- extract_text_formats: strip markup, record spans
- apply_text_formats: re-insert markup from spans

Extraction runs one pass per format kind, in the fixed order bold, italic,
code, strikethrough, highlight. Bold runs before italic so that ``**`` is
never consumed as two italic markers. Every replacement shifts the spans
recorded by earlier passes so they stay valid in the final plain text.

Subscript and superscript have no extraction pattern; they are emitted by
``apply_text_formats`` when present in a hand-built ``FormattedText``.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .patterns import Pattern
from .types import FormattedText, TextFormat, TextFormatType

logger = logging.getLogger(__name__)


# (kind, pattern, length of one marker)
EXTRACTION_PASSES: Tuple[Tuple[TextFormatType, Pattern, int], ...] = (
    (TextFormatType.BOLD, Pattern("bold", r"\*\*(.*?)\*\*"), 2),
    (TextFormatType.ITALIC, Pattern("italic", r"\*(.*?)\*"), 1),
    (TextFormatType.CODE, Pattern("code", r"`(.*?)`"), 1),
    (TextFormatType.STRIKETHROUGH, Pattern("strikethrough", r"~~(.*?)~~"), 2),
    (TextFormatType.HIGHLIGHT, Pattern("highlight", r"==(.*?)=="), 2),
)

FORMAT_MARKERS: Dict[TextFormatType, str] = {
    TextFormatType.BOLD: "**",
    TextFormatType.ITALIC: "*",
    TextFormatType.STRIKETHROUGH: "~~",
    TextFormatType.HIGHLIGHT: "==",
    TextFormatType.CODE: "`",
    TextFormatType.SUBSCRIPT: "~",
    TextFormatType.SUPERSCRIPT: "^",
}


def _shift(position: int, start: int, marker: int, content: int) -> int:
    """
    Map a boundary position across the removal of one marked-up span.

    The span occupies ``[start, start + 2 * marker + content)`` before the
    removal and ``[start, start + content)`` after it.
    """
    content_start = start + marker
    content_end = content_start + content
    if position <= start:
        return position
    if position <= content_start:
        return start
    if position <= content_end:
        return position - marker
    if position <= content_end + marker:
        return start + content
    return position - 2 * marker


def extract_text_formats(text: str) -> FormattedText:
    """
    Strip inline markup from ``text`` and record where each format applied.

    Args:
        text: Marked-up inline text

    Returns:
        FormattedText whose spans index into the markup-stripped text
    """
    formats: List[TextFormat] = []

    for format_type, pattern, marker in EXTRACTION_PASSES:
        position = 0
        while True:
            match = pattern.search(text, position)
            if match is None:
                break

            start = match.start()
            content = match.group(1)
            new = TextFormat(format_type, start, start + len(content))

            # Earlier spans lying between the new markers are nested inside
            # it; among spans with the same range the outer one comes first.
            index = len(formats)
            for i, f in enumerate(formats):
                inside = f.start >= start + marker and f.end <= start + marker + len(content)
                if inside and (
                    _shift(f.start, start, marker, len(content)),
                    _shift(f.end, start, marker, len(content)),
                ) == (new.start, new.end):
                    index = i
                    break

            formats = [
                TextFormat(
                    f.type,
                    _shift(f.start, start, marker, len(content)),
                    _shift(f.end, start, marker, len(content)),
                )
                for f in formats
            ]
            formats.insert(index, new)

            text = text[:start] + content + text[match.end():]
            position = start + len(content)

    return FormattedText(text, tuple(formats))


def apply_text_formats(
    text: str,
    formats: Optional[Sequence[TextFormat]] = None
) -> str:
    """
    Re-insert inline markup into plain text.

    At every position the closing markers are emitted before the opening
    ones. Spans starting at the same position open longest first; markers
    closing at the same position close in reverse of their opening order.
    Empty spans sit between the two groups, nested in the order given.

    Args:
        text: Plain text, or a FormattedText when ``formats`` is omitted
        formats: Spans to apply

    Returns:
        The marked-up text

    Raises:
        ValueError: If a span reaches past the end of ``text``
    """
    if isinstance(text, FormattedText):
        text, formats = text.text, text.formats

    if not formats:
        return text

    opens: List[List[str]] = [[] for _ in range(len(text) + 1)]
    closes: List[List[str]] = [[] for _ in range(len(text) + 1)]
    empty_opens: List[List[str]] = [[] for _ in range(len(text) + 1)]
    empty_closes: List[List[str]] = [[] for _ in range(len(text) + 1)]

    for fmt in sorted(formats, key=lambda f: (f.start, -f.end)):
        if fmt.end > len(text):
            raise ValueError(
                f"format {fmt.type} [{fmt.start}, {fmt.end}) exceeds text length {len(text)}"
            )
        marker = FORMAT_MARKERS[fmt.type]
        if fmt.start == fmt.end:
            empty_opens[fmt.start].append(marker)
            empty_closes[fmt.start].insert(0, marker)
        else:
            opens[fmt.start].append(marker)
            closes[fmt.end].insert(0, marker)

    parts: List[str] = []
    for i in range(len(text) + 1):
        parts.extend(closes[i])
        parts.extend(empty_opens[i])
        parts.extend(empty_closes[i])
        parts.extend(opens[i])
        if i < len(text):
            parts.append(text[i])

    return "".join(parts)
