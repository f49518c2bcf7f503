"""
Paragraph Handlers

One handler per paragraph kind. Each handler owns the four kind-specific
concerns of the dialect:

- parse: classified text block -> paragraph node (raises FormatError)
- serialize: paragraph node -> canonical text
- validate: strict grammar check used by the validator
- normalize: best-effort rewrite used by the formatter

Handlers are stateless. The quote handler recurses through the parser it is
given, which also carries the nesting limit.
"""

import re
import logging
from typing import TYPE_CHECKING, List, Optional

from ...exceptions.format_exceptions import FormatError
from .detection import LINKED_MEDIA_PATTERN, MEDIA_PATTERN
from .inline_formats import apply_text_formats, extract_text_formats
from .patterns import Pattern, Rule, apply_rules
from .types import (
    MEDIA_EXTENSIONS,
    CodeParagraph,
    Footnote,
    FootnoteParagraph,
    HeaderParagraph,
    ListParagraph,
    ListType,
    MediaParagraph,
    Paragraph,
    ParagraphType,
    QuoteParagraph,
    TableParagraph,
    TextParagraph,
)

if TYPE_CHECKING:
    from .markdown_parser import MarkdownParser

logger = logging.getLogger(__name__)


def _lines(text: str) -> List[str]:
    return text.split("\n")


class ParagraphHandler:
    """Base handler. Subclasses set ``paragraph_type`` and override the hooks."""

    paragraph_type: ParagraphType

    def parse(self, text: str, parser: "MarkdownParser", depth: int = 0) -> Paragraph:
        raise NotImplementedError

    def serialize(self, paragraph: Paragraph, parser: "MarkdownParser") -> str:
        raise NotImplementedError

    def validate(self, text: str) -> bool:
        return True

    def normalize(self, text: str) -> str:
        return text

    def __repr__(self) -> str:
        return f"{type(self).__name__}(paragraph_type={self.paragraph_type.value})"


# Repairs for spaced or over-long inline markers in plain text.
SPACED_BOLD_ITALIC = Rule.of("spaced_bold_italic", r"\*\*\* ([^*]*?) \*\*\*", r"***\1***")
SPACED_BOLD = Rule.of("spaced_bold", r"\*\* ([^*]*?) \*\*", r"**\1**")
SPACED_ITALIC = Rule.of("spaced_italic", r"(?<![*\w])\* ([^*\n]+?) \*(?![*\w])", r"*\1*")
LONG_CODE = Rule.of("long_code", r"`{2,}(.*?)`{2,}", r"`\1`")
LONG_STRIKETHROUGH = Rule.of("long_strikethrough", r"~{3,}", "~~")
SINGLE_TILDE = Rule.of("single_tilde", r"(?<!~)~(?!~)", "~~")
LONG_HIGHLIGHT = Rule.of("long_highlight", r"={3,}(.*?)={3,}", r"==\1==")

BOLD_ITALIC_SPAN = Pattern("bold_italic_span", r"(\*\*\*.*?\*\*\*)")


def fix_text_formatting(text: str) -> str:
    """
    Repair spaced or over-long inline markers.

    ``** bold **`` becomes ``**bold**`` (outside ``***...***`` spans),
    ``` ``code`` ``` becomes ```code```, ``~~~`` and lone ``~`` become ``~~``,
    ``===x===`` becomes ``==x==``.
    """
    text = SPACED_BOLD_ITALIC.apply(text)

    parts = BOLD_ITALIC_SPAN.compiled_regex.split(text)
    text = "".join(
        part if i % 2 else SPACED_BOLD.apply(part)
        for i, part in enumerate(parts)
    )

    return apply_rules(text, [
        SPACED_ITALIC,
        LONG_CODE,
        LONG_STRIKETHROUGH,
        SINGLE_TILDE,
        LONG_HIGHLIGHT,
    ])


class TextHandler(ParagraphHandler):
    """Plain paragraphs: anything no other rule claims."""

    paragraph_type = ParagraphType.TEXT

    def parse(self, text: str, parser: "MarkdownParser", depth: int = 0) -> TextParagraph:
        return TextParagraph(extract_text_formats(text))

    def serialize(self, paragraph: TextParagraph, parser: "MarkdownParser") -> str:
        return apply_text_formats(paragraph.content)

    def normalize(self, text: str) -> str:
        return fix_text_formatting(text)


class HeaderHandler(ParagraphHandler):
    """Single-line ATX headers, levels 1-6."""

    paragraph_type = ParagraphType.HEADER

    PARSE = Pattern("header", r"(#{1,6})\s(.+)")
    VALID = Pattern("valid_header", r"#{1,6}\s.+")
    SPACING = Rule.of("header_spacing", r"^(#{1,6})\s{2,}(.+)$", r"\1 \2")

    def parse(self, text: str, parser: "MarkdownParser", depth: int = 0) -> HeaderParagraph:
        match = self.PARSE.fullmatch(text)
        if not match:
            raise FormatError("Invalid header format", self.paragraph_type.value, text)
        return HeaderParagraph(len(match.group(1)), extract_text_formats(match.group(2)))

    def serialize(self, paragraph: HeaderParagraph, parser: "MarkdownParser") -> str:
        return "#" * paragraph.level + " " + apply_text_formats(paragraph.content)

    def validate(self, text: str) -> bool:
        return "\n" not in text and self.VALID.fullmatch(text) is not None

    def normalize(self, text: str) -> str:
        return self.SPACING.apply(text)


class ListHandler(ParagraphHandler):
    """
    Bullet, numbered and task lists.

    The list flavour comes from the first line only. Item markers are stripped
    from every line regardless of flavour, so mixed markers parse as one list.
    """

    paragraph_type = ParagraphType.LIST

    TASK = Pattern("task_item", r"-\s\[[ x]\]")
    NUMBER = Pattern("number_item", r"\d+\.")
    ITEM_MARKER = Pattern("item_marker", r"^\s*(?:[-*+]|\d+[.)])(?:\s+\[[ x]\])?\s?")

    # validator grammar; task lines are bullet lines
    VALID_BULLET = Pattern("valid_bullet", r"[-*+]\s")
    VALID_NUMBER = Pattern("valid_number", r"\d+\.\s")

    # formatter grammar
    LENIENT_TASK = Pattern("lenient_task", r"[-*+]\s+\[[ x]\]")
    LENIENT_BULLET = Pattern("lenient_bullet", r"[-*+]\s")
    LENIENT_NUMBER = Pattern("lenient_number", r"\d+\.\s")
    TASK_SPACING = Rule.of("task_spacing", r"^[-*+]\s+\[([ x])\]\s+(.*)", r"- [\1] \2")
    BULLET_SPACING = Rule.of("bullet_spacing", r"^[-*+]\s+", "- ")
    NUMBER_SPACING = Pattern("number_spacing", r"^\d+\.\s+")

    def detect_list_type(self, text: str) -> ListType:
        if self.TASK.match(text):
            return ListType.TASK
        if self.NUMBER.match(text):
            return ListType.NUMBER
        return ListType.BULLET

    def parse(self, text: str, parser: "MarkdownParser", depth: int = 0) -> ListParagraph:
        list_type = self.detect_list_type(text)
        contents = [
            extract_text_formats(self.ITEM_MARKER.compiled_regex.sub("", line, count=1))
            for line in _lines(text)
        ]
        return ListParagraph(list_type, tuple(contents))

    def marker(self, list_type: ListType, index: int) -> str:
        if list_type is ListType.NUMBER:
            return f"{index + 1}. "
        if list_type is ListType.TASK:
            return "- [ ] "
        return "- "

    def serialize(self, paragraph: ListParagraph, parser: "MarkdownParser") -> str:
        return "\n".join(
            self.marker(paragraph.list_type, i) + apply_text_formats(item)
            for i, item in enumerate(paragraph.contents)
        )

    def validate(self, text: str) -> bool:
        lines = _lines(text)
        for line_pattern in (self.VALID_BULLET, self.VALID_NUMBER):
            if line_pattern.match(lines[0]):
                return all(line_pattern.match(line) for line in lines)
        return False

    def normalize(self, text: str) -> str:
        lines = _lines(text)

        if self.LENIENT_TASK.match(lines[0]):
            lines = [self.TASK_SPACING.apply(line) for line in lines]
        elif self.LENIENT_BULLET.match(lines[0]):
            lines = [self.BULLET_SPACING.apply(line) for line in lines]
        elif self.LENIENT_NUMBER.match(lines[0]):
            lines = [
                self.NUMBER_SPACING.compiled_regex.sub(f"{i + 1}. ", line, count=1)
                for i, line in enumerate(lines)
            ]

        return "\n".join(lines)


class MediaHandler(ParagraphHandler):
    """Images, video and audio references, optionally wrapped in a link."""

    paragraph_type = ParagraphType.MEDIA

    def parse(self, text: str, parser: "MarkdownParser", depth: int = 0) -> MediaParagraph:
        url: Optional[str] = None

        match = LINKED_MEDIA_PATTERN.fullmatch(text)
        if match:
            alt, path, url = match.groups()
        else:
            match = MEDIA_PATTERN.fullmatch(text)
            if not match:
                raise FormatError("Invalid media format", self.paragraph_type.value, text)
            alt, path = match.groups()

        extension = path.rsplit(".", 1)[-1].lower()
        media_type = MEDIA_EXTENSIONS.get(extension)

        return MediaParagraph(
            path=path,
            alt=alt or None,
            url=url,
            media_type=media_type,
            extension=extension if media_type else None,
        )

    def serialize(self, paragraph: MediaParagraph, parser: "MarkdownParser") -> str:
        reference = f"![{paragraph.alt or ''}]({paragraph.path})"
        if paragraph.url:
            return f"[{reference}]({paragraph.url})"
        return reference

    def validate(self, text: str) -> bool:
        return (
            LINKED_MEDIA_PATTERN.fullmatch(text) is not None
            or MEDIA_PATTERN.fullmatch(text) is not None
        )


class FootnoteHandler(ParagraphHandler):
    """Numbered footnote definitions, one per line."""

    paragraph_type = ParagraphType.FOOTNOTE

    DEFINITION = Pattern("footnote", r"\[?\^(\d+)\]:\s*(\S.*)")

    def parse(self, text: str, parser: "MarkdownParser", depth: int = 0) -> FootnoteParagraph:
        footnotes = []
        for line in re.split(r"\r?\n", text):
            line = line.strip()
            if not line:
                continue
            match = self.DEFINITION.fullmatch(line)
            if not match:
                logger.debug(f"Skipping malformed footnote line: {line!r}")
                continue
            footnotes.append(Footnote(int(match.group(1)), match.group(2)))

        if not footnotes:
            raise FormatError("Invalid footnote format", self.paragraph_type.value, text)

        return FootnoteParagraph(tuple(footnotes))

    def serialize(self, paragraph: FootnoteParagraph, parser: "MarkdownParser") -> str:
        return "\n".join(f"[^{note.number}]: {note.text}" for note in paragraph.footnotes)

    def validate(self, text: str) -> bool:
        return all(self.DEFINITION.fullmatch(line) for line in _lines(text))


class QuoteHandler(ParagraphHandler):
    """Block quotes. The de-quoted body is parsed as a nested section."""

    paragraph_type = ParagraphType.QUOTE

    MARKER = Pattern("quote_marker", r"^>\s?")
    LENIENT_MARKER = Pattern("lenient_quote_marker", r"^>\s*")

    def parse(self, text: str, parser: "MarkdownParser", depth: int = 0) -> QuoteParagraph:
        if depth >= parser.max_quote_depth:
            raise FormatError(
                f"Quote nesting exceeds maximum depth of {parser.max_quote_depth}",
                self.paragraph_type.value,
                text,
            )

        paragraphs = parser.parse_section(self.dequote(text), depth + 1)
        if not paragraphs:
            raise FormatError("Invalid quote format", self.paragraph_type.value, text)
        return QuoteParagraph(tuple(paragraphs))

    def dequote(self, text: str) -> str:
        """Strip one quote marker from every line."""
        return "\n".join(self.MARKER.compiled_regex.sub("", line, count=1) for line in _lines(text))

    def serialize(self, paragraph: QuoteParagraph, parser: "MarkdownParser") -> str:
        body = parser.serialize_section(list(paragraph.paragraphs))
        return "\n".join(f"> {line}" if line else ">" for line in _lines(body))

    def validate(self, text: str) -> bool:
        return all(line.startswith(">") for line in _lines(text)) and bool(self.dequote(text).strip())

    def normalize(self, text: str) -> str:
        return "\n".join(
            self.LENIENT_MARKER.compiled_regex.sub("> ", line, count=1).rstrip()
            for line in _lines(text)
        )


class CodeHandler(ParagraphHandler):
    """Fenced code blocks with an optional language tag."""

    paragraph_type = ParagraphType.CODE

    PARSE = Pattern("code", r"```(\w+)?\n?([\s\S]*?)\n?```")
    VALID = Pattern("valid_code", r"```.*?\n(?:[\s\S]*?\n)?```")
    FENCE_RULES = [
        Rule.of("opening_fence", r"^`{3,}", "```"),
        Rule.of("closing_fence", r"`{3,}$", "```"),
    ]

    def parse(self, text: str, parser: "MarkdownParser", depth: int = 0) -> CodeParagraph:
        match = self.PARSE.fullmatch(text)
        if not match:
            raise FormatError("Invalid code format", self.paragraph_type.value, text)
        return CodeParagraph(text=match.group(2), language=match.group(1))

    def serialize(self, paragraph: CodeParagraph, parser: "MarkdownParser") -> str:
        if not paragraph.text:
            return f"```{paragraph.language or ''}\n```"
        return f"```{paragraph.language or ''}\n{paragraph.text}\n```"

    def validate(self, text: str) -> bool:
        return self.VALID.fullmatch(text) is not None

    def normalize(self, text: str) -> str:
        return apply_rules(text, self.FENCE_RULES)


class TableHandler(ParagraphHandler):
    """Pipe tables. Delimiter rows are dropped; the first row is kept as is."""

    paragraph_type = ParagraphType.TABLE

    DELIMITER_ROW = Pattern("delimiter_row", r"[\|\s\-:]+")
    VALID_ROW = Pattern("valid_row", r"\|.*\|")
    PIPE_RULES = [
        Rule.of("pipe_spacing", r"\s*\|\s*", " | "),
        Rule.of("leading_pipe", r"^\s*\|", "|"),
        Rule.of("trailing_pipe", r"\|\s*$", "|"),
    ]

    def parse(self, text: str, parser: "MarkdownParser", depth: int = 0) -> TableParagraph:
        rows = []
        lines = [line.strip() for line in _lines(text) if line.strip()]
        for i, line in enumerate(lines):
            if i > 0 and self.DELIMITER_ROW.fullmatch(line):
                continue
            cells = [extract_text_formats(cell.strip()) for cell in line.split("|")[1:-1]]
            if cells:
                rows.append(tuple(cells))
        return TableParagraph(tuple(rows))

    def serialize(self, paragraph: TableParagraph, parser: "MarkdownParser") -> str:
        return "\n".join(
            "| " + " | ".join(apply_text_formats(cell) for cell in row) + " |"
            for row in paragraph.rows
        )

    def validate(self, text: str) -> bool:
        lines = [line for line in _lines(text) if line.strip()]
        return len(lines) >= 2 and all(self.VALID_ROW.fullmatch(line) for line in lines)

    def normalize(self, text: str) -> str:
        return "\n".join(apply_rules(line, self.PIPE_RULES) for line in _lines(text))
