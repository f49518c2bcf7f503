"""
Formatter Module - Best-Effort Normalization

Rewrites loosely formed text toward the canonical dialect. The formatter is
a fixed pipeline of independent passes; each pass is a list of ``Rule``
substitutions or a per-paragraph dispatch through the handler registry.

Pipeline:
1. strip trailing whitespace on every line
2. tabs to spaces
3. coalesce separator variants (``----``, ``===``, ``--``) into ``---``
4. collapse runs of blank lines and tighten spacing around separators
5. per-paragraph normalization by detected kind (lenient detection)
6. drop empty sections and rejoin with canonical separators
7. trim the whole document

Canonical input passes through unchanged. Malformed input is repaired in a
single pass and is not re-run to a fixpoint, so a second run over the
output of malformed input may still change it.

Key Components:
- FormattingRule: names of the individually applicable rule groups
- MarkdownFormatter: the configured pipeline
- format_markdown / auto_correct / apply_formatting_rule: module-level entry points
"""

import logging
from enum import Enum
from typing import Optional, Union

from .document_processor.detection import DetectionMode, detect_paragraph_type
from .document_processor.handlers import fix_text_formatting
from .document_processor.markdown_parser import PARAGRAPH_JOIN, SECTION_JOIN
from .document_processor.patterns import Rule, apply_rules
from .document_processor.registry import ParagraphHandlerRegistry, default_registry
from .document_processor.structure.splitter import split_into_paragraphs, split_into_sections
from .document_processor.types import ParagraphType

logger = logging.getLogger(__name__)

DEFAULT_TAB_SIZE = 4


class FormattingRule(str, Enum):
    """Rule groups that can be applied on their own."""
    SPACING = "spacing"
    HEADERS = "headers"
    LISTS = "lists"
    QUOTES = "quotes"
    CODE = "code"
    TABLES = "tables"
    FORMATTING = "formatting"

    def __str__(self) -> str:
        return self.value


# Paragraph kinds rewritten by each kind-specific rule group.
RULE_PARAGRAPH_TYPES = {
    FormattingRule.HEADERS: ParagraphType.HEADER,
    FormattingRule.LISTS: ParagraphType.LIST,
    FormattingRule.QUOTES: ParagraphType.QUOTE,
    FormattingRule.CODE: ParagraphType.CODE,
    FormattingRule.TABLES: ParagraphType.TABLE,
}

SEPARATOR_RULES = [
    Rule.of("long_dash_separator", r"\n-{3,}\n", "\n---\n"),
    Rule.of("short_dash_separator", r"\n-{1,2}\n", "\n---\n"),
    Rule.of("equals_separator", r"\n={3,}\n", "\n---\n"),
]

SPACING_RULES = [
    Rule.of("blank_line_runs", r"\n{3,}", "\n\n"),
    Rule.of("separator_padding", r"\n{2,}---\n{2,}", "\n---\n"),
    Rule.of("separator_trailing_blank", r"\n---\n\n", "\n---\n"),
    Rule.of("separator_leading_blank", r"\n\n---\n", "\n---\n"),
]

TRAILING_WHITESPACE = Rule.of("trailing_whitespace", r"\s+$", "")


class MarkdownFormatter:
    """
    Normalization pipeline.

    Attributes:
        tab_size: Number of spaces a tab expands to
        registry: Kind -> handler map used for per-paragraph normalization
    """

    def __init__(
        self,
        tab_size: int = DEFAULT_TAB_SIZE,
        registry: Optional[ParagraphHandlerRegistry] = None
    ) -> None:
        if tab_size < 0:
            raise ValueError(f"tab_size must be non-negative, got {tab_size}")
        self.tab_size = tab_size
        self.registry = registry or default_registry

    def remove_trailing_whitespace(self, text: str) -> str:
        return "\n".join(TRAILING_WHITESPACE.apply(line) for line in text.split("\n"))

    def convert_tabs_to_spaces(self, text: str) -> str:
        return text.replace("\t", " " * self.tab_size)

    def fix_section_separators(self, text: str) -> str:
        return apply_rules(text, SEPARATOR_RULES)

    def fix_paragraph_spacing(self, text: str) -> str:
        return apply_rules(text, SPACING_RULES)

    def normalize_paragraph(self, text: str) -> str:
        """Normalize one paragraph according to its leniently detected kind."""
        paragraph_type = detect_paragraph_type(text, DetectionMode.NORMALIZE)
        return self.registry.require(paragraph_type).normalize(text)

    def normalize_section(self, text: str) -> str:
        return PARAGRAPH_JOIN.join(
            self.normalize_paragraph(paragraph) for paragraph in split_into_paragraphs(text)
        )

    def normalize_paragraphs(self, text: str) -> str:
        return SECTION_JOIN.join(
            self.normalize_section(section) for section in split_into_sections(text)
        )

    def fix_document_structure(self, text: str) -> str:
        """Drop empty sections and rejoin the rest with canonical separators."""
        return SECTION_JOIN.join(split_into_sections(text))

    def format(self, text: str) -> str:
        """
        Run the full pipeline.

        Args:
            text: Raw, possibly malformed document text

        Returns:
            Normalized text
        """
        text = self.remove_trailing_whitespace(text)
        text = self.convert_tabs_to_spaces(text)
        text = self.fix_section_separators(text)
        text = self.fix_paragraph_spacing(text)
        text = self.normalize_paragraphs(text)
        text = self.fix_document_structure(text)
        return text.strip()

    def apply_rule(self, text: str, rule: Union[FormattingRule, str]) -> str:
        """
        Apply a single rule group.

        Kind-specific groups only touch paragraphs of their kind; every other
        paragraph and the document layout are left as they are.

        Args:
            text: Document text
            rule: Rule group, as enum member or its name

        Returns:
            The rewritten text, or ``text`` unchanged for an unknown rule name
        """
        try:
            rule = FormattingRule(rule)
        except ValueError:
            logger.warning(f"Unknown formatting rule '{rule}', leaving text unchanged")
            return text

        if rule is FormattingRule.SPACING:
            return self.fix_paragraph_spacing(text)
        if rule is FormattingRule.FORMATTING:
            return fix_text_formatting(text)

        target = RULE_PARAGRAPH_TYPES[rule]
        handler = self.registry.require(target)
        return PARAGRAPH_JOIN.join(
            handler.normalize(block)
            if detect_paragraph_type(block.strip(), DetectionMode.NORMALIZE) is target
            else block
            for block in text.split(PARAGRAPH_JOIN)
        )


default_formatter = MarkdownFormatter()


def format_markdown(text: str) -> str:
    """Normalize ``text`` toward the canonical dialect."""
    return default_formatter.format(text)


def auto_correct(text: str) -> str:
    """Alias of ``format_markdown``."""
    return format_markdown(text)


def apply_formatting_rule(text: str, rule: Union[FormattingRule, str]) -> str:
    """Apply one named rule group; unknown names return ``text`` unchanged."""
    return default_formatter.apply_rule(text, rule)
