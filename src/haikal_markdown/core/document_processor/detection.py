"""
Paragraph Type Detection

A single ordered rule table classifies a paragraph-sized block of text into
one of the eight paragraph kinds. The first rule that matches wins; text that
matches nothing is a plain text paragraph.

The parser and the validator use the table as is. The formatter runs in
``DetectionMode.NORMALIZE``, which swaps in the named leniency rules from
``NORMALIZE_LENIENCY`` so that near-miss input (``>quote``, ``* item``) is
recognised and then rewritten into canonical form.

Usage:
    >>> detect_paragraph_type("## Title")
    <ParagraphType.HEADER: 'header'>
    >>> detect_paragraph_type("* item")
    <ParagraphType.TEXT: 'text'>
    >>> detect_paragraph_type("* item", DetectionMode.NORMALIZE)
    <ParagraphType.LIST: 'list'>
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from .patterns import Pattern
from .types import ParagraphType

logger = logging.getLogger(__name__)


class DetectionMode(Enum):
    """Which variant of the rule table to apply."""
    STRICT = "strict"
    NORMALIZE = "normalize"


@dataclass(frozen=True)
class DetectionRule:
    """
    One row of the classification table.

    Attributes:
        paragraph_type: Kind assigned when the rule matches
        pattern: Pattern tested against the block
        whole_block: Require the pattern to span the entire block instead of
            only its beginning
    """
    paragraph_type: ParagraphType
    pattern: Pattern
    whole_block: bool = False

    def matches(self, text: str) -> bool:
        if self.whole_block:
            return self.pattern.fullmatch(text) is not None
        return self.pattern.match(text) is not None


# Media references: the plain form and the linked form wrapping it.
MEDIA_PATTERN = Pattern("media", r"!\[(.*?)\]\((.+?)\)")
LINKED_MEDIA_PATTERN = Pattern("linked_media", r"\[!\[(.*?)\]\((.+?)\)\]\((.+?)\)")

DETECTION_RULES: Tuple[DetectionRule, ...] = (
    DetectionRule(ParagraphType.HEADER, Pattern("header", r"#{1,6}\s")),
    DetectionRule(ParagraphType.QUOTE, Pattern("quote", r">+\s")),
    DetectionRule(ParagraphType.LIST, Pattern("list", r"-\s(\[[ x]\])?|\d+\.\s")),
    DetectionRule(
        ParagraphType.MEDIA,
        Pattern("media", rf"{LINKED_MEDIA_PATTERN.regex_pattern}|{MEDIA_PATTERN.regex_pattern}"),
        whole_block=True,
    ),
    DetectionRule(ParagraphType.FOOTNOTE, Pattern("footnote", r"\[?\^.+\]:")),
    DetectionRule(ParagraphType.CODE, Pattern("code", r"```[\s\S]*```"), whole_block=True),
    DetectionRule(ParagraphType.TABLE, Pattern("table", r"\|.+\|")),
)

# Named leniency exceptions applied only while normalizing.
NORMALIZE_LENIENCY: Dict[ParagraphType, DetectionRule] = {
    # quote markers without the following space
    ParagraphType.QUOTE: DetectionRule(ParagraphType.QUOTE, Pattern("lenient_quote", r">+\s*")),
    # '*' and '+' bullets in addition to '-'
    ParagraphType.LIST: DetectionRule(
        ParagraphType.LIST, Pattern("lenient_list", r"[-*+]\s(\[[ x]\])?|\d+\.\s")
    ),
}


def rules_for(mode: DetectionMode = DetectionMode.STRICT) -> List[DetectionRule]:
    """Return the ordered rule table for ``mode``."""
    if mode is DetectionMode.STRICT:
        return list(DETECTION_RULES)
    return [NORMALIZE_LENIENCY.get(rule.paragraph_type, rule) for rule in DETECTION_RULES]


def detect_paragraph_type(
    text: str,
    mode: DetectionMode = DetectionMode.STRICT
) -> ParagraphType:
    """
    Classify a paragraph-sized block of text.

    Args:
        text: The block to classify (normally already trimmed)
        mode: STRICT for parsing/validation, NORMALIZE for the formatter

    Returns:
        The first matching paragraph kind, or ``ParagraphType.TEXT``
    """
    for rule in rules_for(mode):
        if rule.matches(text):
            return rule.paragraph_type
    return ParagraphType.TEXT
