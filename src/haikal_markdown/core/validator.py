"""
Validator Module - Grammar Checking Without Parsing

Checks raw dialect text against the strict grammar and reports every
violation as a human-readable message. The validator never raises for
malformed content and never builds a tree; it shares the splitter, the
detection table and the per-kind handlers with the parser.

Key Components:
- ValidationResult: ``valid`` flag plus ordered error messages
- MarkdownValidator: document, section and paragraph checks
- validate_markdown / is_valid_haikal: module-level entry points

Usage:
    >>> validate_markdown("# Title\\n\\nText").valid
    True
    >>> validate_markdown("# Title  \\n\\n\\n\\nText").errors[0]
    'Invalid whitespace - no trailing spaces or tabs allowed'
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .document_processor.detection import DetectionMode, detect_paragraph_type
from .document_processor.patterns import Pattern
from .document_processor.registry import ParagraphHandlerRegistry, default_registry
from .document_processor.structure.splitter import split_into_paragraphs

logger = logging.getLogger(__name__)

SEPARATOR_ERROR = 'Invalid section separators - use exactly "---" surrounded by single newlines'
WHITESPACE_ERROR = "Invalid whitespace - no trailing spaces or tabs allowed"
UNCLOSED_FORMAT_ERROR = "Unclosed text formatting detected"
PARAGRAPH_SEPARATOR_ERROR = "Invalid paragraph separators - use exactly double newlines"


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating a document.

    Attributes:
        valid: True when no errors were found
        errors: Error messages in document order
    """
    valid: bool
    errors: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


class MarkdownValidator:
    """
    Strict grammar checker.

    Document-level checks run first (separators, whitespace, inline
    markers), then every section is checked for paragraph spacing and every
    paragraph against the grammar of its detected kind.
    """

    SECTION_SPLIT = "\n---\n"

    # Lines that look like a separator but are not exactly '---'.
    SEPARATOR_LIKE = Pattern("separator_like", r"^[ \t]*(?:-{2,}|={3,})[ \t]*$", re.MULTILINE)
    TRAILING_WHITESPACE = Pattern("trailing_whitespace", r"[ \t\f\v\r]+$", re.MULTILINE)
    # Inline marker pairs checked by validate_text_formatting.
    INLINE_MARKERS = (
        Pattern("bold", r"\*\*.*?\*\*"),
        Pattern("italic", r"\*.*?\*"),
        Pattern("strikethrough", r"~~.*?~~"),
        Pattern("highlight", r"==.*?=="),
        Pattern("code", r"`.*?`"),
    )

    def __init__(self, registry: Optional[ParagraphHandlerRegistry] = None) -> None:
        self.registry = registry or default_registry

    def validate_section_separators(self, text: str) -> bool:
        """Every separator-like line must be exactly ``---``."""
        return all(
            match.group(0) == "---"
            for match in self.SEPARATOR_LIKE.compiled_regex.finditer(text)
        )

    def validate_whitespace(self, text: str) -> bool:
        """No trailing whitespace on any line and no tabs anywhere."""
        return "\t" not in text and self.TRAILING_WHITESPACE.search(text) is None

    def validate_text_formatting(self, text: str) -> bool:
        """
        Check that every matched inline marker pair opens and closes alike.

        Pairs are found by the extraction patterns themselves, so a matched
        pair always shares its marker character and a lone unclosed marker
        is never reported. Unbalanced emphasis is left to the formatter.
        """
        for pattern in self.INLINE_MARKERS:
            for match in pattern.compiled_regex.finditer(text):
                span = match.group(0)
                opener, closer = span[:len(span) // 2], span[len(span) // 2:]
                if opener != closer and opener[-1:] not in span:
                    return False
        return True

    def validate_paragraph(self, text: str) -> bool:
        """Check one paragraph against the grammar of its detected kind."""
        paragraph_type = detect_paragraph_type(text, DetectionMode.STRICT)
        return self.registry.require(paragraph_type).validate(text)

    def validate(self, text: str) -> ValidationResult:
        """
        Validate a whole document.

        Args:
            text: Raw document text (body only)

        Returns:
            ValidationResult with every violation found
        """
        errors: List[str] = []

        if not self.validate_section_separators(text):
            errors.append(SEPARATOR_ERROR)

        if not self.validate_whitespace(text):
            errors.append(WHITESPACE_ERROR)

        if not self.validate_text_formatting(text):
            errors.append(UNCLOSED_FORMAT_ERROR)

        spacing_reported = False
        for i, section in enumerate(text.split(self.SECTION_SPLIT)):
            if "\n\n\n" in section:
                errors.append(f"Section {i + 1}: {PARAGRAPH_SEPARATOR_ERROR}")
                spacing_reported = True

            for j, paragraph in enumerate(split_into_paragraphs(section)):
                if not self.validate_paragraph(paragraph):
                    paragraph_type = detect_paragraph_type(paragraph, DetectionMode.STRICT)
                    errors.append(
                        f"Section {i + 1}, Paragraph {j + 1}: Invalid {paragraph_type.value} format"
                    )

        if not spacing_reported and "\n\n\n" in text:
            errors.append(PARAGRAPH_SEPARATOR_ERROR)

        logger.debug(f"Validation finished with {len(errors)} errors")
        return ValidationResult(valid=not errors, errors=errors)


default_validator = MarkdownValidator()


def validate_markdown(text: str) -> ValidationResult:
    """Validate ``text`` and return every grammar violation."""
    return default_validator.validate(text)


def is_valid_haikal(text: str) -> bool:
    """Return True if ``text`` is valid, canonical-grammar dialect text."""
    return default_validator.validate(text).valid
