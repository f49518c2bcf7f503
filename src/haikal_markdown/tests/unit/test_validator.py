"""
Tests for the strict grammar validator.

The validator never raises for malformed content; every violation comes back
as a message on the ValidationResult.
"""

import pytest

from haikal_markdown.core.document_processor import parse_markdown
from haikal_markdown.core.validator import (
    PARAGRAPH_SEPARATOR_ERROR,
    SEPARATOR_ERROR,
    WHITESPACE_ERROR,
    MarkdownValidator,
    ValidationResult,
    is_valid_haikal,
    validate_markdown,
)


@pytest.fixture
def validator():
    return MarkdownValidator()


class TestDocumentChecks:
    """Checks that run over the whole text."""

    @pytest.mark.parametrize("text", [
        "Section 1\n---\nSection 2\n---\nSection 3",
        "Section 1\n\n---\n\nSection 2",
        "Just one section",
    ])
    def test_exact_separators_pass(self, validator, text):
        """Test '---' lines are accepted."""
        assert validator.validate_section_separators(text)

    @pytest.mark.parametrize("text", [
        "Section 1\n--\nSection 2",
        "Section 1\n----\nSection 2",
        "Section 1\n====\nSection 2",
        "Section 1\n --- \nSection 2",
    ])
    def test_separator_variants_fail(self, validator, text):
        """Test separator-like lines that are not exactly '---'."""
        assert not validator.validate_section_separators(text)

    def test_horizontal_dashes_inside_text_are_not_separators(self, validator):
        """Test dashes that share a line with text are ignored."""
        assert validator.validate_section_separators("A -- B\nC ==== D")

    @pytest.mark.parametrize("text,valid", [
        ("Clean text\nWith newlines", True),
        ("Text with  double spaces", True),
        ("Text with trailing space ", False),
        ("Line 1 \nLine 2", False),
        ("Text with\ttab", False),
        ("\tTab at start", False),
    ])
    def test_whitespace(self, validator, text, valid):
        """Test trailing whitespace and tabs."""
        assert validator.validate_whitespace(text) is valid

    @pytest.mark.parametrize("text", [
        "**bold** text",
        "*italic* text",
        "`code` text",
        "~~strikethrough~~ text",
        "==highlight== text",
        "**bold *and italic* together**",
        "Plain text without formatting",
        "**unclosed bold",
        "*unclosed italic",
        "`unclosed code",
    ])
    def test_text_formatting_is_lenient(self, validator, text):
        """Test the inline check does not report unclosed markers."""
        assert validator.validate_text_formatting(text)


class TestParagraphChecks:
    """Per-paragraph grammar by detected kind."""

    @pytest.mark.parametrize("text", [
        "# Header",
        "- List item",
        "![](image.jpg)",
        "[^1]: Footnote",
        "> Quote",
        "```\ncode\n```",
        "| Header |\n| Cell |",
        "Any text content",
    ])
    def test_valid_paragraphs(self, validator, text):
        """Test one well-formed paragraph of each kind."""
        assert validator.validate_paragraph(text)

    @pytest.mark.parametrize("text", [
        "- Bullet\n1. Number",
        "[^1]: Footnote\nstray",
        "| Only header |",
    ])
    def test_invalid_paragraphs(self, validator, text):
        """Test malformed paragraphs of detected kinds."""
        assert not validator.validate_paragraph(text)


class TestValidateMarkdown:
    """The full validation pass."""

    def test_valid_document(self):
        """Test a well-formed document has no errors."""
        result = validate_markdown("# Header\n\nText content\n\n---\n\n## Another Header\n\nMore content")
        assert result == ValidationResult(valid=True, errors=[])
        assert bool(result)

    def test_canonical_fixture_is_valid(self, canonical_document):
        """Test the canonical fixture passes every check."""
        assert validate_markdown(canonical_document).errors == []

    def test_empty_document(self):
        """Test empty input is valid."""
        assert validate_markdown("").valid

    def test_separator_error(self):
        """Test a short dash line is reported."""
        result = validate_markdown("Section 1\n--\nSection 2")
        assert not result.valid
        assert SEPARATOR_ERROR in result.errors

    def test_whitespace_error(self):
        """Test trailing whitespace is reported."""
        result = validate_markdown("Text with trailing space ")
        assert result.errors == [WHITESPACE_ERROR]

    def test_unclosed_formatting_is_not_reported(self):
        """Test unbalanced emphasis is left to the formatter."""
        assert validate_markdown("Text with **unclosed bold").valid

    def test_paragraph_separator_error_names_section(self):
        """Test triple newlines are reported per section."""
        result = validate_markdown("Paragraph 1\n\n\nParagraph 2")
        assert result.errors == [f"Section 1: {PARAGRAPH_SEPARATOR_ERROR}"]
        assert any("paragraph separators" in error for error in result.errors)

    def test_paragraph_separator_error_in_second_section(self):
        """Test the section number is one-based."""
        result = validate_markdown("A\n\n---\n\nB\n\n\nC")
        assert result.errors == [f"Section 2: {PARAGRAPH_SEPARATOR_ERROR}"]

    def test_triple_newline_around_separator(self):
        """Test a blank-line run spanning a separator is reported at document level."""
        result = validate_markdown("A\n\n\n---\n\nB")
        assert result.errors == [PARAGRAPH_SEPARATOR_ERROR]

    def test_invalid_paragraph_error(self):
        """Test paragraph errors carry section, paragraph and kind."""
        result = validate_markdown("# Title\n\n| Only header |")
        assert result.errors == ["Section 1, Paragraph 2: Invalid table format"]

    def test_named_footnote_is_invalid(self):
        """Test footnote ids must be numbers, as the parser requires."""
        result = validate_markdown("# Notes\n\nSee text.\n\n[^note]: Named footnote")
        assert result.errors == ["Section 1, Paragraph 3: Invalid footnote format"]

    def test_marker_only_quote_is_invalid(self):
        """Test a quote with an empty body is rejected."""
        result = validate_markdown("Intro\n\n>\n>")
        assert result.errors == ["Section 1, Paragraph 2: Invalid quote format"]

    @pytest.mark.parametrize("text", [
        "# Notes\n\nSee text.\n\n[^1]: Numbered footnote",
        "^2]: Bracket optional",
        "> quote\n>\n> - item",
        "> >",
        "Intro\n\n---\n\n| A | B |\n|---|---|\n| 1 | 2 |",
    ])
    def test_valid_documents_parse(self, text):
        """Test a document the validator accepts never fails to parse."""
        assert validate_markdown(text).valid
        assert parse_markdown(text)

    def test_seven_hashes_is_text(self):
        """Test '#######' is plain text, not an invalid header."""
        assert validate_markdown("####### Too many hashes").valid

    def test_all_violations_reported(self):
        """Test errors accumulate instead of stopping at the first."""
        result = validate_markdown("Title \n====\n\n\n- a\n1. b")
        assert SEPARATOR_ERROR in result.errors
        assert WHITESPACE_ERROR in result.errors
        assert "Section 1, Paragraph 2: Invalid list format" in result.errors
        assert len(result.errors) == 4

    def test_to_dict(self):
        """Test the JSON-ready form."""
        assert validate_markdown("x ").to_dict() == {"valid": False, "errors": [WHITESPACE_ERROR]}


class TestIsValidHaikal:
    """Boolean shortcut."""

    def test_valid(self):
        """Test a valid document."""
        assert is_valid_haikal("# Header\n\nText content")

    def test_invalid(self):
        """Test a document with triple newlines."""
        assert not is_valid_haikal("# Header\n\n\n\nText with triple newlines")
