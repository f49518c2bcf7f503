"""
Tests for the inline format engine: markup extraction, markup application
and the offset bookkeeping between them.
"""

import pytest

from haikal_markdown.core.document_processor import (
    FormattedText,
    TextFormat,
    TextFormatType,
    apply_text_formats,
    extract_text_formats,
)


def fmt(kind, start, end):
    return TextFormat(TextFormatType(kind), start, end)


class TestExtractTextFormats:
    """Markup -> plain text plus spans."""

    def test_plain_text_has_no_formats(self):
        """Test text without markers passes through."""
        result = extract_text_formats("Plain text")
        assert result == FormattedText("Plain text", ())

    def test_single_bold(self):
        """Test a bold span is recorded in plain-text coordinates."""
        result = extract_text_formats("Some **bold** text")
        assert result.text == "Some bold text"
        assert result.formats == (fmt("bold", 5, 9),)

    def test_each_kind(self):
        """Test every extractable kind."""
        cases = {
            "*i*": "italic",
            "`c`": "code",
            "~~s~~": "strikethrough",
            "==h==": "highlight",
        }
        for markup, kind in cases.items():
            result = extract_text_formats(markup)
            assert len(result.text) == 1
            assert result.formats == (fmt(kind, 0, 1),)

    def test_offsets_account_for_earlier_markup(self):
        """Test spans found in later passes see already-stripped text."""
        result = extract_text_formats("**bold** and *italic*")
        assert result.text == "bold and italic"
        assert result.formats == (fmt("bold", 0, 4), fmt("italic", 9, 15))

    def test_earlier_spans_shift_when_later_markup_is_removed(self):
        """Test a bold span after an italic span is moved left by the italic markers."""
        result = extract_text_formats("*a* then **b**")
        assert result.text == "a then b"
        bold = next(f for f in result.formats if f.type is TextFormatType.BOLD)
        italic = next(f for f in result.formats if f.type is TextFormatType.ITALIC)
        assert result.text[bold.start:bold.end] == "b"
        assert result.text[italic.start:italic.end] == "a"

    def test_nested_italic_inside_bold(self):
        """Test the outer span shrinks around removed inner markers."""
        result = extract_text_formats("**bold *and italic* together**")
        assert result.text == "bold and italic together"
        assert fmt("bold", 0, 24) in result.formats
        assert fmt("italic", 5, 15) in result.formats

    def test_bold_italic_triple_stars(self):
        """Test '***x***' becomes overlapping bold and italic spans."""
        result = extract_text_formats("***x***")
        assert result.text == "x"
        assert set(result.formats) == {fmt("bold", 0, 1), fmt("italic", 0, 1)}

    @pytest.mark.parametrize("markup,outer,inner", [
        ("==**a**==", "highlight", "bold"),
        ("`*a*`", "code", "italic"),
        ("~~*x*~~", "strikethrough", "italic"),
        ("**==a==**", "bold", "highlight"),
    ])
    def test_same_range_spans_list_outer_first(self, markup, outer, inner):
        """Test spans covering the same text are ordered by their nesting in the markup."""
        result = extract_text_formats(markup)
        assert result.formats == (fmt(outer, 0, 1), fmt(inner, 0, 1))

    def test_empty_span_between_markers_is_inner(self):
        """Test an empty span found inside a later match is ordered after it."""
        result = extract_text_formats("`**`")
        assert result == FormattedText("", (fmt("code", 0, 0), fmt("italic", 0, 0)))

    def test_unclosed_marker_is_left_alone(self):
        """Test a lone marker stays in the text."""
        for text in ("`unclosed code", "~~unclosed strike", "==unclosed highlight"):
            result = extract_text_formats(text)
            assert result.text == text
            assert result.formats == ()

    def test_adjacent_stars_form_an_empty_italic_span(self):
        """Test '**' with no closing pair is consumed as an empty italic span."""
        result = extract_text_formats("**unclosed bold")
        assert result.text == "unclosed bold"
        assert result.formats == (fmt("italic", 0, 0),)


class TestApplyTextFormats:
    """Plain text plus spans -> markup."""

    def test_no_formats(self):
        """Test text without spans is returned unchanged."""
        assert apply_text_formats("plain", []) == "plain"

    def test_accepts_formatted_text(self):
        """Test a FormattedText can be passed on its own."""
        assert apply_text_formats(FormattedText("bold", (fmt("bold", 0, 4),))) == "**bold**"

    def test_longer_span_opens_first(self):
        """Test spans at the same start nest longest outermost."""
        text = apply_text_formats("ab", [fmt("italic", 0, 1), fmt("bold", 0, 2)])
        assert text == "***a*b**"

    def test_empty_spans_nest_between_closes_and_opens(self):
        """Test empty spans are emitted whole, in list order, after closing markers."""
        formats = [fmt("italic", 0, 1), fmt("code", 1, 1), fmt("italic", 1, 1), fmt("bold", 1, 2)]
        assert apply_text_formats("ab", formats) == "*a*`**`**b**"

    def test_write_only_kinds(self):
        """Test subscript and superscript markers are emitted."""
        assert apply_text_formats("H2O", [fmt("subscript", 1, 2)]) == "H~2~O"
        assert apply_text_formats("x2", [fmt("superscript", 1, 2)]) == "x^2^"

    def test_span_past_end_raises(self):
        """Test spans must lie within the text."""
        with pytest.raises(ValueError):
            apply_text_formats("ab", [fmt("bold", 0, 3)])

    def test_invalid_span_rejected_on_construction(self):
        """Test TextFormat rejects start > end and negative starts."""
        with pytest.raises(ValueError):
            TextFormat(TextFormatType.BOLD, 3, 1)
        with pytest.raises(ValueError):
            TextFormat(TextFormatType.BOLD, -1, 1)


class TestRoundTrip:
    """apply(extract(x)) == x for markup the extractor produces."""

    @pytest.mark.parametrize("markup", [
        "Plain text",
        "Some **bold** text",
        "**bold** and *italic* together",
        "*a* then **b**",
        "**bold *and italic* together**",
        "***x***",
        "`code` and ~~gone~~ and ==marked==",
        "Mixed **bold**, *italic*, `code`, ~~strike~~ and ==mark== in one line",
        "==**a**==",
        "`*a*`",
        "~~*x*~~",
        "**==a==**",
        "`**`",
    ])
    def test_round_trip(self, markup):
        """Test extraction followed by application restores the markup."""
        assert apply_text_formats(extract_text_formats(markup)) == markup

    @pytest.mark.parametrize("markup", [" ``````**", "*`*`**a**", "``**"])
    def test_reextraction_is_stable(self, markup):
        """Test applied markup extracts back to the same spans when the markup itself is not reproduced."""
        extracted = extract_text_formats(markup)
        assert extract_text_formats(apply_text_formats(extracted)) == extracted
