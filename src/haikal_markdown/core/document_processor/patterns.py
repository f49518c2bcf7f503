"""
Pattern and Rule primitives.

Named, pre-compiled regular expressions and the substitution rules built on
them. Detection, validation and every formatter pass are expressed in terms
of these two classes.

Key Components:
- Pattern: Named regex with match/fullmatch/search/findall helpers
- Rule: Pattern plus a string or callable replacement

Usage:
    >>> rule = Rule(Pattern("header_spacing", r"^(#{1,6})\\s{2,}(.+)$"), r"\\1 \\2")
    >>> rule.apply("##   Title")
    '## Title'
"""

import re
import logging
from typing import Callable, List, Match, Optional, Union

logger = logging.getLogger(__name__)


class Pattern:
    """
    A named, pre-compiled regular expression.

    Patterns are compiled without ``re.MULTILINE``: anchors refer to the whole
    block unless the caller opts in through ``flags``.

    Attributes:
        name: Descriptive identifier for the pattern
        regex_pattern: Raw regex string
        compiled_regex: Pre-compiled regex object
    """

    def __init__(self, name: str, regex_pattern: str, flags: int = 0) -> None:
        """
        Initialize a Pattern with name and regex validation.

        Args:
            name: Descriptive name for the pattern (e.g., 'header', 'bold')
            regex_pattern: Regular expression pattern string
            flags: Optional ``re`` flags

        Raises:
            ValueError: If name or regex is empty, or the regex does not compile
        """
        if not name or not name.strip():
            raise ValueError("Pattern name cannot be empty")

        if not regex_pattern:
            raise ValueError("Regex pattern cannot be empty")

        self.name = name.strip()
        self.regex_pattern = regex_pattern

        try:
            self.compiled_regex = re.compile(regex_pattern, flags)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern for '{name}': {e}") from e

    def match(self, text: str) -> Optional[Match[str]]:
        """Match at the start of ``text``."""
        return self.compiled_regex.match(text)

    def fullmatch(self, text: str) -> Optional[Match[str]]:
        """Match the whole of ``text``."""
        return self.compiled_regex.fullmatch(text)

    def search(self, text: str, pos: int = 0) -> Optional[Match[str]]:
        """Find the first match at or after ``pos``."""
        return self.compiled_regex.search(text, pos)

    def findall(self, text: str) -> List[str]:
        """
        Find all matches in text.

        Returns:
            List of matched strings (empty list if no matches)
        """
        if not text:
            return []

        return self.compiled_regex.findall(text)

    def __repr__(self) -> str:
        return f"Pattern(name='{self.name}', regex='{self.regex_pattern}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return self.name == other.name and self.regex_pattern == other.regex_pattern

    def __hash__(self) -> int:
        return hash((self.name, self.regex_pattern))


class Rule:
    """
    A substitution rule.

    Associates a Pattern with a replacement strategy. Supports both string
    replacements (with regex backreferences) and callables receiving the match.

    Attributes:
        pattern: Pattern object for matching
        replacement: Replacement string or callable function
    """

    def __init__(
        self,
        pattern: Pattern,
        replacement: Union[str, Callable[[Match[str]], str]]
    ) -> None:
        """
        Initialize a Rule with pattern and replacement strategy.

        Raises:
            TypeError: If pattern is not a Pattern instance
            ValueError: If replacement is neither string nor callable
        """
        if not isinstance(pattern, Pattern):
            raise TypeError("Pattern must be a Pattern instance")

        if not isinstance(replacement, str) and not callable(replacement):
            raise ValueError("Replacement must be string or callable")

        self.pattern = pattern
        self.replacement = replacement

    @classmethod
    def of(
        cls,
        name: str,
        regex_pattern: str,
        replacement: Union[str, Callable[[Match[str]], str]],
        flags: int = 0
    ) -> "Rule":
        """Shorthand for ``Rule(Pattern(name, regex_pattern, flags), replacement)``."""
        return cls(Pattern(name, regex_pattern, flags), replacement)

    def apply(self, text: str) -> str:
        """
        Apply the rule to every non-overlapping match in ``text``.

        Args:
            text: Input text to transform

        Returns:
            Transformed text
        """
        if not text:
            return text

        return self.pattern.compiled_regex.sub(self.replacement, text)

    def __repr__(self) -> str:
        repl_type = "callable" if callable(self.replacement) else "string"
        return f"Rule(pattern='{self.pattern.name}', replacement_type={repl_type})"


def apply_rules(text: str, rules: List[Rule]) -> str:
    """Apply ``rules`` to ``text`` in order."""
    for rule in rules:
        text = rule.apply(text)
    return text
