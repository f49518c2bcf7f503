"""
Document file handling for the haikal CLI.

The core library only works on strings. This module is the file boundary:
it reads a markdown file, splits an optional YAML frontmatter block from the
body, and writes results back with the frontmatter re-attached verbatim.

Key Components:
- MarkdownDocument: Raw frontmatter block, parsed metadata and body
- split_frontmatter: Frontmatter detection and YAML parsing
- read_document / write_document: File I/O around the split
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r'\A---[ \t]*\n(.*?\n)?---[ \t]*(?:\n|\Z)', re.DOTALL)


class FrontmatterParseError(Exception):
    """Raised when a frontmatter block is present but is not a YAML mapping.

    Attributes:
        message: Description of the parsing error
        line_number: Line inside the block where YAML parsing failed (if known)
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.message = message
        self.line_number = line_number
        if line_number:
            message = f"{message} at line {line_number}"
        super().__init__(message)


@dataclass
class MarkdownDocument:
    """A markdown file split into frontmatter and body.

    Attributes:
        body: Document text after the frontmatter block
        frontmatter: The raw block including both ``---`` fences, or None
        metadata: Parsed frontmatter mapping (empty without frontmatter)
    """
    body: str
    frontmatter: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_frontmatter(self) -> bool:
        return self.frontmatter is not None

    def with_body(self, body: str) -> "MarkdownDocument":
        """Same frontmatter, new body. The file's final newline is kept."""
        if self.body.endswith('\n') and body and not body.endswith('\n'):
            body += '\n'
        return MarkdownDocument(body=body, frontmatter=self.frontmatter, metadata=self.metadata)

    def render(self) -> str:
        """Join frontmatter and body back into file text."""
        if self.frontmatter is None:
            return self.body
        block = self.frontmatter if self.frontmatter.endswith('\n') else self.frontmatter + '\n'
        return block + self.body


def split_frontmatter(text: str) -> MarkdownDocument:
    """
    Split a leading ``---`` fenced YAML block from ``text``.

    The block only counts as frontmatter when it parses to a mapping; a
    document that merely opens with a ``---`` separator keeps it in the body.

    Args:
        text: Full file contents

    Returns:
        MarkdownDocument with the block (if any) separated from the body

    Raises:
        FrontmatterParseError: If the block is not valid YAML
    """
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return MarkdownDocument(body=text)

    raw_yaml = match.group(1) or ''
    try:
        metadata = yaml.safe_load(raw_yaml) if raw_yaml.strip() else {}
    except yaml.YAMLError as e:
        mark = getattr(e, 'problem_mark', None)
        raise FrontmatterParseError(
            f"Invalid YAML frontmatter: {e}",
            line_number=mark.line + 2 if mark is not None else None,
        ) from e

    if not isinstance(metadata, dict):
        logger.debug("Leading fenced block is not a YAML mapping, keeping it in the body")
        return MarkdownDocument(body=text)

    logger.debug(f"Found frontmatter with {len(metadata)} keys")
    return MarkdownDocument(body=text[match.end():], frontmatter=match.group(0), metadata=metadata)


def read_document(path: Union[str, Path]) -> MarkdownDocument:
    """Read a markdown file and split its frontmatter.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        FrontmatterParseError: If the frontmatter is not valid YAML
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    return split_frontmatter(path.read_text(encoding='utf-8'))


def write_document(path: Union[str, Path], document: MarkdownDocument) -> None:
    """Write ``document`` to ``path`` with its frontmatter re-attached."""
    Path(path).write_text(document.render(), encoding='utf-8')
    logger.debug(f"Wrote {path}")
