"""
Document-level exceptions for the Haikal dialect.

Custom exception classes raised by the paragraph parsers and the structural
editor. The validator and formatter never raise these for malformed content;
they report or repair instead.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class FormatError(Exception):
    """
    Raised when a block of text cannot be parsed as the paragraph kind it was
    dispatched to.

    Attributes:
        message: Human-readable error description (e.g. "Invalid header format")
        paragraph_type: Tag of the paragraph kind that rejected the text
        text: The offending text block
    """

    def __init__(
        self,
        message: str,
        paragraph_type: Optional[str] = None,
        text: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.paragraph_type = paragraph_type
        self.text = text

        logger.debug(
            f"FormatError: {message}",
            extra={
                "paragraph_type": paragraph_type,
                "text_preview": self.preview,
                "error_type": "haikal_format"
            }
        )

    @property
    def preview(self) -> Optional[str]:
        """First 60 characters of the offending text, if any."""
        if self.text is None:
            return None
        return self.text if len(self.text) <= 60 else self.text[:57] + "..."


class EditIndexError(IndexError):
    """
    Raised by the structural editor for out-of-range indices and for
    first/last edits on an empty document or section.

    Attributes:
        index: The rejected index (None when the container was empty)
        length: Length of the sequence the index was checked against
    """

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        length: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.index = index
        self.length = length

    @classmethod
    def out_of_bounds(cls, index: int, length: int) -> "EditIndexError":
        """Build the standard out-of-range error."""
        return cls(f"Index {index} is out of bounds", index=index, length=length)
