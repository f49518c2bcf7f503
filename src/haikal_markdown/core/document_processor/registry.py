"""
Paragraph Handler Registry

Maps every paragraph kind to its handler. Parsing, serialization,
validation and normalization all dispatch through one registry, so adding a
kind means registering one handler.
"""

from typing import Dict, List, Optional

from .types import ParagraphType
from .handlers import (
    ParagraphHandler,
    TextHandler,
    HeaderHandler,
    ListHandler,
    MediaHandler,
    FootnoteHandler,
    QuoteHandler,
    CodeHandler,
    TableHandler,
)


class ParagraphHandlerRegistry:
    """Registry for paragraph handlers."""

    def __init__(self):
        """Initialize registry with the default handler for every kind."""
        self._handlers: Dict[ParagraphType, ParagraphHandler] = {}
        self._register_default_handlers()

    def _register_default_handlers(self):
        for handler in (
            TextHandler(),
            HeaderHandler(),
            ListHandler(),
            MediaHandler(),
            FootnoteHandler(),
            QuoteHandler(),
            CodeHandler(),
            TableHandler(),
        ):
            self.register(handler.paragraph_type, handler)

    def register(self, paragraph_type: ParagraphType, handler: ParagraphHandler):
        """Register (or replace) the handler for a paragraph kind."""
        self._handlers[paragraph_type] = handler

    def get(self, paragraph_type: ParagraphType) -> Optional[ParagraphHandler]:
        """Get handler for a paragraph kind."""
        return self._handlers.get(paragraph_type)

    def require(self, paragraph_type: ParagraphType) -> ParagraphHandler:
        """
        Get handler for a paragraph kind.

        Raises:
            KeyError: If no handler is registered for the kind
        """
        handler = self._handlers.get(paragraph_type)
        if handler is None:
            raise KeyError(f"No handler registered for paragraph type '{paragraph_type}'")
        return handler

    def has(self, paragraph_type: ParagraphType) -> bool:
        """Check if handler exists for a paragraph kind."""
        return paragraph_type in self._handlers

    def get_supported_types(self) -> List[ParagraphType]:
        """Get list of supported paragraph kinds."""
        return list(self._handlers.keys())


default_registry = ParagraphHandlerRegistry()
