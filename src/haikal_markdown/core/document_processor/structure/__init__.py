"""
Document structure package.

Splitting of raw text into sections and paragraphs.
"""

from .splitter import StructureSplitter, split_into_sections, split_into_paragraphs

__all__ = [
    'StructureSplitter',
    'split_into_sections',
    'split_into_paragraphs',
]
