"""
Haikal Document Types

Core data structures for the Haikal document model. A document is an ordered
sequence of sections; a section is an ordered sequence of paragraphs; every
paragraph is exactly one of eight kinds. All nodes are immutable values that
compare structurally.
"""

from enum import Enum
from dataclasses import dataclass, field, asdict
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union


class ParagraphType(str, Enum):
    """Enumeration of paragraph kinds."""
    TEXT = "text"
    HEADER = "header"
    LIST = "list"
    MEDIA = "media"
    FOOTNOTE = "footnote"
    QUOTE = "quote"
    CODE = "code"
    TABLE = "table"

    def __str__(self) -> str:
        return self.value


class ListType(str, Enum):
    """Enumeration of list flavours."""
    BULLET = "bullet"
    NUMBER = "number"
    TASK = "task"

    def __str__(self) -> str:
        return self.value


class MediaType(str, Enum):
    """Media categories derived from the file extension."""
    IMAGE = "image"
    GIF = "gif"
    VIDEO = "video"
    AUDIO = "audio"

    def __str__(self) -> str:
        return self.value


class TextFormatType(str, Enum):
    """Inline format kinds."""
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    HIGHLIGHT = "highlight"
    CODE = "code"
    SUBSCRIPT = "subscript"
    SUPERSCRIPT = "superscript"

    def __str__(self) -> str:
        return self.value


class CodeLanguage(str, Enum):
    """Known code-block language tags. Tags outside this set are still accepted."""
    C = "c"
    CPP = "cpp"
    CSHARP = "csharp"
    JAVA = "java"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    RUBY = "ruby"
    GO = "go"
    RUST = "rust"


MEDIA_EXTENSIONS: Dict[str, MediaType] = {
    "png": MediaType.IMAGE,
    "jpg": MediaType.IMAGE,
    "jpeg": MediaType.IMAGE,
    "webp": MediaType.IMAGE,
    "gif": MediaType.GIF,
    "mp4": MediaType.VIDEO,
    "webm": MediaType.VIDEO,
    "avi": MediaType.VIDEO,
    "mov": MediaType.VIDEO,
    "mp3": MediaType.AUDIO,
    "wav": MediaType.AUDIO,
    "ogg": MediaType.AUDIO,
    "flac": MediaType.AUDIO,
}


def _freeze(instance: Any, name: str) -> None:
    """Store a sequence field of a frozen dataclass as a tuple."""
    object.__setattr__(instance, name, tuple(getattr(instance, name)))


def _to_plain(value: Any) -> Any:
    """Convert enums and tuples nested in ``asdict`` output into JSON-ready data."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    return value


@dataclass(frozen=True)
class TextFormat:
    """An inline format span over markup-stripped text, half-open ``[start, end)``."""
    type: TextFormatType
    start: int
    end: int

    def __post_init__(self):
        if not isinstance(self.type, TextFormatType):
            object.__setattr__(self, "type", TextFormatType(self.type))
        if self.start < 0:
            raise ValueError(f"start must be non-negative, got {self.start}")
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must not exceed end ({self.end})")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "start": self.start, "end": self.end}


@dataclass(frozen=True)
class FormattedText:
    """Plain text plus the inline format spans that apply to it."""
    text: str
    formats: Tuple[TextFormat, ...] = ()

    def __post_init__(self):
        _freeze(self, "formats")

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "formats": [f.to_dict() for f in self.formats]}


@dataclass(frozen=True)
class Footnote:
    """A single numbered footnote definition."""
    number: int
    text: str


class Paragraph:
    """Base class of the eight paragraph kinds."""

    type: ClassVar[ParagraphType]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the node into JSON-ready data, tagged with its kind."""
        data = {"type": self.type.value}
        data.update(_to_plain(asdict(self)))
        return data


@dataclass(frozen=True)
class TextParagraph(Paragraph):
    type: ClassVar[ParagraphType] = ParagraphType.TEXT
    content: FormattedText


@dataclass(frozen=True)
class HeaderParagraph(Paragraph):
    type: ClassVar[ParagraphType] = ParagraphType.HEADER
    level: int
    content: FormattedText

    def __post_init__(self):
        if not 1 <= self.level <= 6:
            raise ValueError(f"header level must be between 1 and 6, got {self.level}")


@dataclass(frozen=True)
class ListParagraph(Paragraph):
    type: ClassVar[ParagraphType] = ParagraphType.LIST
    list_type: ListType
    contents: Tuple[FormattedText, ...]

    def __post_init__(self):
        _freeze(self, "contents")


@dataclass(frozen=True)
class MediaParagraph(Paragraph):
    """
    Embedded media reference.

    ``extension`` is only set when the extension maps to a known media type;
    ``url`` is only set for the linked form ``[![alt](path)](url)``.
    """
    type: ClassVar[ParagraphType] = ParagraphType.MEDIA
    path: str
    alt: Optional[str] = None
    url: Optional[str] = None
    media_type: Optional[MediaType] = None
    extension: Optional[str] = None


@dataclass(frozen=True)
class FootnoteParagraph(Paragraph):
    type: ClassVar[ParagraphType] = ParagraphType.FOOTNOTE
    footnotes: Tuple[Footnote, ...]

    def __post_init__(self):
        _freeze(self, "footnotes")


@dataclass(frozen=True)
class QuoteParagraph(Paragraph):
    type: ClassVar[ParagraphType] = ParagraphType.QUOTE
    paragraphs: Tuple[Paragraph, ...]

    def __post_init__(self):
        _freeze(self, "paragraphs")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "paragraphs": [p.to_dict() for p in self.paragraphs],
        }


@dataclass(frozen=True)
class CodeParagraph(Paragraph):
    type: ClassVar[ParagraphType] = ParagraphType.CODE
    text: str
    language: Optional[str] = None

    @property
    def known_language(self) -> Optional[CodeLanguage]:
        """The language tag as a ``CodeLanguage`` member, or None if unknown/absent."""
        try:
            return CodeLanguage(self.language) if self.language else None
        except ValueError:
            return None


@dataclass(frozen=True)
class TableParagraph(Paragraph):
    type: ClassVar[ParagraphType] = ParagraphType.TABLE
    rows: Tuple[Tuple[FormattedText, ...], ...]

    def __post_init__(self):
        object.__setattr__(self, "rows", tuple(tuple(row) for row in self.rows))


# A section is an ordered list of paragraphs; a document an ordered list of sections.
Section = List[Paragraph]
Document = List[Section]

AnyParagraph = Union[
    TextParagraph,
    HeaderParagraph,
    ListParagraph,
    MediaParagraph,
    FootnoteParagraph,
    QuoteParagraph,
    CodeParagraph,
    TableParagraph,
]
