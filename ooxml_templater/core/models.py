from __future__ import annotations

"""Shared data structures used across the templater core.

This module is intentionally free of I/O code so that the contained objects
can be reused in any context (unit-tests, services, scripts).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

__all__ = [
    "FileType",
    "FileCategory",
    "PlaceholderKind",
    "ContainerEntry",
    "XmlFileRecord",
    "XmlAttribute",
    "XmlStructure",
    "XmlAnalysisResult",
    "PlaceholderMatch",
    "PlaceholderPosition",
    "PlaceholderContext",
    "Placeholder",
    "ParseSummary",
    "ParseResult",
]

FileType = Literal["word", "powerpoint", "excel", "chart", "drawing", "other"]
FileCategory = Literal[
    "content",
    "relationships",
    "chart",
    "drawing",
    "headerFooter",
    "comments",
    "notes",
    "other",
]
PlaceholderKind = Literal["standard", "numeric", "delete"]


@dataclass(frozen=True)
class ContainerEntry:
    """One member of an extracted OOXML container.

    ``content`` holds the decoded text for XML-like members and ``None`` for
    binary members (images, embedded packages...).
    """

    name: str
    content: Optional[str]
    buffer: bytes = b""


@dataclass(frozen=True)
class XmlFileRecord:
    """Classified XML part of a container.

    Every field except ``content``/``buffer`` is derived from ``path`` alone.
    """

    path: str
    content: Optional[str]
    buffer: bytes
    type: FileType
    category: FileCategory
    is_embedded: bool


@dataclass(frozen=True)
class XmlAttribute:
    name: str
    value: str


@dataclass
class XmlStructure:
    """Flat token stream of one XML document (not a tree)."""

    elements: List[str] = field(default_factory=list)
    attributes: List[XmlAttribute] = field(default_factory=list)


@dataclass
class XmlAnalysisResult:
    original_content: str
    text_content: str
    has_content: bool
    xml_structure: XmlStructure


@dataclass(frozen=True)
class PlaceholderMatch:
    """Raw lexical match of a placeholder token inside a string.

    Attributes
    ----------
    kind
        ``numeric`` for ``(((NNN=ref)))``, ``delete`` for
        ``(((Delete…IfEmpty=ref)))`` and ``standard`` for everything else.
    full_match
        The token including its delimiters.
    content
        Reference part of the token (after ``=`` for directives).
    index, length
        Offset and length of ``full_match`` in the scanned string.
    """

    kind: PlaceholderKind
    full_match: str
    content: str
    index: int
    length: int
    numeric_value: Optional[str] = None
    directive: Optional[str] = None


@dataclass(frozen=True)
class PlaceholderPosition:
    file: str
    file_type: str
    file_category: str
    index: int
    length: int


@dataclass(frozen=True)
class PlaceholderContext:
    before: str
    placeholder: str
    after: str

    @property
    def full_context(self) -> str:
        return f"{self.before}{self.placeholder}{self.after}"


@dataclass(frozen=True)
class Placeholder:
    """Placeholder found in an XML part, with location metadata."""

    type: PlaceholderKind
    raw_pattern: str
    clean_name: str
    position: PlaceholderPosition
    context: PlaceholderContext
    numeric_value: Optional[int] = None
    original_number: Optional[str] = None
    directive: Optional[str] = None
    delete_type: Optional[str] = None


@dataclass
class ParseSummary:
    total_placeholders: int = 0
    unique_count: int = 0
    files_with_placeholders: int = 0
    numeric_directive_count: int = 0
    delete_directive_count: int = 0


@dataclass
class ParseResult:
    """Placeholders detected across all XML parts of one container."""

    placeholders: List[Placeholder] = field(default_factory=list)
    unique_placeholders: List[str] = field(default_factory=list)
    numeric_directives: List[Placeholder] = field(default_factory=list)
    delete_directives: List[Placeholder] = field(default_factory=list)
    file_map: Dict[str, List[Placeholder]] = field(default_factory=dict)
    summary: ParseSummary = field(default_factory=ParseSummary)
