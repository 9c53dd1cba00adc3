from __future__ import annotations

"""Path-based classification of the XML parts of an OOXML container.

Each classifier is an ordered table of ``(predicate, result)`` rules
evaluated top to bottom, first match wins.  Predicates only look at the
lower-cased entry path, so a record is a pure function of its path.
Unexpected path shapes fall through to the ``other``/``False`` defaults.
"""

import logging
import re
from typing import Any, Callable, Iterable, List, Mapping, Tuple, TypeVar

from ooxml_templater.core.models import ContainerEntry, FileCategory, FileType, XmlFileRecord

logger = logging.getLogger(__name__)

__all__ = [
    "TYPE_RULES",
    "CATEGORY_RULES",
    "CONTENT_PATTERNS",
    "discover_xml_files",
    "is_xml_file",
    "get_file_type",
    "get_file_category",
    "is_embedded_file",
]

T = TypeVar("T")
Rule = Tuple[Callable[[str], bool], T]


# Canonical main-body parts of the three document families.
CONTENT_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:^|/)document\.xml$"),
    re.compile(r"(?:^|/)slide\d+\.xml$"),
    re.compile(r"(?:^|/)sheet\d+\.xml$"),
    re.compile(r"(?:^|/)sharedstrings\.xml$"),
)


def _contains(needle: str) -> Callable[[str], bool]:
    return lambda path: needle in path


def _starts_with(prefix: str) -> Callable[[str], bool]:
    return lambda path: path.startswith(prefix)


def _final_segment_contains(*needles: str) -> Callable[[str], bool]:
    def predicate(path: str) -> bool:
        segment = path.rsplit("/", 1)[-1]
        return any(needle in segment for needle in needles)
    return predicate


def _is_relationship_part(path: str) -> bool:
    return "_rels" in path or path.endswith(".rels")


def _is_content_part(path: str) -> bool:
    return any(pattern.search(path) for pattern in CONTENT_PATTERNS)


TYPE_RULES: Tuple[Rule[FileType], ...] = (
    (_contains("charts"), "chart"),
    (_contains("drawings"), "drawing"),
    (_starts_with("word/"), "word"),
    (_starts_with("ppt/"), "powerpoint"),
    (_starts_with("xl/"), "excel"),
)

CATEGORY_RULES: Tuple[Rule[FileCategory], ...] = (
    (_is_relationship_part, "relationships"),
    (_contains("charts"), "chart"),
    (_contains("drawings"), "drawing"),
    (_final_segment_contains("header", "footer"), "headerFooter"),
    (_contains("comments"), "comments"),
    (_contains("notesslide"), "notes"),
    (_is_content_part, "content"),
)

EMBEDDED_CATEGORIES = frozenset({"chart", "drawing"})


def _first_match(rules: Iterable[Rule[T]], path: str, default: T) -> T:
    for predicate, result in rules:
        if predicate(path):
            return result
    return default


def _normalize(path: object) -> str:
    if not isinstance(path, str):
        return ""
    return path.replace("\\", "/").lower()


def is_xml_file(name: object) -> bool:
    """Return True for ``*.xml`` parts and relationship descriptors (``*.rels``)."""
    lowered = _normalize(name)
    return lowered.endswith(".xml") or lowered.endswith(".rels")


def get_file_type(path: object) -> FileType:
    return _first_match(TYPE_RULES, _normalize(path), "other")


def get_file_category(path: object) -> FileCategory:
    return _first_match(CATEGORY_RULES, _normalize(path), "other")


def is_embedded_file(path: object) -> bool:
    """Return True for parts describing nested objects rather than document flow.

    That is anything under an ``embeddings`` folder plus every chart and
    drawing part.
    """
    return "embeddings" in _normalize(path) or get_file_category(path) in EMBEDDED_CATEGORIES


def _coerce_entry(entry: ContainerEntry | Mapping[str, Any]) -> ContainerEntry:
    if isinstance(entry, Mapping):
        return ContainerEntry(
            name=entry.get("name", ""),
            content=entry.get("content"),
            buffer=entry.get("buffer") or b"",
        )
    return entry


def _build_record(entry: ContainerEntry) -> XmlFileRecord:
    return XmlFileRecord(
        path=entry.name,
        content=entry.content,
        buffer=entry.buffer,
        type=get_file_type(entry.name),
        category=get_file_category(entry.name),
        is_embedded=is_embedded_file(entry.name),
    )


def discover_xml_files(archive_files: Iterable[ContainerEntry] | Any) -> List[XmlFileRecord]:
    """Tag every XML-like container entry with type, category and embedded flag.

    *archive_files* is the entry list of the extraction step, or any object
    exposing it through ``get_all_files()``; plain mappings with
    ``name``/``content``/``buffer`` keys are accepted as entries.  Non-XML
    entries are dropped and input order is kept; ordering for processing is
    :func:`~ooxml_templater.core.discovery.ordering.sort_xml_files`'s job.
    """
    entries = archive_files.get_all_files() if hasattr(archive_files, "get_all_files") else archive_files
    records = [
        _build_record(entry)
        for entry in map(_coerce_entry, entries)
        if is_xml_file(entry.name)
    ]
    logger.debug("Discovered %d XML parts", len(records))
    return records
