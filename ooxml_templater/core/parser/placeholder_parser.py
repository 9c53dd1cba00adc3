from __future__ import annotations

"""Placeholder detection across the XML parts of a container.

Finds every placeholder token in the raw XML of each part, classifies it
(standard reference, numeric directive, delete directive) and records where
it was found.  Substituting values is not done here.
"""

import copy
import hashlib
import logging
import re
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ooxml_templater.config import ConfigManager
from ooxml_templater.core.models import (
    ParseResult,
    ParseSummary,
    Placeholder,
    PlaceholderContext,
    PlaceholderMatch,
    PlaceholderPosition,
    XmlFileRecord,
)
from ooxml_templater.core.parser.placeholder_grammar import ANY_PLACEHOLDER, NUMERIC_DIRECTIVE

logger = logging.getLogger(__name__)

__all__ = [
    "PlaceholderParser",
    "find_all_placeholders",
    "get_delete_type",
    "is_valid_placeholder_name",
    "parse_placeholder_name",
]

_DELETE_DIRECTIVE = re.compile(r"\(\(\((Delete\w+IfEmpty)=([^()]+)\)\)\)")

CONTEXT_LENGTH = 100
MAX_NAME_LENGTH = 200
DEFAULT_CACHE_SIZE = 32

# Checked in order, first hit wins.
_DELETE_TYPES: Tuple[Tuple[str, str], ...] = (
    ("page", "page"),
    ("slide", "slide"),
    ("row", "row"),
    ("section", "section"),
)


def find_all_placeholders(content: Optional[str]) -> List[PlaceholderMatch]:
    """Return every placeholder token of *content* sorted by offset.

    Numeric directives are matched first, then delete directives, then any
    remaining token as a standard reference; a span is reported only once.
    """
    if not content:
        return []

    matches: List[PlaceholderMatch] = []
    seen: Set[Tuple[int, int]] = set()

    for m in NUMERIC_DIRECTIVE.finditer(content):
        seen.add(m.span())
        matches.append(
            PlaceholderMatch(
                kind="numeric",
                full_match=m.group(0),
                content=m.group(2),
                index=m.start(),
                length=len(m.group(0)),
                numeric_value=m.group(1),
            )
        )

    for m in _DELETE_DIRECTIVE.finditer(content):
        if m.span() in seen:
            continue
        seen.add(m.span())
        matches.append(
            PlaceholderMatch(
                kind="delete",
                full_match=m.group(0),
                content=m.group(2),
                index=m.start(),
                length=len(m.group(0)),
                directive=m.group(1),
            )
        )

    for m in ANY_PLACEHOLDER.finditer(content):
        if m.span() in seen:
            continue
        seen.add(m.span())
        matches.append(
            PlaceholderMatch(
                kind="standard",
                full_match=m.group(0),
                content=m.group(0)[3:-3],
                index=m.start(),
                length=len(m.group(0)),
            )
        )

    matches.sort(key=lambda match: match.index)
    return matches


def get_delete_type(directive: str) -> str:
    """Map a delete directive name (e.g. ``DeletePageIfEmpty``) to its target."""
    lowered = (directive or "").lower()
    for needle, delete_type in _DELETE_TYPES:
        if needle in lowered:
            return delete_type
    return "unknown"


def is_valid_placeholder_name(name: object) -> bool:
    if not name or not isinstance(name, str):
        return False
    trimmed = name.strip()
    return 0 < len(trimmed) <= MAX_NAME_LENGTH


def parse_placeholder_name(name: object) -> List[str]:
    """Split a dotted placeholder name into its parts.

    >>> parse_placeholder_name("user.profile.bio")
    ['user', 'profile', 'bio']
    """
    if not is_valid_placeholder_name(name):
        return []
    return [part for part in str(name).strip().split(".") if part]


def _extract_context(content: str, index: int, length: int,
                     context_length: int = CONTEXT_LENGTH) -> PlaceholderContext:
    start = max(0, index - context_length)
    end = min(len(content), index + length + context_length)
    return PlaceholderContext(
        before=content[start:index],
        placeholder=content[index:index + length],
        after=content[index + length:end],
    )


def _configured_cache_size() -> int:
    value = ConfigManager().get_parser_config().get("cache_size", DEFAULT_CACHE_SIZE)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        logger.warning("Invalid parser cache_size in config, using %d: %r", DEFAULT_CACHE_SIZE, value)
        return DEFAULT_CACHE_SIZE
    return value


class PlaceholderParser:
    """Detects placeholders in classified XML parts.

    Results of :meth:`parse_document` are cached; the key is a digest of the
    ordered part paths and their content.  The cache keeps the *cache_size*
    most recently used results (``parser.cache_size`` in the config when not
    given, 0 disables it) and every caller receives its own copy.
    """

    def __init__(self, cache_size: Optional[int] = None) -> None:
        if cache_size is None:
            cache_size = _configured_cache_size()
        self.cache_size = max(0, cache_size)
        self._cache: "OrderedDict[str, ParseResult]" = OrderedDict()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def parse_document(self, xml_files: Sequence[XmlFileRecord]) -> ParseResult:
        """Collect placeholders from all *xml_files*, in the given order."""
        cache_key = self._cache_key(xml_files)
        cached = self._cache.get(cache_key)
        if cached is not None:
            self._cache.move_to_end(cache_key)
            logger.debug("Placeholder parse cache hit (%d parts)", len(xml_files))
            return copy.deepcopy(cached)

        result = ParseResult()
        unique: Dict[str, None] = {}

        for xml_file in xml_files:
            file_placeholders = self.parse_xml_file(xml_file)
            if not file_placeholders:
                continue
            result.file_map[xml_file.path] = file_placeholders
            result.placeholders.extend(file_placeholders)
            for placeholder in file_placeholders:
                unique.setdefault(placeholder.clean_name, None)

        result.unique_placeholders = list(unique)
        result.numeric_directives = [p for p in result.placeholders if p.type == "numeric"]
        result.delete_directives = [p for p in result.placeholders if p.type == "delete"]
        result.summary = ParseSummary(
            total_placeholders=len(result.placeholders),
            unique_count=len(result.unique_placeholders),
            files_with_placeholders=len(result.file_map),
            numeric_directive_count=len(result.numeric_directives),
            delete_directive_count=len(result.delete_directives),
        )

        logger.debug(
            "Found %d placeholders (%d unique) in %d of %d parts",
            result.summary.total_placeholders,
            result.summary.unique_count,
            result.summary.files_with_placeholders,
            len(xml_files),
        )
        self._store(cache_key, result)
        return result

    def parse_xml_file(self, xml_file: XmlFileRecord) -> List[Placeholder]:
        content = xml_file.content or ""
        if not content.strip():
            return []
        return [self._build_placeholder(match, xml_file, content) for match in find_all_placeholders(content)]

    def clear_cache(self) -> None:
        self._cache.clear()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _build_placeholder(match: PlaceholderMatch, xml_file: XmlFileRecord, content: str) -> Placeholder:
        numeric_value = None
        delete_type = None
        if match.kind == "numeric" and match.numeric_value is not None:
            numeric_value = int(match.numeric_value)
        elif match.kind == "delete" and match.directive is not None:
            delete_type = get_delete_type(match.directive)

        return Placeholder(
            type=match.kind,
            raw_pattern=match.full_match,
            clean_name=match.content,
            position=PlaceholderPosition(
                file=xml_file.path,
                file_type=xml_file.type,
                file_category=xml_file.category,
                index=match.index,
                length=match.length,
            ),
            context=_extract_context(content, match.index, match.length),
            numeric_value=numeric_value,
            original_number=match.numeric_value,
            directive=match.directive,
            delete_type=delete_type,
        )

    def _store(self, cache_key: str, result: ParseResult) -> None:
        if not self.cache_size:
            return
        self._cache[cache_key] = copy.deepcopy(result)
        while len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)

    @staticmethod
    def _cache_key(xml_files: Iterable[XmlFileRecord]) -> str:
        digest = hashlib.sha1()
        for xml_file in xml_files:
            digest.update(xml_file.path.encode("utf-8"))
            digest.update(b"\0")
            digest.update((xml_file.content or "").encode("utf-8", errors="replace"))
            digest.update(b"\0")
        return digest.hexdigest()
