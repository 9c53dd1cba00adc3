from __future__ import annotations

"""Where each Office document family keeps its placeholder-bearing parts.

Patterns use glob syntax: ``*`` stays within one path segment and ``**``
spans any number of segments.  :func:`match_pattern` implements exactly that
so the registry can be applied to container entry names.
"""

import re
from functools import lru_cache
from typing import Dict, List, Pattern, Tuple

__all__ = [
    "XML_PATTERNS",
    "EMBEDDED_PATTERNS",
    "get_file_patterns_for_type",
    "match_pattern",
]

XML_PATTERNS: Dict[str, Tuple[str, ...]] = {
    "word": (
        "word/document.xml",
        "word/header*.xml",
        "word/footer*.xml",
        "word/comments.xml",
        "word/footnotes.xml",
        "word/endnotes.xml",
    ),
    "powerpoint": (
        "ppt/slides/slide*.xml",
        "ppt/slideLayouts/slideLayout*.xml",
        "ppt/slideMasters/slideMaster*.xml",
        "ppt/notesSlides/notesSlide*.xml",
        "ppt/comments/comment*.xml",
    ),
    "excel": (
        "xl/worksheets/sheet*.xml",
        "xl/sharedStrings.xml",
        "xl/comments*.xml",
        "xl/drawings/drawing*.xml",
    ),
}

# Appended to every family, and returned alone for unknown families.
EMBEDDED_PATTERNS: Tuple[str, ...] = (
    "word/embeddings/**/*.xml",
    "ppt/embeddings/**/*.xml",
    "ppt/charts/chart*.xml",
    "xl/embeddings/**/*.xml",
    "xl/charts/chart*.xml",
)


def get_file_patterns_for_type(doc_type: str) -> List[str]:
    """Return the type-specific patterns followed by the embedded tail."""
    return [*XML_PATTERNS.get(doc_type, ()), *EMBEDDED_PATTERNS]


@lru_cache(maxsize=128)
def _compile(pattern: str) -> Pattern[str]:
    parts: List[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:[^/]+/)*")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts))


def match_pattern(path: str, pattern: str) -> bool:
    """Return True if container entry *path* matches glob *pattern*.

    >>> match_pattern("word/embeddings/sub/chart1.xml", "word/embeddings/**/*.xml")
    True
    >>> match_pattern("word/header1.xml", "word/header*.xml")
    True
    """
    return _compile(pattern).fullmatch(path) is not None
