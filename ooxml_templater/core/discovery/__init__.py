from __future__ import annotations

"""Discovery of the XML parts of an extracted OOXML container.

Classification by path, processing order and the per-family file pattern
registry.
"""

from .classifier import (  # noqa: F401
    discover_xml_files,
    is_xml_file,
    get_file_type,
    get_file_category,
    is_embedded_file,
)
from .ordering import sort_xml_files, build_priority_map  # noqa: F401
from .file_patterns import get_file_patterns_for_type, match_pattern  # noqa: F401

__all__: list[str] = [
    "discover_xml_files",
    "is_xml_file",
    "get_file_type",
    "get_file_category",
    "is_embedded_file",
    "sort_xml_files",
    "build_priority_map",
    "get_file_patterns_for_type",
    "match_pattern",
]
