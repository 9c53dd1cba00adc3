from __future__ import annotations

"""Placeholder grammar, tolerant XML analysis and placeholder detection."""

from .placeholder_grammar import has_placeholder_patterns, classify_placeholder  # noqa: F401
from .xml_analyzer import parse_xml_content, extract_text_content, analyze_xml_structure  # noqa: F401
from .placeholder_parser import PlaceholderParser, find_all_placeholders  # noqa: F401

__all__: list[str] = [
    "has_placeholder_patterns",
    "classify_placeholder",
    "parse_xml_content",
    "extract_text_content",
    "analyze_xml_structure",
    "PlaceholderParser",
    "find_all_placeholders",
]
