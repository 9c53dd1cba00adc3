from __future__ import annotations

"""Tolerant text and structure extraction for one XML document string.

The scanner works on raw text with regular expressions instead of building a
tree, so unbalanced or truncated markup still yields best-effort results
rather than an exception.  Nothing here validates XML.
"""

import logging
import re
from typing import Optional

from ooxml_templater.core.models import XmlAnalysisResult, XmlAttribute, XmlStructure
from ooxml_templater.core.parser.placeholder_grammar import has_placeholder_patterns

logger = logging.getLogger(__name__)

__all__ = [
    "parse_xml_content",
    "extract_text_content",
    "analyze_xml_structure",
]

# A complete tag, or an unterminated one running to the end of the input.
_TAG_RE = re.compile(r"<[^>]*>|<[^>]*$")
_WHITESPACE_RE = re.compile(r"\s+")

# Comments and CDATA sections hold character data, not markup. An unterminated
# section runs to the end of the input.
_NON_MARKUP_RE = re.compile(r"<!--.*?(?:-->|\Z)|<!\[CDATA\[.*?(?:\]\]>|\Z)", re.DOTALL)

# Start and self-closing tags only: excludes </end>, <?pi?> and <!decl>.
_START_TAG_RE = re.compile(r"<([A-Za-z_][\w.\-]*(?::[A-Za-z_][\w.\-]*)?)(?=[\s/>]|$)")

_ATTRIBUTE_RE = re.compile(
    r"(?<![\w.:\-])([A-Za-z_][\w.\-]*(?::[A-Za-z_][\w.\-]*)?)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')"
)


def _local_name(qualified: str) -> str:
    return qualified.rsplit(":", 1)[-1]


def extract_text_content(xml: Optional[str]) -> str:
    """Return the human-readable text of *xml*.

    Tags are replaced by a single space, then every whitespace run is
    collapsed and the result is trimmed.
    """
    if not xml:
        return ""
    text = _TAG_RE.sub(" ", xml)
    return _WHITESPACE_RE.sub(" ", text).strip()


def analyze_xml_structure(xml: Optional[str]) -> XmlStructure:
    """Scan *xml* for element names and placeholder-bearing attributes.

    ``elements`` lists the local name of every start or self-closing tag in
    document order, duplicates included, ignoring anything inside comments
    and CDATA sections.  ``attributes`` lists the ``name="value"`` pairs
    whose value contains a placeholder token, also in document order.
    """
    structure = XmlStructure()
    if not xml or not xml.strip():
        return structure

    markup = _NON_MARKUP_RE.sub(" ", xml)
    for match in _START_TAG_RE.finditer(markup):
        structure.elements.append(_local_name(match.group(1)))

    for match in _ATTRIBUTE_RE.finditer(markup):
        value = match.group(2) if match.group(2) is not None else match.group(3)
        if has_placeholder_patterns(value):
            structure.attributes.append(XmlAttribute(name=_local_name(match.group(1)), value=value))

    return structure


def parse_xml_content(xml: Optional[str]) -> XmlAnalysisResult:
    """Analyze one XML document string.

    Never raises: malformed markup degrades to partial text and structure.
    """
    original = xml if isinstance(xml, str) else ""
    result = XmlAnalysisResult(
        original_content=original,
        text_content=extract_text_content(original),
        has_content=len(original) > 0,
        xml_structure=analyze_xml_structure(original),
    )
    logger.debug(
        "Analyzed XML string: %d chars, %d elements, %d placeholder attributes",
        len(original),
        len(result.xml_structure.elements),
        len(result.xml_structure.attributes),
    )
    return result
