"""Top-level package for the OOXML templater.

Locates, classifies and orders the XML parts of Word, PowerPoint and Excel
templates and detects the ``(((placeholder)))`` tokens they contain.
Front-ends should only depend on the public API exposed here rather than
importing internal modules directly.
"""

from .core.models import ContainerEntry, XmlFileRecord, XmlAnalysisResult  # re-export for convenience
from .core.discovery import (
    discover_xml_files,
    is_xml_file,
    get_file_type,
    get_file_category,
    is_embedded_file,
    sort_xml_files,
    get_file_patterns_for_type,
)
from .core.parser import (
    parse_xml_content,
    extract_text_content,
    analyze_xml_structure,
    has_placeholder_patterns,
    PlaceholderParser,
)
from .core.services import TemplateService

__version__ = "1.0.0"

__all__: list[str] = [
    "ContainerEntry",
    "XmlFileRecord",
    "XmlAnalysisResult",
    "discover_xml_files",
    "is_xml_file",
    "get_file_type",
    "get_file_category",
    "is_embedded_file",
    "sort_xml_files",
    "get_file_patterns_for_type",
    "parse_xml_content",
    "extract_text_content",
    "analyze_xml_structure",
    "has_placeholder_patterns",
    "PlaceholderParser",
    "TemplateService",
]
