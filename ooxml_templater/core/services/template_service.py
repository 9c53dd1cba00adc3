from __future__ import annotations

"""High-level template analysis service.

Entry-point for any front-end that needs to inspect a template: retrieve
it, extract the container, classify and order its XML parts, then analyze
each part and detect its placeholders.  Retrieval and extraction errors
propagate to the caller unchanged.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence

from ooxml_templater.config import ConfigManager
from ooxml_templater.core.container import ExtractedContainer, extract_container
from ooxml_templater.core.discovery import (
    discover_xml_files,
    get_file_patterns_for_type,
    match_pattern,
    sort_xml_files,
)
from ooxml_templater.core.discovery.ordering import priority_map_from_config
from ooxml_templater.core.fetch import (
    detect_document_type,
    detect_mime_type,
    document_family,
    extract_filename,
    fetch_template,
)
from ooxml_templater.core.models import ParseResult, XmlAnalysisResult, XmlFileRecord
from ooxml_templater.core.parser import PlaceholderParser, has_placeholder_patterns, parse_xml_content

logger = logging.getLogger(__name__)

__all__ = ["TemplateService", "TemplateInfo", "FileAnalysis", "TemplateParseResult"]


@dataclass(frozen=True)
class TemplateInfo:
    source: str
    type: str
    mime_type: str
    filename: str


@dataclass
class FileAnalysis:
    """Analysis of one XML part, in processing order."""

    record: XmlFileRecord
    analysis: XmlAnalysisResult
    has_placeholders: bool


@dataclass
class TemplateParseResult:
    template: TemplateInfo
    placeholders: ParseResult
    xml_files: List[XmlFileRecord] = field(default_factory=list)
    parsed_at: str = ""

    @property
    def xml_file_count(self) -> int:
        return len(self.xml_files)

    @property
    def unique_placeholders(self) -> List[str]:
        return self.placeholders.unique_placeholders


class TemplateService:
    """Business-logic façade for template inspection."""

    def __init__(self, priority: Optional[Mapping[str, int]] = None,
                 parser: Optional[PlaceholderParser] = None) -> None:
        if priority is None:
            priority = priority_map_from_config(ConfigManager().get_processing_order())
        self.priority: Dict[str, int] = dict(priority)
        self.parser = parser or PlaceholderParser()

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    def discover(self, container: ExtractedContainer) -> List[XmlFileRecord]:
        """Return the XML parts of *container* in processing order."""
        return sort_xml_files(discover_xml_files(container), self.priority)

    def analyze(self, records: Sequence[XmlFileRecord]) -> List[FileAnalysis]:
        analyses: List[FileAnalysis] = []
        for record in records:
            analysis = parse_xml_content(record.content or "")
            analyses.append(
                FileAnalysis(
                    record=record,
                    analysis=analysis,
                    has_placeholders=has_placeholder_patterns(record.content),
                )
            )
        return analyses

    def candidate_paths(self, container: ExtractedContainer, document_type: str) -> List[str]:
        """Return entry names matching the pattern registry for *document_type*.

        *document_type* is either a family (``word``) or an extension-style
        type (``docx``).
        """
        family = document_type if document_type in ("word", "powerpoint", "excel") else document_family(document_type)
        patterns = get_file_patterns_for_type(family)
        return [
            name for name in container.names
            if any(match_pattern(name, pattern) for pattern in patterns)
        ]

    def parse_bytes(self, data: bytes, filename: str = "") -> TemplateParseResult:
        """Run the inspection pipeline on template bytes already in memory."""
        container = extract_container(data)
        records = self.discover(container)
        placeholders = self.parser.parse_document(records)

        name = extract_filename(filename) if filename else ""
        result = TemplateParseResult(
            template=TemplateInfo(
                source=filename,
                type=detect_document_type(name),
                mime_type=detect_mime_type(name),
                filename=name,
            ),
            placeholders=placeholders,
            xml_files=records,
            parsed_at=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(
            "Parsed template %s: %d XML parts, %d placeholders (%d unique)",
            name,
            result.xml_file_count,
            placeholders.summary.total_placeholders,
            placeholders.summary.unique_count,
        )
        return result

    def parse_template(self, source: str | os.PathLike) -> TemplateParseResult:
        """Fetch the template at *source* and run the inspection pipeline.

        Raises the errors of :func:`~ooxml_templater.core.fetch.fetch_template`
        and :func:`~ooxml_templater.core.container.extract_container`.
        """
        location = os.fspath(source) if isinstance(source, os.PathLike) else source
        data = fetch_template(location)
        return self.parse_bytes(data, filename=location)
