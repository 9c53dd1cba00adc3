from __future__ import annotations

"""High-level orchestration services."""

from .template_service import TemplateService, TemplateParseResult, FileAnalysis, TemplateInfo  # noqa: F401

__all__: list[str] = [
    "TemplateService",
    "TemplateParseResult",
    "FileAnalysis",
    "TemplateInfo",
]
