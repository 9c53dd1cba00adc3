from __future__ import annotations

"""In-memory extraction of OOXML containers.

Turns template bytes into :class:`ContainerEntry` objects, one per archive
member.  Office packages stored under an ``embeddings`` folder (an Excel
workbook behind a Word chart, for instance) are opened as nested containers.
"""

import io
import logging
import zipfile
import zlib
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ooxml_templater.core.discovery.classifier import is_xml_file
from ooxml_templater.core.exceptions import ContainerExtractionError
from ooxml_templater.core.models import ContainerEntry

logger = logging.getLogger(__name__)

__all__ = ["ExtractedContainer", "extract_container"]

_EMBEDDED_PACKAGE_SUFFIXES = (".xlsx", ".docx", ".pptx")

# zipfile raises NotImplementedError for unsupported compression methods,
# RuntimeError for encrypted members and zlib.error for corrupt deflate data.
_READ_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    zlib.error,
    OSError,
    EOFError,
    RuntimeError,
    NotImplementedError,
)


@dataclass
class ExtractedContainer:
    """Members of one ZIP container, in archive order."""

    entries: List[ContainerEntry] = field(default_factory=list)
    embedded_containers: Dict[str, "ExtractedContainer"] = field(default_factory=dict)

    def get_all_files(self) -> List[ContainerEntry]:
        return list(self.entries)

    def get_file(self, name: str) -> Optional[ContainerEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def get_xml_files(self) -> List[ContainerEntry]:
        return [entry for entry in self.entries if is_xml_file(entry.name)]

    @property
    def names(self) -> List[str]:
        return [entry.name for entry in self.entries]


def _is_embedded_package(name: str) -> bool:
    normalized = name.replace("\\", "/").lower()
    return "/embeddings/" in normalized and normalized.endswith(_EMBEDDED_PACKAGE_SUFFIXES)


def _read_entries(zf: zipfile.ZipFile) -> List[ContainerEntry]:
    entries: List[ContainerEntry] = []
    for info in zf.infolist():
        if info.is_dir():
            continue
        buffer = zf.read(info)
        content = buffer.decode("utf-8", errors="replace") if is_xml_file(info.filename) else None
        entries.append(ContainerEntry(name=info.filename, content=content, buffer=buffer))
    return entries


def extract_container(data: bytes, *, include_embedded: bool = True) -> ExtractedContainer:
    """Read every member of the ZIP container held in *data*.

    Raises
    ------
    ContainerExtractionError
        *data* is empty, not a ZIP archive, or holds a member that cannot
        be read.
    """
    if not data:
        raise ContainerExtractionError("Template data is empty")

    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            entries = _read_entries(zf)
    except _READ_ERRORS as exc:
        raise ContainerExtractionError(f"Template is not a valid OOXML container: {exc}", cause=exc) from exc

    container = ExtractedContainer(entries=entries)
    logger.debug("Extracted %d container members", len(entries))

    if include_embedded:
        for entry in entries:
            if not _is_embedded_package(entry.name):
                continue
            try:
                container.embedded_containers[entry.name] = extract_container(entry.buffer, include_embedded=False)
            except ContainerExtractionError as exc:
                logger.warning("Failed to extract embedded file %s: %s", entry.name, exc)

    return container
