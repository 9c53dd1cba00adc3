"""Test configuration and fixtures for the templater test-suite.

Provides in-memory OOXML container builders and isolates every test from
user configuration overrides.
"""

from __future__ import annotations

import io
import logging
import sys
import zipfile
from pathlib import Path
from typing import Dict

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ooxml_templater.config import ConfigManager
from ooxml_templater.core.models import ContainerEntry

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


DOCUMENT_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
    '<w:body><w:p><w:r><w:t>Dear (((customer.name))),</w:t></w:r></w:p>'
    '<w:p><w:r><w:t>(((DeletePageIfEmpty=optional.notes)))</w:t></w:r></w:p>'
    '</w:body></w:document>'
)

HEADER_XML = (
    '<w:hdr xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
    '<w:p><w:r><w:t>(((report.title)))</w:t></w:r></w:p></w:hdr>'
)

CHART_XML = (
    '<c:chartSpace xmlns:c="http://schemas.openxmlformats.org/drawingml/2006/chart">'
    '<c:chart><c:title><c:v>(((123456=sales.q1)))</c:v></c:title></c:chart></c:chartSpace>'
)

RELS_XML = (
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" Target="word/document.xml"/></Relationships>'
)


def build_zip(files: Dict[str, bytes | str]) -> bytes:
    """Return the bytes of a ZIP archive holding *files* in insertion order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, payload in files.items():
            zf.writestr(name, payload)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user overrides at an empty directory and reset the singleton."""
    config_dir = tmp_path / "user_config"
    config_dir.mkdir()
    monkeypatch.setenv("OOXML_TEMPLATER_CONFIG_DIR", str(config_dir))
    ConfigManager._instance = None
    yield config_dir
    ConfigManager._instance = None


@pytest.fixture
def docx_files() -> Dict[str, bytes | str]:
    return {
        "[Content_Types].xml": '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types"/>',
        "_rels/.rels": RELS_XML,
        "word/document.xml": DOCUMENT_XML,
        "word/header1.xml": HEADER_XML,
        "word/charts/chart1.xml": CHART_XML,
        "word/media/image1.png": b"\x89PNG\r\n\x1a\n",
    }


@pytest.fixture
def docx_bytes(docx_files) -> bytes:
    return build_zip(docx_files)


@pytest.fixture
def make_entry():
    def factory(name: str, content: str | None = "<root/>", buffer: bytes = b"") -> ContainerEntry:
        return ContainerEntry(name=name, content=content, buffer=buffer)
    return factory


@pytest.fixture
def zip_builder():
    return build_zip
