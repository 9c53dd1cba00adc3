from __future__ import annotations

"""Template retrieval and filename-based type detection.

``fetch_template`` accepts a local path, an ``http(s)://`` URL or a
``file://`` URL and returns the raw bytes.  Failures surface as the distinct
exceptions of :mod:`ooxml_templater.core.exceptions` and are not retried.
"""

import logging
import os
import re
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import unquote, urlparse

import requests

from ooxml_templater.config import ConfigManager
from ooxml_templater.core.exceptions import (
    TemplateFetchError,
    TemplateNotFoundError,
    TemplateValidationError,
)

logger = logging.getLogger(__name__)

__all__ = [
    "MIME_TYPES",
    "DEFAULT_MIME_TYPE",
    "DEFAULT_FILENAME",
    "fetch_template",
    "detect_mime_type",
    "detect_document_type",
    "document_family",
    "extract_filename",
]

MIME_TYPES: Dict[str, str] = {
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}
DEFAULT_MIME_TYPE = "application/octet-stream"
DEFAULT_FILENAME = "template.docx"
DEFAULT_TIMEOUT = 30

_FAMILIES: Dict[str, str] = {
    "docx": "word",
    "pptx": "powerpoint",
    "xlsx": "excel",
}

_SEPARATORS = re.compile(r"[/\\]")


def _extension(url_or_path: str) -> str:
    name = _SEPARATORS.split(_strip_query(url_or_path))[-1]
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""


def _strip_query(url_or_path: str) -> str:
    return (url_or_path or "").split("?", 1)[0].split("#", 1)[0]


def detect_mime_type(filename: str) -> str:
    """Return the OOXML MIME type for *filename*, else ``application/octet-stream``."""
    return MIME_TYPES.get(_extension(filename or ""), DEFAULT_MIME_TYPE)


def detect_document_type(filename: str) -> str:
    """Return ``docx``, ``pptx``, ``xlsx`` or ``unknown`` (case-insensitive)."""
    extension = _extension(filename or "")
    return extension if extension in MIME_TYPES else "unknown"


def document_family(document_type: str) -> str:
    """Map ``docx``/``pptx``/``xlsx`` to the file pattern registry keys."""
    return _FAMILIES.get((document_type or "").lower(), "unknown")


def extract_filename(url_or_path: str, default: Optional[str] = None) -> str:
    """Return the last path segment with query string and fragment removed.

    >>> extract_filename("https://example.com/t/report.docx?v=2#top")
    'report.docx'
    """
    fallback = default or ConfigManager().get_fetch_config().get("default_filename") or DEFAULT_FILENAME
    return _SEPARATORS.split(_strip_query(url_or_path))[-1] or fallback


# ---------------------------------------------------------------------------
# Retrieval
# ---------------------------------------------------------------------------

def _validate_source(source: object) -> str:
    if isinstance(source, os.PathLike):
        source = os.fspath(source)
    if not isinstance(source, str) or not source.strip():
        raise TemplateValidationError(
            "Template source must be a non-empty path or URL", source=repr(source)
        )
    return source.strip()


def _read_local(path: str) -> bytes:
    resolved = Path(path).expanduser().resolve()
    if not resolved.is_file():
        raise TemplateNotFoundError(str(resolved))
    try:
        data = resolved.read_bytes()
    except FileNotFoundError as exc:
        raise TemplateNotFoundError(str(resolved), cause=exc) from exc
    logger.info("Read template from %s (%d bytes)", resolved, len(data))
    return data


def _file_url_to_path(url: str) -> str:
    parsed = urlparse(url)
    path = unquote(parsed.path)
    # file:///C:/dir/t.docx -> C:/dir/t.docx
    if re.match(r"^/[A-Za-z]:[/\\]", path):
        path = path[1:]
    if parsed.netloc and parsed.netloc != "localhost":
        path = f"//{parsed.netloc}{path}"
    return path


def _download(url: str, timeout: float, session: Optional[requests.Session]) -> bytes:
    fetch_cfg = ConfigManager().get_fetch_config()
    headers = {"User-Agent": fetch_cfg.get("user_agent", "OOXML-Templater")}
    getter = session.get if session is not None else requests.get
    domain = urlparse(url).netloc or "unknown"

    logger.info("Downloading template from %s...", domain)
    try:
        response = getter(url, timeout=timeout, headers=headers)
    except requests.RequestException as exc:
        raise TemplateFetchError(f"Failed to fetch template: {exc}", source=url, cause=exc) from exc

    if not 200 <= response.status_code < 300:
        raise TemplateFetchError(
            f"Failed to fetch template: {response.status_code} {response.reason or ''}".rstrip(),
            source=url,
            status_code=response.status_code,
        )

    data = response.content
    logger.info("Downloaded template from %s (%d bytes)", domain, len(data))
    return data


def fetch_template(source: str | os.PathLike, *, timeout: Optional[float] = None,
                   session: Optional[requests.Session] = None) -> bytes:
    """Return the raw bytes of the template at *source*.

    Parameters
    ----------
    source
        Local filesystem path, ``http://``/``https://`` URL or ``file://`` URL.
    timeout
        Network timeout in seconds; defaults to the ``fetch.timeout`` setting.
    session
        Optional :class:`requests.Session` used for HTTP(S) sources.

    Raises
    ------
    TemplateValidationError
        *source* is None, empty or not a string/path.
    TemplateNotFoundError
        The local file (or ``file://`` target) does not exist.
    TemplateFetchError
        Transport failure or non-2xx HTTP status (``status_code`` is set).
    """
    location = _validate_source(source)
    lowered = location.lower()

    if lowered.startswith(("http://", "https://")):
        if timeout is None:
            timeout = ConfigManager().get_fetch_config().get("timeout", DEFAULT_TIMEOUT)
        return _download(location, timeout, session)
    if lowered.startswith("file://"):
        return _read_local(_file_url_to_path(location))
    return _read_local(location)
