from __future__ import annotations

"""Templater exception classes.

Only the I/O collaborators (template retrieval, container extraction) raise
these.  The classification and analysis core is total over its inputs and
never raises.
"""

from typing import Optional


class TemplaterError(Exception):
    """Base exception for all templater errors."""

    def __init__(self, message: str, source: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.source = source
        self.cause = cause


class TemplateValidationError(TemplaterError, ValueError):
    """Raised when a template source is null, empty or of the wrong type."""
    pass


class TemplateNotFoundError(TemplaterError, FileNotFoundError):
    """Raised when a local template file does not exist."""

    def __init__(self, path: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Template not found: {path}", source=path, cause=cause)
        self.path = path

    def __str__(self) -> str:
        return self.args[0]


class TemplateFetchError(TemplaterError):
    """Raised when a template cannot be retrieved over the network.

    ``status_code`` is set when the server answered with a non-2xx status.
    """

    def __init__(self, message: str, source: Optional[str] = None,
                 status_code: Optional[int] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, source, cause)
        self.status_code = status_code


class ContainerExtractionError(TemplaterError):
    """Raised when template bytes are not a readable ZIP container."""
    pass
