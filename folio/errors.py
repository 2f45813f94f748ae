"""Exception types for Folio.

Per-document problems (``DocumentError`` subclasses) are recoverable: the
loader skips the document, logs a warning and carries on. Directory-level
failures (``DirectoryUnreadableError``) are fatal and propagate to the caller.
"""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base class for all Folio errors."""


class DocumentError(FolioError):
    """Error tied to a single source document.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught, if any.
    """

    def __init__(
        self,
        source_path: Path | None,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}" if source_path else message)


class MalformedDocumentError(DocumentError):
    """Front matter is unparsable or lacks a required field such as ``title``."""


class MissingPublicationDateError(DocumentError):
    """A document without a publication date was asked to join a listing."""


class DirectoryUnreadableError(FolioError):
    """The source directory is missing, not a directory, or cannot be read.

    Attributes:
        path: The directory that could not be read.
        original_error: The underlying OS error, if any.
    """

    def __init__(self, path: Path, original_error: Exception | None = None):
        self.path = path
        self.original_error = original_error
        reason = f": {original_error}" if original_error else ""
        super().__init__(f"Cannot read source directory {path}{reason}")
