"""Protocol definitions for Folio.

This module defines the interfaces (protocols) at the seams of the loading
pipeline, so that renderers, extractors and file sources can be swapped or
faked in tests without touching the loader.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for turning a document body into HTML.

    Implementations handle specific source types (Markdown, HTML).
    """

    @abstractmethod
    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if this renderer can process the file.
        """
        ...

    @abstractmethod
    def render(self, content: str) -> str:
        """Render a document body to HTML.

        Args:
            content: Body text with the front matter already removed.

        Returns:
            Rendered HTML.
        """
        ...

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Return the source type identifier (e.g., 'markdown', 'html')."""
        ...


@runtime_checkable
class MetadataExtractor(Protocol):
    """Protocol for extracting metadata from parsed front matter.

    Implementations extract one field each (title, date, excerpt, ...).
    """

    @abstractmethod
    def extract(self, frontmatter: Mapping[str, Any], path: Path) -> dict[str, Any]:
        """Extract metadata from front matter.

        Args:
            frontmatter: Parsed front matter mapping.
            path: Path to the source file.

        Returns:
            Dictionary of extracted metadata.
        """
        ...


@runtime_checkable
class DocumentSource(Protocol):
    """Protocol for discovering source files.

    This separates file discovery from document construction.
    """

    @abstractmethod
    def iter_files(self, include_drafts: bool = False) -> list[Path]:
        """Return the document files to load.

        Args:
            include_drafts: Whether to include draft files.

        Returns:
            List of paths to document files.

        Raises:
            DirectoryUnreadableError: If the source directory cannot be read.
        """
        ...
