"""Metadata extractors for Folio.

This module splits a source file into its YAML front matter and body, and
contains the implementations of the MetadataExtractor protocol. Each extractor
reads a single field out of the parsed front matter.

Key classes:
- TitleExtractor: Extracts the required title.
- DateExtractor: Extracts the publication date from front matter or filename.
- ExcerptOverrideExtractor: Extracts an explicit excerpt.
- LayoutExtractor: Extracts the layout name (carried, never interpreted).
- CompositeMetadataExtractor: Runs a list of extractors and merges results.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .errors import MalformedDocumentError
from .utils import coerce_date, extract_date_from_name

logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    A file without a front matter block yields an empty mapping and the text
    unchanged. A block that is present but is not valid YAML, or does not
    hold a mapping, is an error.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (frontmatter dict, remaining content).

    Raises:
        MalformedDocumentError: If the front matter block cannot be used.
    """
    text = text.lstrip("\ufeff")
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise MalformedDocumentError(None, f"Invalid front matter: {exc}", exc) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedDocumentError(
            None, f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return data, text[match.end() :]


def _scalar_text(value: Any) -> str:
    """Return a stripped string for scalar front matter values, else ''."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


class TitleExtractor:
    """Extracts the title from front matter.

    A missing or blank title produces no key; the document builder treats
    that as a malformed document.
    """

    def extract(self, frontmatter: Mapping[str, Any], path: Path) -> dict[str, Any]:
        title = _scalar_text(frontmatter.get("title"))
        return {"title": title} if title else {}


class DateExtractor:
    """Extracts the publication date.

    Looks for a ``date`` key in the front matter, falling back to a
    YYYY-MM-DD prefix in the filename (after a draft's leading underscore).
    Documents with neither have no publication date.
    """

    def extract(self, frontmatter: Mapping[str, Any], path: Path) -> dict[str, Any]:
        """Extract the publication date.

        Args:
            frontmatter: Parsed front matter.
            path: Path to the source file.

        Returns:
            Dictionary with 'published_at' key (a date or None).
        """
        raw = frontmatter.get("date")
        published_at = coerce_date(raw)
        if raw is not None and published_at is None:
            logger.warning("%s: unrecognized date %r, ignoring it", path, raw)
        if published_at is None:
            published_at = extract_date_from_name(path.stem.lstrip("_"))
        return {"published_at": published_at}


class ExcerptOverrideExtractor:
    """Extracts an explicit ``excerpt`` from front matter."""

    def extract(self, frontmatter: Mapping[str, Any], path: Path) -> dict[str, Any]:
        excerpt = _scalar_text(frontmatter.get("excerpt"))
        return {"excerpt_override": excerpt or None}


class LayoutExtractor:
    """Extracts the ``layout`` key; the core carries it but never acts on it."""

    def extract(self, frontmatter: Mapping[str, Any], path: Path) -> dict[str, Any]:
        return {"layout": _scalar_text(frontmatter.get("layout"))}


class CompositeMetadataExtractor:
    """Combines multiple metadata extractors.

    This class aggregates multiple extractors and runs them all on the
    front matter, merging their results. Later extractors can override
    earlier ones.
    """

    def __init__(self, extractors: list | None = None):
        """Initialize with a list of extractors.

        Args:
            extractors: List of MetadataExtractor implementations.
                       If None, uses default extractors.
        """
        if extractors is None:
            self._extractors = [
                TitleExtractor(),
                DateExtractor(),
                ExcerptOverrideExtractor(),
                LayoutExtractor(),
            ]
        else:
            self._extractors = list(extractors)

    def add_extractor(self, extractor) -> None:
        """Add an extractor to the composite.

        Args:
            extractor: A MetadataExtractor implementation.
        """
        self._extractors.append(extractor)

    def extract(self, frontmatter: Mapping[str, Any], path: Path) -> dict[str, Any]:
        """Extract all metadata from parsed front matter.

        Args:
            frontmatter: Parsed front matter.
            path: Path to the source file.

        Returns:
            Dictionary with all extracted metadata.
        """
        result: dict[str, Any] = {}
        for extractor in self._extractors:
            result.update(extractor.extract(frontmatter, path))
        return result


# Default composite extractor instance
default_metadata_extractor = CompositeMetadataExtractor()
