"""Excerpt extraction for Folio.

Excerpts are plain text: markup is stripped, whitespace collapsed, and the
result is cut on a word boundary so it never exceeds the configured length.
A truncation marker is only appended when configured, and it counts against
the length budget.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .html_utils import strip_html
from .utils import is_positive_int

if TYPE_CHECKING:
    from .documents import Document

DEFAULT_EXCERPT_LENGTH = 200


def _check_length(max_length: int) -> None:
    if not is_positive_int(max_length):
        raise ValueError(f"max_length must be a positive integer, got {max_length!r}")


def truncate_words(text: str, max_length: int, marker: str = "") -> str:
    """Cut ``text`` to at most ``max_length`` characters without splitting words.

    Text that already fits is returned unchanged and without the marker.
    When the first word alone does not fit, the result is empty.

    Args:
        text: Plain text with single-space whitespace.
        max_length: Maximum length of the result, marker included.
        marker: Suffix appended when the text was shortened.

    Returns:
        The possibly truncated text.

    Examples:
        >>> truncate_words("Hello world, this is a test.", 12)
        'Hello world,'
    """
    if len(text) <= max_length:
        return text
    budget = max_length - len(marker)
    if budget <= 0:
        return ""
    cut = text[:budget]
    if text[budget] != " ":
        space = cut.rfind(" ")
        if space == -1:
            return ""
        cut = cut[:space]
    cut = cut.rstrip()
    return f"{cut}{marker}" if cut else ""


def extract_excerpt(
    body: str, max_length: int = DEFAULT_EXCERPT_LENGTH, marker: str = ""
) -> str:
    """Derive a plain-text excerpt from an HTML or plain body.

    Args:
        body: Document body (HTML or plain text).
        max_length: Maximum excerpt length in characters.
        marker: Optional suffix appended when the excerpt was truncated.

    Returns:
        Plain-text excerpt; empty if the body has no text.

    Raises:
        ValueError: If ``max_length`` is not a positive integer.
    """
    _check_length(max_length)
    return truncate_words(strip_html(body), max_length, marker)


def excerpt_for(
    document: Document,
    max_length: int = DEFAULT_EXCERPT_LENGTH,
    marker: str = "",
    separator: str | None = None,
) -> str:
    """Return the excerpt for a document.

    An explicit ``excerpt`` from the front matter wins and goes through the
    same stripping and truncation. Otherwise the excerpt comes from the
    rendered content, cut at ``separator`` first when it occurs there.

    Args:
        document: Document to summarize.
        max_length: Maximum excerpt length in characters.
        marker: Optional suffix appended when the excerpt was truncated.
        separator: Optional marker (such as ``<!--more-->``) ending the excerpt.

    Returns:
        Plain-text excerpt.
    """
    if document.excerpt_override is not None:
        source = document.excerpt_override
    else:
        source = document.content
        if separator and separator in source:
            source = source.split(separator, 1)[0]
    return extract_excerpt(source, max_length, marker)


@dataclass(frozen=True)
class ExcerptExtractor:
    """Excerpt settings bundled for repeated use.

    Attributes:
        max_length: Maximum excerpt length in characters.
        marker: Suffix appended when an excerpt is truncated.
        separator: Optional marker ending the excerpt source.
    """

    max_length: int = DEFAULT_EXCERPT_LENGTH
    marker: str = ""
    separator: str | None = None

    def __post_init__(self):
        _check_length(self.max_length)

    def extract(self, body: str) -> str:
        return extract_excerpt(body, self.max_length, self.marker)

    def for_document(self, document: Document) -> str:
        return excerpt_for(document, self.max_length, self.marker, self.separator)
