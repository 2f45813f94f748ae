"""Utility functions for Folio.

This module contains small string, path and date helpers used throughout the
Folio codebase.

Key functions:
    slugify: Convert filenames to URL slugs.
    document_id: Derive the stable identifier of a source file.
    extract_date_from_name: Extract date from filename prefix.
    coerce_date: Normalize front matter date values.
    format_date: Render a date with a strftime format, unpadded fields included.
    collapse_whitespace: Squash runs of whitespace into single spaces.
    is_markdown: Check if a path is a Markdown file.
    is_html: Check if a path is a plain HTML file.
    is_internal_path: Check if a path is internal or a draft.

Note:
    HTML-related utilities (escape_html, strip_html, join_root_url) live in
    html_utils.py.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path

DEFAULT_DATE_FORMAT = "%B %-d, %Y"

MARKDOWN_SUFFIXES = (".md", ".markdown")

_DATE_PREFIX_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:-|$)")
_UNPADDED_RE = re.compile(r"%-([dmHIMSjy])")


def slugify(name: str) -> str:
    """Convert filename (without extension) to slug, dropping date prefix.

    Args:
        name: Filename stem.

    Returns:
        URL-friendly slug.
    """
    cleaned = name
    if "-" in cleaned:
        parts = cleaned.split("-")
        if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
            cleaned = "-".join(parts[3:])
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", cleaned)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def document_id(rel: Path) -> str:
    """Return the identifier for a source file relative to the source directory.

    The identifier is the POSIX path with the final extension removed, so
    ``posts/2024-08-27-hello.md`` becomes ``posts/2024-08-27-hello``.

    Args:
        rel: Path relative to the source directory.

    Returns:
        Stable document identifier.
    """
    return rel.with_suffix("").as_posix()


def extract_date_from_name(name: str) -> date | None:
    """Extract a date from a filename with YYYY-MM-DD prefix.

    Args:
        name: Filename stem (without extension).

    Returns:
        date object if a valid date prefix is found, None otherwise.

    Examples:
        >>> extract_date_from_name("2024-01-15-hello-world")
        datetime.date(2024, 1, 15)

        >>> extract_date_from_name("hello-world") is None
        True
    """
    match = _DATE_PREFIX_RE.match(name)
    if not match:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def coerce_date(value: object) -> date | None:
    """Normalize a front matter date value to a ``date``.

    PyYAML already turns unquoted ISO dates and timestamps into ``date`` and
    ``datetime`` objects; quoted values arrive as strings and are parsed here.
    The time of day is discarded.

    Args:
        value: Raw value from the front matter.

    Returns:
        The calendar date, or None when the value is missing or unparsable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    # Jekyll style "2024-08-27 10:00:00 +0200" is not ISO; the date part is.
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def format_date(value: date, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Format a date with strftime, supporting ``%-d`` style unpadded fields.

    Unpadded directives are a glibc extension; they are expanded here so the
    same format string works on every platform.

    Args:
        value: Date to format.
        fmt: strftime format string.

    Returns:
        Formatted date string.

    Examples:
        >>> format_date(date(2024, 8, 7))
        'August 7, 2024'
    """

    def repl(match: re.Match) -> str:
        return str(int(value.strftime(f"%{match.group(1)}")))

    return value.strftime(_UNPADDED_RE.sub(repl, fmt))


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim the ends."""
    return " ".join(text.split())


def is_internal_path(path: Path) -> bool:
    """Check if a path is internal (contains components starting with _).

    Internal paths include private directories and draft files.

    Args:
        path: Path to check.

    Returns:
        True if any path component starts with underscore.
    """
    return any(part.startswith("_") for part in path.parts)


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has a Markdown extension (case-insensitive).
    """
    return path.suffix.lower() in MARKDOWN_SUFFIXES


def is_html(path: Path) -> bool:
    """Check if a path is a plain HTML file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .html extension.
    """
    return path.suffix.lower() == ".html"


def is_positive_int(value: object) -> bool:
    """Return True for ints >= 1, rejecting bools."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1
