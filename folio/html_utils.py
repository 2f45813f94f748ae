"""HTML utility functions for Folio.

This module provides HTML string utilities: escaping, stripping markup down
to plain text, and joining root URLs.

Functions:
    escape_html: Escape special HTML characters in a string.
    strip_html: Reduce an HTML fragment to collapsed plain text.
    join_root_url: Join a base URL with a path.
"""

from __future__ import annotations

import html
import re

from .utils import collapse_whitespace

# Elements whose text content is never prose
_HIDDEN_BLOCK_RE = re.compile(
    r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL
)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
# Footnote references and the footnote section are apparatus, not prose
_FOOTNOTE_RE = re.compile(
    r"<sup\b[^>]*\bclass=\"footnote-ref\"[^>]*>.*?</sup>"
    r"|<section\b[^>]*\bclass=\"footnotes\"[^>]*>.*?</section\s*>",
    re.IGNORECASE | re.DOTALL,
)
# Block boundaries separate words; inline tags do not
_BLOCK_TAG_RE = re.compile(
    r"</?(?:address|article|aside|blockquote|br|dd|div|dl|dt|figcaption|figure|"
    r"footer|h[1-6]|header|hr|li|ol|p|pre|section|table|td|th|tr|ul)\b[^>]*>",
    re.IGNORECASE,
)
_TAG_RE = re.compile(r"</?[a-zA-Z][^>]*>")


def escape_html(text: str) -> str:
    """Escape special HTML characters in a string.

    Converts the following characters to their HTML entity equivalents:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;

    Args:
        text: The string to escape.

    Returns:
        The escaped string, safe for inclusion in HTML.

    Examples:
        >>> escape_html('<script>alert("XSS")</script>')
        '&lt;script&gt;alert(&quot;XSS&quot;)&lt;/script&gt;'

        >>> escape_html('Tom & Jerry')
        'Tom &amp; Jerry'
    """
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def strip_html(text: str) -> str:
    """Strip all markup from an HTML fragment, leaving collapsed plain text.

    Script and style blocks and Markdown footnotes are dropped along with
    their contents. Comments and tags are removed, character entities are
    unescaped and whitespace is collapsed to single spaces.

    Args:
        text: HTML (or plain) text.

    Returns:
        Plain text with single-space whitespace.

    Examples:
        >>> strip_html("Hello <b>world</b>,\\n  this &amp; that")
        'Hello world, this & that'
    """
    if not text:
        return ""
    cleaned = _HIDDEN_BLOCK_RE.sub(" ", text)
    cleaned = _COMMENT_RE.sub(" ", cleaned)
    cleaned = _FOOTNOTE_RE.sub("", cleaned)
    cleaned = _BLOCK_TAG_RE.sub(" ", cleaned)
    cleaned = _TAG_RE.sub("", cleaned)
    return collapse_whitespace(html.unescape(cleaned))


def join_root_url(root_url: str, path: str) -> str:
    """Safely join a root URL and a path, avoiding double slashes.

    Args:
        root_url: Base URL (e.g., https://example.com/blog).
        path: Path beginning with or without a leading slash.

    Returns:
        Combined URL with proper slash handling.

    Examples:
        >>> join_root_url('https://example.com', '/about')
        'https://example.com/about'

        >>> join_root_url('https://example.com/', 'about')
        'https://example.com/about'
    """
    if not root_url:
        return path
    base = root_url.rstrip("/")
    suffix = path if path.startswith("/") else f"/{path}"
    return f"{base}{suffix}"
