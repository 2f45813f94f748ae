"""Feed generation for Folio.

This module renders a Listing as an RSS 2.0 feed. The listing already
carries order, truncation and excerpts, so the feed simply mirrors it.

Classes:
    RSSGenerator: Generates RSS feed text from a listing.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .html_utils import escape_html, join_root_url
from .listing import Listing

RFC822_FORMAT = "%a, %d %b %Y %H:%M:%S +0000"


class RSSGenerator:
    """Generates an RSS 2.0 feed for content syndication.

    Requires 'url' in site data to generate absolute URLs.
    Uses 'title' from site data for the feed title.
    """

    filename = "rss.xml"

    def generate(self, listing: Listing, data: dict[str, Any]) -> str | None:
        """Generate RSS feed content.

        Args:
            listing: Listing whose entries become feed items.
            data: Site data containing 'url' and optionally 'title'.

        Returns:
            RSS XML content, or None if no base URL configured.
        """
        base_url = str(data.get("url") or "").rstrip("/")
        if not base_url:
            return None
        title = escape_html(str(data.get("title") or "Folio Feed"))

        items = []
        for entry in listing:
            link = escape_html(join_root_url(base_url, entry.url))
            published = datetime(
                entry.published_at.year,
                entry.published_at.month,
                entry.published_at.day,
                tzinfo=timezone.utc,
            )
            description = escape_html(entry.excerpt or entry.title)
            items.append(
                f"<item><title>{escape_html(entry.title)}</title><link>{link}</link>"
                f"<guid>{link}</guid>"
                f"<description>{description}</description>"
                f"<pubDate>{published.strftime(RFC822_FORMAT)}</pubDate></item>"
            )

        build_date = datetime.now(timezone.utc).strftime(RFC822_FORMAT)
        rss = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<rss version="2.0"><channel>',
            f"<title>{title}</title>",
            f"<link>{escape_html(base_url)}</link>",
            f"<description>{title}</description>",
            f"<lastBuildDate>{build_date}</lastBuildDate>",
        ]
        rss.extend(items)
        rss.append("</channel></rss>")
        return "\n".join(rss)

    def write(self, path: Path, listing: Listing, data: dict[str, Any]) -> bool:
        """Generate the feed and write it to ``path``.

        Returns:
            True if the feed was written, False if skipped.
        """
        content = self.generate(listing, data)
        if content is None:
            return False
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return True
