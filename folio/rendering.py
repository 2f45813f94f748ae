"""Listing rendering for Folio.

This module uses Jinja2 to turn a Listing into HTML. Entries arrive sorted,
truncated and formatted, so templates only emit markup.

Key class:
- ListingRenderer: Renders a listing with the built-in or a user template.

Template context:
- entries: The Listing being rendered.
- site: Site data (title, url, ...).
- url_for: Prefixes paths with the configured root URL.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    select_autoescape,
)

from .html_utils import join_root_url
from .listing import Listing

DEFAULT_TEMPLATE_NAME = "index.html"

DEFAULT_TEMPLATE = """\
<ul class="post-list">
{%- for entry in entries %}
  <li>
    <span class="post-meta">{{ entry.formatted_date }}</span>
    <h2><a class="post-link" href="{{ url_for(entry.url) }}">{{ entry.title }}</a></h2>
    {%- if entry.excerpt %}
    <p>{{ entry.excerpt }}</p>
    {%- endif %}
  </li>
{%- endfor %}
</ul>
"""


class ListingRenderer:
    """Template renderer for listings using Jinja2.

    Attributes:
        template_name: Name of the template to render.
        site: Site data exposed to templates.
        root_url: Base URL applied by ``url_for``.
        env: Jinja2 environment.
    """

    def __init__(
        self,
        template_path: Path | None = None,
        site: dict[str, Any] | None = None,
        root_url: str = "",
    ):
        """Initialize the renderer.

        Args:
            template_path: Optional template file replacing the built-in one.
            site: Site data exposed to templates as ``site``.
            root_url: Optional base URL for links.
        """
        self.site = site or {}
        self.root_url = root_url or ""
        loaders = [DictLoader({DEFAULT_TEMPLATE_NAME: DEFAULT_TEMPLATE})]
        if template_path is not None:
            template_path = Path(template_path)
            loaders.insert(0, FileSystemLoader(str(template_path.parent)))
            self.template_name = template_path.name
        else:
            self.template_name = DEFAULT_TEMPLATE_NAME
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"], default_for_string=True),
        )
        self.env.globals["url_for"] = self._url_for

    def _url_for(self, path: str) -> str:
        """Generate a URL for a path, applying root_url if configured.

        Args:
            path: Path to generate URL for.

        Returns:
            Full URL with root_url prefix if configured.
        """
        if path.startswith(("http://", "https://", "//")):
            return path
        if self.root_url:
            return join_root_url(self.root_url, path)
        return path if path.startswith("/") else f"/{path}"

    def render(self, listing: Listing) -> str:
        """Render a listing.

        Args:
            listing: Listing to render.

        Returns:
            Rendered HTML string.
        """
        template = self.env.get_template(self.template_name)
        return template.render(entries=listing, site=self.site)

    def render_string(self, source: str, listing: Listing) -> str:
        """Render a listing with an inline template string."""
        return self.env.from_string(source).render(entries=listing, site=self.site)
