"""Configuration loading for Folio.

Settings live in an optional ``folio.yaml`` at the project root and are
merged over DEFAULT_CONFIG.

Key functions:
- load_config: Loads configuration from folio.yaml.
- listing_options_from_config: Builds ListingOptions from a config dict.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .excerpts import DEFAULT_EXCERPT_LENGTH
from .listing import ListingOptions, SortOrder
from .utils import DEFAULT_DATE_FORMAT

CONFIG_FILENAME = "folio.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "source_dir": "posts",
    "include_drafts": False,
    "sort_order": SortOrder.DATE_DESC.value,
    "limit": None,
    "date_format": DEFAULT_DATE_FORMAT,
    "excerpt_length": DEFAULT_EXCERPT_LENGTH,
    "excerpt_marker": "",
    "excerpt_separator": None,
    "template": None,
    "title": "",
    "url": "",
}


def load_config(project_root: Path) -> dict[str, Any]:
    """Load configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


def listing_options_from_config(config: dict[str, Any]) -> ListingOptions:
    """Build ListingOptions from a configuration dictionary.

    Raises:
        ValueError: If a listing setting is invalid.
    """
    return ListingOptions(
        sort_order=config.get("sort_order") or SortOrder.DATE_DESC,
        limit=config.get("limit"),
        date_format=config.get("date_format") or DEFAULT_DATE_FORMAT,
        excerpt_length=config.get("excerpt_length", DEFAULT_EXCERPT_LENGTH),
        excerpt_marker=config.get("excerpt_marker") or "",
        excerpt_separator=config.get("excerpt_separator") or None,
    )
