import pytest

from folio.config import DEFAULT_CONFIG, listing_options_from_config, load_config
from folio.listing import ListingOptions, SortOrder


def test_defaults_without_config_file(tmp_path):
    config = load_config(tmp_path)
    assert config == DEFAULT_CONFIG
    assert listing_options_from_config(config) == ListingOptions()


def test_config_file_overrides_defaults(tmp_path):
    (tmp_path / "folio.yaml").write_text(
        "source_dir: content/posts\n"
        "sort_order: date_asc\n"
        "limit: 5\n"
        "date_format: '%d %b %Y'\n"
        "excerpt_length: 80\n"
        "excerpt_marker: '...'\n"
        "excerpt_separator: '<!--more-->'\n",
        encoding="utf-8",
    )
    config = load_config(tmp_path)
    assert config["source_dir"] == "content/posts"
    assert config["include_drafts"] is False

    options = listing_options_from_config(config)
    assert options.sort_order is SortOrder.DATE_ASC
    assert options.limit == 5
    assert options.date_format == "%d %b %Y"
    assert options.excerpt_length == 80
    assert options.excerpt_marker == "..."
    assert options.excerpt_separator == "<!--more-->"


def test_non_mapping_config_is_ignored(tmp_path):
    (tmp_path / "folio.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    assert load_config(tmp_path) == DEFAULT_CONFIG


def test_invalid_config_values_raise(tmp_path):
    (tmp_path / "folio.yaml").write_text("limit: -1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        listing_options_from_config(load_config(tmp_path))
