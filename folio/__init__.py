"""Folio document indexing engine.

This package turns a directory of Markdown or HTML documents with YAML front
matter into a render-ready listing: documents are loaded, ordered by
publication date, and projected into summary entries with a formatted date
and a plain-text excerpt.

It is the indexing subsystem a static site generator embeds, not a site
generator itself. The typical flow is:

    documents = load_documents(Path("posts"))
    listing = build_listing(documents, ListingOptions(limit=10))
    html = ListingRenderer().render(listing)
"""

from .documents import Document, DocumentLoader, load_documents
from .errors import (
    DirectoryUnreadableError,
    DocumentError,
    FolioError,
    MalformedDocumentError,
    MissingPublicationDateError,
)
from .excerpts import ExcerptExtractor, excerpt_for, extract_excerpt
from .listing import Listing, ListingEntry, ListingOptions, SortOrder, build_listing
from .rendering import ListingRenderer

__all__ = [
    "__version__",
    "DirectoryUnreadableError",
    "Document",
    "DocumentError",
    "DocumentLoader",
    "ExcerptExtractor",
    "FolioError",
    "Listing",
    "ListingEntry",
    "ListingOptions",
    "ListingRenderer",
    "MalformedDocumentError",
    "MissingPublicationDateError",
    "SortOrder",
    "build_listing",
    "excerpt_for",
    "extract_excerpt",
    "load_documents",
]
__version__ = "0.1.0"
