"""Index building for Folio.

This module orders a set of documents by publication date and projects each
one into a ListingEntry, the summary a template needs: title, URL, formatted
date and excerpt.

Key names:
- SortOrder: Newest-first or oldest-first.
- ListingOptions: Sorting, truncation and formatting settings.
- ListingEntry: Frozen, render-ready view of one document.
- Listing: Restartable sequence of entries.
- build_listing: Build a Listing from documents.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .documents import Document
from .errors import MissingPublicationDateError
from .excerpts import DEFAULT_EXCERPT_LENGTH, ExcerptExtractor
from .utils import DEFAULT_DATE_FORMAT, format_date, is_positive_int

logger = logging.getLogger(__name__)


class SortOrder(str, Enum):
    """Order of entries in a listing."""

    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"

    @classmethod
    def _missing_(cls, value):
        # Also accept camelCase spellings such as "dateDesc"
        if isinstance(value, str):
            snake = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", value).lower()
            for member in cls:
                if member.value == snake:
                    return member
        return None


@dataclass(frozen=True)
class ListingOptions:
    """Settings for building a listing.

    Attributes:
        sort_order: Newest first (default) or oldest first.
        limit: Maximum number of entries, applied after sorting.
        date_format: strftime format for ``formatted_date``.
        excerpt_length: Maximum excerpt length in characters.
        excerpt_marker: Suffix appended to truncated excerpts.
        excerpt_separator: Marker ending the excerpt source, if present.
    """

    sort_order: SortOrder = SortOrder.DATE_DESC
    limit: int | None = None
    date_format: str = DEFAULT_DATE_FORMAT
    excerpt_length: int = DEFAULT_EXCERPT_LENGTH
    excerpt_marker: str = ""
    excerpt_separator: str | None = None

    def __post_init__(self):
        try:
            order = SortOrder(self.sort_order)
        except ValueError:
            choices = ", ".join(o.value for o in SortOrder)
            raise ValueError(
                f"sort_order must be one of {choices}, got {self.sort_order!r}"
            ) from None
        object.__setattr__(self, "sort_order", order)
        if self.limit is not None and not is_positive_int(self.limit):
            raise ValueError(f"limit must be a positive integer, got {self.limit!r}")
        if not is_positive_int(self.excerpt_length):
            raise ValueError(
                f"excerpt_length must be a positive integer, got {self.excerpt_length!r}"
            )
        if not self.date_format:
            raise ValueError("date_format must not be empty")

    @property
    def excerpts(self) -> ExcerptExtractor:
        return ExcerptExtractor(
            self.excerpt_length, self.excerpt_marker, self.excerpt_separator
        )


@dataclass(frozen=True)
class ListingEntry:
    """Render-ready summary of one document.

    Attributes:
        id: Identifier of the source document.
        title: Document title.
        url: Document URL.
        published_at: Publication date.
        formatted_date: Publication date formatted for display.
        excerpt: Plain-text excerpt.
    """

    id: str
    title: str
    url: str
    published_at: date
    formatted_date: str
    excerpt: str

    @classmethod
    def from_document(
        cls, document: Document, options: ListingOptions | None = None
    ) -> ListingEntry:
        """Project a document into an entry.

        Raises:
            MissingPublicationDateError: If the document has no publication date.
        """
        options = options or ListingOptions()
        if document.published_at is None:
            raise MissingPublicationDateError(
                document.path, f"{document.id} has no publication date"
            )
        return cls(
            id=document.id,
            title=document.title,
            url=document.url,
            published_at=document.published_at,
            formatted_date=format_date(document.published_at, options.date_format),
            excerpt=options.excerpts.for_document(document),
        )


class Listing:
    """Ordered, render-ready projection of a document collection.

    The documents are sorted and truncated once, when the listing is built.
    Entries are produced lazily and afresh on every iteration, so a listing
    can be consumed any number of times with identical results.

    Attributes:
        documents: The listed documents, in order.
        options: The options the listing was built with.
        excluded: Ids of documents left out for lacking a publication date.
    """

    def __init__(
        self,
        documents: Iterable[Document],
        options: ListingOptions,
        excluded: Iterable[str] = (),
    ):
        self.documents: tuple[Document, ...] = tuple(documents)
        self.options = options
        self.excluded: tuple[str, ...] = tuple(excluded)

    def __iter__(self) -> Iterator[ListingEntry]:
        for document in self.documents:
            yield ListingEntry.from_document(document, self.options)

    def __len__(self) -> int:
        return len(self.documents)

    def __bool__(self) -> bool:
        return bool(self.documents)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        order = self.options.sort_order.value
        return f"Listing({len(self.documents)} entries, {order})"


def sort_documents(
    documents: Iterable[Document], order: SortOrder = SortOrder.DATE_DESC
) -> list[Document]:
    """Sort dated documents by publication date, ties broken by id ascending.

    Two stable passes keep the id order among equal dates in both directions.
    """
    by_id = sorted(documents, key=lambda d: d.id)
    return sorted(
        by_id, key=lambda d: d.published_at, reverse=order is SortOrder.DATE_DESC
    )


def build_listing(
    documents: Iterable[Document], options: ListingOptions | None = None
) -> Listing:
    """Build a listing from a set of documents.

    Documents without a publication date are excluded. The rest are sorted
    per ``options.sort_order`` and then truncated to ``options.limit``.

    Args:
        documents: Documents to list, in any order.
        options: Listing options; defaults apply when omitted.

    Returns:
        Listing of the selected documents.
    """
    options = options or ListingOptions()
    dated: list[Document] = []
    excluded: list[str] = []
    for document in documents:
        if document.published_at is None:
            excluded.append(document.id)
            continue
        dated.append(document)
    excluded.sort()
    for doc_id in excluded:
        logger.info("Excluding %s from listing: no publication date", doc_id)

    ordered = sort_documents(dated, options.sort_order)
    if options.limit is not None:
        ordered = ordered[: options.limit]
    return Listing(ordered, options, excluded)
