from datetime import date

import pytest

from folio.documents import Document
from folio.errors import MissingPublicationDateError
from folio.listing import (
    Listing,
    ListingEntry,
    ListingOptions,
    SortOrder,
    build_listing,
    sort_documents,
)


def doc(id, published_at, title=None, content=""):
    return Document(
        id=id,
        title=title or id.upper(),
        url=f"/{id}/",
        content=content,
        published_at=published_at,
    )


def test_newest_first_by_default():
    documents = {doc("a", date(2024, 8, 27)), doc("b", date(2024, 8, 20))}
    listing = build_listing(documents)
    assert [e.title for e in listing] == ["A", "B"]
    first = next(iter(listing))
    assert first.formatted_date == "August 27, 2024"
    assert first.url == "/a/"


def test_ascending_order():
    documents = [doc("a", date(2024, 8, 27)), doc("b", date(2024, 8, 20))]
    listing = build_listing(documents, ListingOptions(sort_order=SortOrder.DATE_ASC))
    assert [e.id for e in listing] == ["b", "a"]


def test_ties_broken_by_id_in_both_orders():
    day = date(2024, 1, 1)
    documents = [doc("c", day), doc("a", day), doc("b", day), doc("z", date(2023, 1, 1))]
    desc = build_listing(documents)
    asc = build_listing(documents, ListingOptions(sort_order="date_asc"))
    assert [e.id for e in desc] == ["a", "b", "c", "z"]
    assert [e.id for e in asc] == ["z", "a", "b", "c"]


def test_order_independent_of_input_order():
    documents = [doc(str(i), date(2024, 1, 1 + i % 3)) for i in range(9)]
    forward = [e.id for e in build_listing(documents)]
    backward = [e.id for e in build_listing(list(reversed(documents)))]
    assert forward == backward


def test_limit_keeps_most_recent_after_sorting():
    documents = [doc(f"p{i}", date(2024, 1, i)) for i in range(1, 11)]
    listing = build_listing(documents, ListingOptions(limit=3))
    assert len(listing) == 3
    assert [e.id for e in listing] == ["p10", "p9", "p8"]
    everything = build_listing(documents, ListingOptions(limit=50))
    assert len(everything) == 10


def test_documents_without_date_are_excluded(caplog):
    documents = [doc("dated", date(2024, 1, 1)), doc("undated", None)]
    with caplog.at_level("INFO", logger="folio.listing"):
        listing = build_listing(documents, ListingOptions(sort_order="date_asc", limit=5))
    assert [e.id for e in listing] == ["dated"]
    assert listing.excluded == ("undated",)
    records = [r for r in caplog.records if r.name == "folio.listing"]
    assert records and all(r.levelname == "INFO" for r in records)
    assert "undated" in caplog.text


def test_only_undated_documents_give_empty_listing():
    listing = build_listing([doc("x", None)])
    assert list(listing) == []
    assert not listing
    assert len(listing) == 0


def test_listing_is_restartable_and_idempotent():
    documents = frozenset(
        doc(f"p{i}", date(2024, 2, i), content=f"<p>Post number {i}.</p>") for i in range(1, 6)
    )
    options = ListingOptions(limit=4, excerpt_length=10)
    listing = build_listing(documents, options)
    assert list(listing) == list(listing)
    assert list(build_listing(documents, options)) == list(listing)


def test_entry_fields_and_options():
    document = doc(
        "post",
        date(2024, 3, 5),
        title="A Post",
        content="<p>Hello <b>world</b>, this is a test.</p>",
    )
    options = ListingOptions(date_format="%Y-%m-%d", excerpt_length=12)
    entry = ListingEntry.from_document(document, options)
    assert entry == ListingEntry(
        id="post",
        title="A Post",
        url="/post/",
        published_at=date(2024, 3, 5),
        formatted_date="2024-03-05",
        excerpt="Hello world,",
    )


def test_entry_requires_publication_date():
    with pytest.raises(MissingPublicationDateError):
        ListingEntry.from_document(doc("undated", None))


def test_entries_are_lazy():
    listing = build_listing([doc("a", date(2024, 1, 1))])
    iterator = iter(listing)
    assert not isinstance(iterator, (list, tuple))
    assert next(iterator).id == "a"
    with pytest.raises(StopIteration):
        next(iterator)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sort_order": "newest"},
        {"limit": 0},
        {"limit": -2},
        {"limit": True},
        {"limit": 2.5},
        {"excerpt_length": 0},
        {"date_format": ""},
    ],
)
def test_invalid_options(kwargs):
    with pytest.raises(ValueError):
        ListingOptions(**kwargs)


def test_sort_order_accepts_strings():
    assert ListingOptions(sort_order="date_asc").sort_order is SortOrder.DATE_ASC
    assert ListingOptions(sort_order="dateAsc").sort_order is SortOrder.DATE_ASC
    assert ListingOptions(sort_order="dateDesc").sort_order is SortOrder.DATE_DESC
    assert SortOrder("dateAsc") is SortOrder.DATE_ASC


def test_sort_documents_helper():
    documents = [doc("b", date(2024, 1, 2)), doc("a", date(2024, 1, 2)), doc("c", date(2024, 1, 1))]
    assert [d.id for d in sort_documents(documents)] == ["a", "b", "c"]
    assert [d.id for d in sort_documents(documents, SortOrder.DATE_ASC)] == ["c", "a", "b"]


def test_listing_holds_options():
    options = ListingOptions(limit=1)
    listing = build_listing([doc("a", date(2024, 1, 1))], options)
    assert isinstance(listing, Listing)
    assert listing.options is options
    assert listing.documents[0].id == "a"
