"""Tests for the Open Library and Google Books sources."""

from __future__ import annotations

import pytest

from tocmap.errors import DecodeError, NetworkError, NotFoundError
from tocmap.sources import (
    GoogleBooksSource,
    OpenLibrarySource,
    PayloadDecodeError,
    TransportError,
    chapters_from_description,
)


def test_open_library_decodes_title_and_toc(fake_transport) -> None:
    """It should request the jscmd=data endpoint and map table_of_contents to chapters."""

    transport = fake_transport(
        {
            "/api/books": {
                "ISBN:0141439556": {
                    "title": "Pride and Prejudice",
                    "table_of_contents": [{"title": "Chapter 1"}, {"title": "Chapter 2"}],
                }
            }
        }
    )

    record = OpenLibrarySource(transport=transport).fetch("0141439556")

    assert record.title == "Pride and Prejudice"
    assert [c.title for c in record.chapters] == ["Chapter 1", "Chapter 2"]
    url, params = transport.calls[0]
    assert url == "https://openlibrary.org/api/books"
    assert params == {"bibkeys": "ISBN:0141439556", "format": "json", "jscmd": "data"}


def test_open_library_missing_and_empty_toc_are_both_empty(fake_transport) -> None:
    transport = fake_transport(
        {"/api/books": {"ISBN:1": {"title": "A"}, "ISBN:2": {"title": "B", "table_of_contents": []}}}
    )
    source = OpenLibrarySource(transport=transport)

    assert source.fetch("1").chapters == []
    assert source.fetch("2").chapters == []


def test_open_library_missing_key_is_not_found(fake_transport) -> None:
    transport = fake_transport({"/api/books": {}})

    with pytest.raises(NotFoundError) as exc_info:
        OpenLibrarySource(transport=transport).fetch("9999999999")

    assert exc_info.value.source == "open_library"
    assert exc_info.value.identifier == "9999999999"


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"ISBN:1": "not a record"},
        {"ISBN:1": {"title": "A", "table_of_contents": "Chapter 1"}},
    ],
)
def test_open_library_unexpected_shape_is_decode_error(fake_transport, payload) -> None:
    transport = fake_transport({"/api/books": payload})

    with pytest.raises(DecodeError):
        OpenLibrarySource(transport=transport).fetch("1")


def test_open_library_transport_errors_are_mapped(fake_transport) -> None:
    source = OpenLibrarySource(transport=fake_transport({"/api/books": TransportError("boom")}))
    with pytest.raises(NetworkError):
        source.fetch("1")

    source = OpenLibrarySource(transport=fake_transport({"/api/books": PayloadDecodeError("bad")}))
    with pytest.raises(DecodeError):
        source.fetch("1")


def test_chapters_from_description_keeps_lines_longer_than_five() -> None:
    """It should trim lines and keep only those strictly longer than five characters."""

    description = "Intro\nA\n\n   \n  Chapter One: Beginnings  \nsix ch\n12345\n"

    titles = [c.title for c in chapters_from_description(description)]

    assert titles == ["Chapter One: Beginnings", "six ch"]


def test_chapters_from_description_custom_threshold() -> None:
    assert [c.title for c in chapters_from_description("ab\nabc", min_length=2)] == ["abc"]
    assert chapters_from_description("") == []


def test_google_books_uses_first_item(fake_transport) -> None:
    transport = fake_transport(
        {
            "/books/v1/volumes": {
                "items": [
                    {"volumeInfo": {"title": "X", "description": "Intro\nA\nChapter One: Beginnings\n"}},
                    {"volumeInfo": {"title": "Y", "description": "Something else entirely"}},
                ]
            }
        }
    )

    record = GoogleBooksSource(transport=transport).fetch("9999999999")

    assert record.title == "X"
    assert [c.title for c in record.chapters] == ["Chapter One: Beginnings"]
    url, params = transport.calls[0]
    assert url == "https://www.googleapis.com/books/v1/volumes"
    assert params == {"q": "isbn:9999999999"}


def test_google_books_without_description_has_no_chapters(fake_transport) -> None:
    transport = fake_transport({"/books/v1/volumes": {"items": [{"volumeInfo": {"title": "X"}}]}})

    record = GoogleBooksSource(transport=transport).fetch("1")

    assert record.title == "X"
    assert record.chapters == []


@pytest.mark.parametrize("payload", [{"totalItems": 0}, {"items": []}, {"items": None}])
def test_google_books_no_items_is_not_found(fake_transport, payload) -> None:
    transport = fake_transport({"/books/v1/volumes": payload})

    with pytest.raises(NotFoundError):
        GoogleBooksSource(transport=transport).fetch("1")


@pytest.mark.parametrize(
    "payload",
    ["oops", {"items": "x"}, {"items": [42]}, {"items": [{"volumeInfo": []}]}],
)
def test_google_books_unexpected_shape_is_decode_error(fake_transport, payload) -> None:
    transport = fake_transport({"/books/v1/volumes": payload})

    with pytest.raises(DecodeError):
        GoogleBooksSource(transport=transport).fetch("1")


def test_google_books_network_error(fake_transport) -> None:
    transport = fake_transport({"/books/v1/volumes": TransportError("connection refused")})

    with pytest.raises(NetworkError) as exc_info:
        GoogleBooksSource(transport=transport).fetch("1")

    assert exc_info.value.source == "google_books"
    assert isinstance(exc_info.value.__cause__, TransportError)
