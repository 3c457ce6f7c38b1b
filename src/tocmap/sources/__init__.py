"""Bibliographic sources and the fallback coordinator."""

from __future__ import annotations

from tocmap.config import Settings
from tocmap.sources.fallback import BookSource, FallbackFetcher
from tocmap.sources.google_books import GoogleBooksSource, chapters_from_description
from tocmap.sources.open_library import OpenLibrarySource
from tocmap.sources.transport import (
    HttpxTransport,
    JsonTransport,
    PayloadDecodeError,
    TransportError,
)

__all__ = [
    "BookSource",
    "FallbackFetcher",
    "GoogleBooksSource",
    "HttpxTransport",
    "JsonTransport",
    "OpenLibrarySource",
    "PayloadDecodeError",
    "TransportError",
    "build_fetcher",
    "chapters_from_description",
]


def build_fetcher(settings: Settings, transport: JsonTransport, **kwargs) -> FallbackFetcher:
    """Factory wiring Open Library as primary and Google Books as fallback."""

    return FallbackFetcher(
        OpenLibrarySource(transport=transport, base_url=settings.open_library_base_url),
        GoogleBooksSource(
            transport=transport,
            base_url=settings.google_books_base_url,
            min_chapter_length=settings.min_chapter_length,
        ),
        **kwargs,
    )
