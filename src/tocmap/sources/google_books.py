"""Google Books volumes API source (fallback)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tocmap.errors import DecodeError, NetworkError, NotFoundError
from tocmap.logging import get_logger
from tocmap.models import BookRecord, ChapterEntry
from tocmap.sources.transport import JsonTransport, PayloadDecodeError, TransportError

logger = get_logger(__name__)

DEFAULT_MIN_CHAPTER_LENGTH = 5


def chapters_from_description(
    description: str, min_length: int = DEFAULT_MIN_CHAPTER_LENGTH
) -> list[ChapterEntry]:
    """Guess chapter titles from a free-text description.

    Each line is trimmed; lines strictly longer than ``min_length`` characters
    become chapters, in order. Google Books has no table of contents field, so
    this is a heuristic and will happily turn blurb sentences into "chapters".

    Args:
        description: ``volumeInfo.description`` text.
        min_length: Lines of this length or shorter are dropped.

    Returns:
        Chapter entries in description order.
    """

    chapters: list[ChapterEntry] = []
    for line in description.split("\n"):
        line = line.strip()
        if len(line) > min_length:
            chapters.append(ChapterEntry(title=line))
    return chapters


@dataclass(frozen=True)
class GoogleBooksSource:
    """Look up a book through ``/books/v1/volumes?q=isbn:<identifier>``."""

    transport: JsonTransport
    base_url: str = "https://www.googleapis.com"
    min_chapter_length: int = DEFAULT_MIN_CHAPTER_LENGTH
    name: str = "google_books"

    def fetch(self, identifier: str) -> BookRecord:
        """Fetch title and description-derived chapters for the first matching volume.

        Raises:
            NetworkError: Transport failure.
            DecodeError: Malformed JSON or unexpected shape.
            NotFoundError: No volume matched.
        """

        url = f"{self.base_url.rstrip('/')}/books/v1/volumes"
        params = {"q": f"isbn:{identifier}"}

        try:
            data = self.transport.get_json(url, params=params)
        except TransportError as e:
            raise NetworkError(str(e), source=self.name, identifier=identifier) from e
        except PayloadDecodeError as e:
            raise DecodeError(str(e), source=self.name, identifier=identifier) from e

        if not isinstance(data, dict):
            raise DecodeError(
                "google books response not a JSON object", source=self.name, identifier=identifier
            )

        items = data.get("items")
        if not items:
            raise NotFoundError(
                f"no book found for ISBN {identifier}", source=self.name, identifier=identifier
            )
        if not isinstance(items, list):
            raise DecodeError("items is not an array", source=self.name, identifier=identifier)

        first = items[0]
        info: Any = first.get("volumeInfo") if isinstance(first, dict) else None
        if not isinstance(info, dict):
            raise DecodeError(
                "first item has no volumeInfo object", source=self.name, identifier=identifier
            )

        title = info.get("title")
        description = info.get("description")
        record = BookRecord(
            title=title if isinstance(title, str) else "",
            chapters=chapters_from_description(
                description if isinstance(description, str) else "",
                self.min_chapter_length,
            ),
        )
        logger.info(
            "Google Books lookup ok",
            extra={
                "source": self.name,
                "item_count": len(items),
                "chapter_count": len(record.chapters),
            },
        )
        return record
