"""Open Library books API source (primary)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tocmap.errors import DecodeError, NetworkError, NotFoundError
from tocmap.logging import get_logger
from tocmap.models import BookRecord, ChapterEntry
from tocmap.sources.transport import JsonTransport, PayloadDecodeError, TransportError

logger = get_logger(__name__)


@dataclass(frozen=True)
class OpenLibrarySource:
    """Look up a book through ``/api/books?jscmd=data``.

    Notes:
        - The response is an object keyed by ``"ISBN:<identifier>"``.
        - A missing and an empty ``table_of_contents`` both yield no chapters.
    """

    transport: JsonTransport
    base_url: str = "https://openlibrary.org"
    name: str = "open_library"

    def fetch(self, identifier: str) -> BookRecord:
        """Fetch title and table of contents.

        Args:
            identifier: ISBN, passed through unvalidated.

        Returns:
            The decoded record, possibly with an empty chapter list.

        Raises:
            NetworkError: Transport failure.
            DecodeError: Malformed JSON or unexpected shape.
            NotFoundError: The ISBN key is absent from the response.
        """

        key = f"ISBN:{identifier}"
        url = f"{self.base_url.rstrip('/')}/api/books"
        params = {"bibkeys": key, "format": "json", "jscmd": "data"}

        try:
            data = self.transport.get_json(url, params=params)
        except TransportError as e:
            raise NetworkError(str(e), source=self.name, identifier=identifier) from e
        except PayloadDecodeError as e:
            raise DecodeError(str(e), source=self.name, identifier=identifier) from e

        if not isinstance(data, dict):
            raise DecodeError(
                "open library response not a JSON object", source=self.name, identifier=identifier
            )

        book = data.get(key)
        if book is None:
            raise NotFoundError(
                f"no book data found for ISBN {identifier}", source=self.name, identifier=identifier
            )
        if not isinstance(book, dict):
            raise DecodeError(
                f"open library record for {key} not a JSON object",
                source=self.name,
                identifier=identifier,
            )

        record = BookRecord(
            title=_as_text(book.get("title")),
            chapters=self._decode_toc(book.get("table_of_contents"), identifier),
        )
        logger.info(
            "Open Library lookup ok",
            extra={"source": self.name, "chapter_count": len(record.chapters)},
        )
        return record

    def _decode_toc(self, raw: Any, identifier: str) -> list[ChapterEntry]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise DecodeError(
                "table_of_contents is not an array", source=self.name, identifier=identifier
            )
        chapters: list[ChapterEntry] = []
        for entry in raw:
            if not isinstance(entry, dict):
                continue
            chapters.append(ChapterEntry(title=_as_text(entry.get("title"))))
        return chapters


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""
