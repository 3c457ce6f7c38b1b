"""Primary/fallback coordination between bibliographic sources."""

from __future__ import annotations

from typing import Callable, Protocol

from tocmap.errors import FallbackError, SourceError
from tocmap.logging import get_logger
from tocmap.models import BookLookup, BookRecord

logger = get_logger(__name__)


class BookSource(Protocol):
    """Source interface."""

    name: str

    def fetch(self, identifier: str) -> BookRecord:
        """Fetch a record or raise :class:`SourceError`."""


def _silent(_: str) -> None:
    return None


class FallbackFetcher:
    """Try the primary source, then the fallback source once.

    The primary result is accepted only if it carries at least one chapter. The
    fallback result is accepted as-is, even with no chapters.
    """

    def __init__(
        self,
        primary: BookSource,
        secondary: BookSource,
        *,
        notify: Callable[[str], None] | None = None,
    ) -> None:
        self._primary = primary
        self._secondary = secondary
        self._notify = notify or _silent

    def fetch(self, identifier: str) -> BookLookup:
        """Fetch a record for ``identifier``.

        Raises:
            FallbackError: The primary did not yield chapters and the fallback failed.
        """

        primary_error: SourceError | None = None
        try:
            record = self._primary.fetch(identifier)
        except SourceError as e:
            primary_error = e
            logger.warning(
                "Primary source failed",
                extra={"source": self._primary.name, "error_type": type(e).__name__, "error": str(e)},
            )
        else:
            if record.has_chapters:
                logger.info("Got ToC from primary source", extra={"source": self._primary.name})
                self._notify("✓ Got ToC from Open Library")
                return BookLookup(record=record, source=self._primary.name)
            logger.warning("Primary source had no ToC", extra={"source": self._primary.name})

        self._notify("⚠️  Open Library failed or had no ToC. Trying Google Books...")

        try:
            record = self._secondary.fetch(identifier)
        except SourceError as e:
            logger.error(
                "Fallback source failed",
                extra={"source": self._secondary.name, "error_type": type(e).__name__, "error": str(e)},
            )
            raise FallbackError(identifier, primary_error=primary_error, secondary_error=e) from e

        logger.info(
            "Fallback successful",
            extra={"source": self._secondary.name, "chapter_count": len(record.chapters)},
        )
        self._notify("✓ Fallback to Google Books successful")
        return BookLookup(record=record, source=self._secondary.name)
