"""Error taxonomy for book lookups and mind map output."""

from __future__ import annotations


class TocMapError(Exception):
    """Base class for all tocmap errors."""


class SourceError(TocMapError):
    """A bibliographic source could not provide a record."""

    def __init__(self, message: str, *, source: str, identifier: str) -> None:
        super().__init__(message)
        self.source = source
        self.identifier = identifier


class NetworkError(SourceError):
    """Transport failure: connection error, timeout or non-success status."""


class DecodeError(SourceError):
    """Malformed JSON or an unexpected response shape."""


class NotFoundError(SourceError):
    """Well-formed response that lacks the requested record."""


class FallbackError(TocMapError):
    """Both the primary and the fallback source failed."""

    def __init__(
        self,
        identifier: str,
        *,
        primary_error: SourceError | None,
        secondary_error: SourceError,
    ) -> None:
        primary = str(primary_error) if primary_error is not None else "no table of contents"
        super().__init__(
            f"both Open Library and Google Books failed for ISBN {identifier}: "
            f"primary: {primary}; fallback: {secondary_error}"
        )
        self.identifier = identifier
        self.primary_error = primary_error
        self.secondary_error = secondary_error


class OutlineWriteError(TocMapError, OSError):
    """The mind map file could not be created or written."""


class OutlineParseError(TocMapError, ValueError):
    """A mind map document is malformed or has no root node."""
