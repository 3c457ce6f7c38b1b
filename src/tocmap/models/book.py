"""Book record models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChapterEntry(BaseModel):
    """A single named entry in a table of contents."""

    title: str


class BookRecord(BaseModel):
    """Title and ordered table of contents for one book.

    The chapter list may be empty; callers decide whether that is acceptable.
    """

    title: str = ""
    chapters: list[ChapterEntry] = Field(default_factory=list)

    @property
    def has_chapters(self) -> bool:
        return bool(self.chapters)


class BookLookup(BaseModel):
    """A record together with the name of the source that supplied it."""

    record: BookRecord
    source: str
