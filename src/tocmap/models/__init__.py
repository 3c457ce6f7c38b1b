"""Pydantic models used across the project."""

from __future__ import annotations

from tocmap.models.book import BookLookup, BookRecord, ChapterEntry
from tocmap.models.outline import OutlineNode

__all__ = [
    "BookLookup",
    "BookRecord",
    "ChapterEntry",
    "OutlineNode",
]
