from __future__ import annotations

from pydantic import BaseModel, Field


class OutlineNode(BaseModel):
    """Mind map node.

    Text is carried in the ``TEXT`` attribute when serialized.
    """

    text: str
    children: list["OutlineNode"] = Field(default_factory=list)
