"""FreeMind ``.mm`` mind map output.

A mind map document looks like::

    <?xml version="1.0" encoding="UTF-8"?>
    <map version="1.0.1">
      <node TEXT="Pride and Prejudice">
        <node TEXT="Chapter 1" />
      </node>
    </map>

Node text always lives in the ``TEXT`` attribute, never in element content.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from tocmap.errors import OutlineParseError, OutlineWriteError
from tocmap.logging import get_logger
from tocmap.models import BookRecord, OutlineNode

logger = get_logger(__name__)

MINDMAP_VERSION = "1.0.1"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
INDENT = "  "

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(r"[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def build_outline(record: BookRecord) -> OutlineNode:
    """Turn a book record into a two-level tree: title, then one leaf per chapter."""

    return OutlineNode(
        text=record.title,
        children=[OutlineNode(text=chapter.title) for chapter in record.chapters],
    )


def clean_text(text: str) -> str:
    """Replace characters XML 1.0 cannot carry with U+FFFD."""

    return _INVALID_XML_CHARS.sub("\ufffd", text)


def _to_element(node: OutlineNode) -> ET.Element:
    element = ET.Element("node", TEXT=clean_text(node.text))
    for child in node.children:
        element.append(_to_element(child))
    return element


def render_mindmap(root: OutlineNode, *, version: str = MINDMAP_VERSION) -> str:
    """Serialize a tree to mind map markup.

    Args:
        root: Root node; becomes the single child of ``<map>``.
        version: Value of the ``version`` attribute on ``<map>``.

    Returns:
        The full document, XML declaration included.
    """

    doc = ET.Element("map", version=version)
    doc.append(_to_element(root))
    ET.indent(doc, space=INDENT)
    return XML_HEADER + ET.tostring(doc, encoding="unicode") + "\n"


def write_mindmap(record: BookRecord, path: Path) -> Path:
    """Write ``record`` as a mind map file at ``path``.

    Raises:
        OutlineWriteError: The file could not be created or written.
    """

    text = render_mindmap(build_outline(record))
    try:
        with path.open("w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise OutlineWriteError(f"cannot write {path}: {e.strerror or e}") from e

    logger.info("Mindmap written", extra={"path": str(path), "node_count": len(record.chapters) + 1})
    return path


def _from_element(element: ET.Element) -> OutlineNode:
    return OutlineNode(
        text=element.get("TEXT", ""),
        children=[_from_element(child) for child in element.findall("node")],
    )


def parse_mindmap(text: str) -> OutlineNode:
    """Parse mind map markup back into a tree.

    Raises:
        OutlineParseError: Malformed XML, a root other than ``<map>``, or no root node.
    """

    try:
        doc = ET.fromstring(text.encode("utf-8"))
    except ET.ParseError as e:
        raise OutlineParseError(f"malformed mind map: {e}") from e

    if doc.tag != "map":
        raise OutlineParseError(f"expected <map> root element, got <{doc.tag}>")
    root = doc.find("node")
    if root is None:
        raise OutlineParseError("mind map has no root node")
    return _from_element(root)
