"""Outline output formats."""

from tocmap.outline.mindmap import build_outline, parse_mindmap, render_mindmap, write_mindmap

__all__ = ["build_outline", "parse_mindmap", "render_mindmap", "write_mindmap"]
