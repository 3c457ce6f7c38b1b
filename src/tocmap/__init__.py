"""tocmap: fetch a book's table of contents and save it as a mind map."""

__version__ = "0.1.0"
