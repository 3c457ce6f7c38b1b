"""Logging utilities."""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any

from rich.logging import RichHandler


_identifier_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "tocmap_identifier", default="-"
)


class _ContextFilter(logging.Filter):
    """Inject the current lookup identifier into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.identifier = _identifier_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def lookup_context(*, identifier: str) -> Any:
    """Temporarily bind the identifier being looked up.

    Args:
        identifier: Book identifier as entered by the user.
    """

    token = _identifier_var.set(identifier)
    try:
        yield
    finally:
        _identifier_var.reset(token)


def configure_logging(level: str = "WARNING") -> None:
    """Configure application logging.

    Args:
        level: Logging level name.
    """

    handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
    handler.addFilter(_ContextFilter())

    formatter = logging.Formatter(
        fmt="isbn=%(identifier)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level.upper())
    # configure_logging may run once per CLI invocation in the same process
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(handler)
    else:
        for h in root.handlers:
            if isinstance(h, RichHandler):
                if not any(isinstance(f, _ContextFilter) for f in h.filters):
                    h.addFilter(_ContextFilter())
                h.setFormatter(formatter)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)

