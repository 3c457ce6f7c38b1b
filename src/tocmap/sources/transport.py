"""JSON-over-HTTP transport used by the bibliographic sources."""

from __future__ import annotations

import time
from typing import Any, Mapping, Protocol

import httpx

from tocmap.config import Settings
from tocmap.logging import get_logger

logger = get_logger(__name__)


class TransportError(RuntimeError):
    """The request could not be completed or returned a non-success status."""


class PayloadDecodeError(ValueError):
    """The response body is not valid JSON."""


class JsonTransport(Protocol):
    """Transport interface.

    Sources depend on this rather than on httpx so tests can feed canned payloads.
    """

    def get_json(self, url: str, *, params: Mapping[str, str]) -> Any:
        """GET ``url`` with ``params`` and return the decoded JSON body."""


class HttpxTransport:
    """Blocking transport backed by a single :class:`httpx.Client`."""

    def __init__(self, settings: Settings, *, client: httpx.Client | None = None) -> None:
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(settings.http_timeout_s),
            headers={"User-Agent": settings.http_user_agent},
            follow_redirects=True,
        )

    def get_json(self, url: str, *, params: Mapping[str, str]) -> Any:
        started = time.monotonic()
        try:
            resp = self._client.get(url, params=dict(params))
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"GET {url} returned status {e.response.status_code}"
            ) from e
        except (httpx.TimeoutException, httpx.RequestError) as e:
            raise TransportError(f"GET {url} failed: {e}") from e

        logger.debug(
            "HTTP GET ok",
            extra={
                "url": str(resp.url),
                "status_code": resp.status_code,
                "latency_ms": int((time.monotonic() - started) * 1000),
            },
        )

        try:
            return resp.json()
        except ValueError as e:
            raise PayloadDecodeError(f"GET {url} returned invalid JSON: {e}") from e

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
