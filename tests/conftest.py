"""Shared test helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import pytest


class FakeTransport:
    """JSON transport returning canned payloads keyed by URL path suffix."""

    def __init__(self, responses: Mapping[str, Any] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, dict[str, str]]] = []

    def get_json(self, url: str, *, params: Mapping[str, str]) -> Any:
        self.calls.append((url, dict(params)))
        for suffix, payload in self.responses.items():
            if url.endswith(suffix):
                if isinstance(payload, Exception):
                    raise payload
                return payload
        raise AssertionError(f"unexpected GET {url}")

    def __enter__(self) -> FakeTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


@pytest.fixture
def fake_transport() -> type[FakeTransport]:
    return FakeTransport


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer .env files and TOCMAP_* variables out of tests."""

    for key in list(os.environ):
        if key.startswith("TOCMAP_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
