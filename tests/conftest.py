"""Shared fixtures for protocol_versions tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from protocol_versions.fetcher import VersionsFetcher
from protocol_versions.resolver import ProtocolVersionResolver

Handler = Callable[[httpx.Request], httpx.Response]

REMOTE_URL = "https://versions.example.org/versions.json"


def versions_json(file_version: int | None, *protocols: tuple[int, str, str]) -> str:
    """Build a versions.json payload; ``None`` omits file_version."""
    data: dict[str, object] = {
        "protocols": [
            {"protocol": protocol, "name": name, "source": source}
            for protocol, name, source in protocols
        ]
    }
    if file_version is not None:
        data = {"file_version": file_version, **data}
    return json.dumps(data, separators=(",", ":"))


def make_fetcher(handler: Handler) -> VersionsFetcher:
    """VersionsFetcher backed by an httpx.MockTransport."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return VersionsFetcher(client=client)


def respond_with(body: str, status_code: int = 200) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=body)

    return handler


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    """Directory used for versions.json."""
    return tmp_path / "data"


@pytest.fixture()
def make_resolver(cache_dir: Path) -> Callable[..., ProtocolVersionResolver]:
    """Factory building a resolver whose HTTP calls go to ``handler``."""

    def factory(
        handler: Handler, custom_protocols: dict[int, str] | None = None
    ) -> ProtocolVersionResolver:
        return ProtocolVersionResolver(
            cache_dir,
            custom_protocols=custom_protocols,
            fetcher=make_fetcher(handler),
        )

    return factory
