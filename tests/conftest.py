"""Shared test fixtures: raw catalog payload builders and fake connectors."""

from typing import Any

import pytest

from vocaworks.domain.errors import FetchError


def make_song_payload(
    song_id: int,
    name: str | None = None,
    publish_date: str | None = "2020-01-01T00:00:00Z",
    artists: list[dict[str, Any]] | None = None,
    pvs: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a raw VocaDB song payload."""
    return {
        "id": song_id,
        "name": name or f"Song {song_id}",
        "publishDate": publish_date,
        "artists": artists
        if artists is not None
        else [
            {"name": "Producer P", "categories": "Producer", "effectiveRoles": "Default"},
            {"name": "Miku", "categories": "Vocalist", "effectiveRoles": "Default"},
        ],
        "pvs": pvs
        if pvs is not None
        else [
            {
                "service": "Youtube",
                "author": "Producer P",
                "pvType": "Original",
                "thumbUrl": f"https://img.youtube.com/{song_id}.jpg",
                "url": f"https://youtu.be/{song_id}",
            }
        ],
    }


class FakeSongFetcher:
    """In-memory song fetcher; values that are exceptions are raised."""

    def __init__(self, payloads: dict[int, Any]):
        self.payloads = payloads
        self.calls: list[int] = []

    async def get_song(self, song_id: int) -> dict[str, Any]:
        self.calls.append(song_id)
        payload = self.payloads.get(song_id)
        if payload is None:
            raise FetchError(song_id, f"VocaDB returned HTTP 404 for songs/{song_id}", status=404)
        if isinstance(payload, Exception):
            raise payload
        return payload


class FakeResponse:
    """Minimal stand-in for an aiohttp response context manager."""

    def __init__(self, status: int = 200, payload: Any = None, text: str = ""):
        self.status = status
        self._payload = payload
        self._text = text

    async def json(self, content_type: str | None = "application/json") -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info: object) -> bool:
        return False


class FakeSession:
    """Minimal stand-in for aiohttp.ClientSession.

    ``responses`` maps URLs to a response, an exception to raise, or a list of
    those consumed in order.
    """

    def __init__(self, responses: dict[str, Any]):
        self.responses = responses
        self.calls: list[tuple[str, Any]] = []
        self.closed = False

    def get(self, url: str, params: Any = None) -> FakeResponse:
        self.calls.append((url, params))
        response = self.responses[url]
        if isinstance(response, list):
            response = response.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def song_payload():
    """Factory fixture for raw song payloads."""
    return make_song_payload


@pytest.fixture
def fake_fetcher_factory():
    """Factory fixture for in-memory song fetchers."""
    return FakeSongFetcher
