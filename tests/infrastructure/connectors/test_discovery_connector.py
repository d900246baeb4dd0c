"""Tests for the producer discovery connector."""

import json

import aiohttp
import pytest

from tests.conftest import FakeResponse, FakeSession
from vocaworks.domain.errors import DiscoveryError
from vocaworks.infrastructure.connectors.discovery import DiscoveryConnector

BASE = "http://discovery.test"


def _connector(responses) -> tuple[DiscoveryConnector, FakeSession]:
    session = FakeSession(responses)
    return DiscoveryConnector(base_url=BASE, session=session), session


class TestResolveProducerId:
    """Test alias resolution."""

    @pytest.mark.asyncio
    async def test_resolves_plain_text_id(self):
        connector, session = _connector({f"{BASE}/producer/id": FakeResponse(text="1234\n")})

        assert await connector.resolve_producer_id("DECO*27") == "1234"
        assert session.calls[0][1] == {"entry": "DECO*27"}

    @pytest.mark.asyncio
    async def test_empty_id_raises(self):
        connector, _ = _connector({f"{BASE}/producer/id": FakeResponse(text="  ")})

        with pytest.raises(DiscoveryError, match="No producer found"):
            await connector.resolve_producer_id("nobody")

    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        connector, _ = _connector({f"{BASE}/producer/id": FakeResponse(status=500)})

        with pytest.raises(DiscoveryError, match="HTTP 500"):
            await connector.resolve_producer_id("DECO*27")

    @pytest.mark.asyncio
    async def test_client_error_raises(self):
        connector, _ = _connector({
            f"{BASE}/producer/id": aiohttp.ClientConnectionError("refused")
        })

        with pytest.raises(DiscoveryError, match="refused"):
            await connector.resolve_producer_id("DECO*27")


class TestListSongIds:
    """Test song id listing."""

    @pytest.mark.asyncio
    async def test_lists_ids_in_order(self):
        connector, session = _connector({
            f"{BASE}/producer/song": FakeResponse(
                payload=[{"song_id": 30}, {"song_id": "10"}, {"title": "no id"}, {"song_id": 20}]
            )
        })

        assert await connector.list_song_ids("1234") == [30, 10, 20]
        assert session.calls[0][1] == {"id": "1234"}

    @pytest.mark.asyncio
    async def test_non_list_payload_raises(self):
        connector, _ = _connector({
            f"{BASE}/producer/song": FakeResponse(payload={"detail": "not found"})
        })

        with pytest.raises(DiscoveryError):
            await connector.list_song_ids("1234")

    @pytest.mark.asyncio
    async def test_invalid_song_id_raises(self):
        connector, _ = _connector({
            f"{BASE}/producer/song": FakeResponse(payload=[{"song_id": "abc"}])
        })

        with pytest.raises(DiscoveryError, match="Invalid song id"):
            await connector.list_song_ids("1234")

    @pytest.mark.asyncio
    async def test_invalid_json_body_raises(self):
        connector, _ = _connector({
            f"{BASE}/producer/song": FakeResponse(payload=json.JSONDecodeError("Expecting value", "oops", 0))
        })

        with pytest.raises(DiscoveryError, match="Invalid JSON"):
            await connector.list_song_ids("1234")
