"""Tests for the VocaDB connector with a fake aiohttp session."""

import json

import aiohttp
import pytest

from tests.conftest import FakeResponse, FakeSession, make_song_payload
from vocaworks.domain.errors import FetchError, MalformedRecordError
from vocaworks.infrastructure.connectors.vocadb import VocaDBConnector

BASE = "https://vocadb.test/api"


def _connector(responses, page_size: int = 2) -> tuple[VocaDBConnector, FakeSession]:
    session = FakeSession(responses)
    return VocaDBConnector(base_url=BASE, page_size=page_size, session=session), session


class TestGetSong:
    """Test single song retrieval and error translation."""

    @pytest.mark.asyncio
    async def test_returns_payload(self):
        payload = make_song_payload(10)
        connector, session = _connector({f"{BASE}/songs/10": FakeResponse(payload=payload)})

        assert await connector.get_song(10) == payload

        url, params = session.calls[0]
        assert url == f"{BASE}/songs/10"
        assert params == {"fields": "Artists,MainPicture,PVs", "lang": "Default"}

    @pytest.mark.asyncio
    async def test_non_success_status_raises_fetch_error(self):
        connector, _ = _connector({f"{BASE}/songs/10": FakeResponse(status=404)})

        with pytest.raises(FetchError) as exc_info:
            await connector.get_song(10)

        assert exc_info.value.status == 404
        assert exc_info.value.identifier == 10

    @pytest.mark.asyncio
    async def test_client_error_raises_fetch_error(self):
        connector, _ = _connector({
            f"{BASE}/songs/10": aiohttp.ClientConnectionError("connection refused")
        })

        with pytest.raises(FetchError, match="connection refused"):
            await connector.get_song(10)

    @pytest.mark.asyncio
    async def test_timeout_raises_fetch_error(self):
        connector, _ = _connector({f"{BASE}/songs/10": TimeoutError()})

        with pytest.raises(FetchError, match="timed out"):
            await connector.get_song(10)

    @pytest.mark.asyncio
    async def test_invalid_json_body_raises_fetch_error(self):
        connector, _ = _connector({
            f"{BASE}/songs/10": FakeResponse(payload=json.JSONDecodeError("Expecting value", "<html>", 0))
        })

        with pytest.raises(FetchError, match="Invalid JSON"):
            await connector.get_song(10)


class TestArtistEndpoints:
    """Test artist lookup and paginated song listing."""

    @pytest.mark.asyncio
    async def test_get_artist(self):
        connector, session = _connector({
            f"{BASE}/artists/5": FakeResponse(payload={"id": 5, "name": "DECO*27"})
        })

        artist = await connector.get_artist(5)

        assert artist["name"] == "DECO*27"
        assert session.calls[0][1] == {"lang": "Default"}

    @pytest.mark.asyncio
    async def test_get_artist_songs_page_parameters(self):
        connector, session = _connector({
            f"{BASE}/songs": FakeResponse(payload={"items": [], "totalCount": 0})
        })

        await connector.get_artist_songs(5, page=3, page_size=10)

        params = dict(session.calls[0][1])
        assert params["start"] == "20"
        assert params["maxResults"] == "10"
        assert params["artistId[]"] == "5"
        assert params["songTypes"] == "Original,Remaster,Remix,Cover"
        assert params["onlyWithPvs"] == "true"
        assert params["sort"] == "PublishDate"

    @pytest.mark.asyncio
    async def test_iter_artist_song_ids_walks_pages(self):
        connector, session = _connector({
            f"{BASE}/songs": [
                FakeResponse(payload={"items": [{"id": 1}, {"id": 2}], "totalCount": 5}),
                FakeResponse(payload={"items": [{"id": 3}, {"id": 4}], "totalCount": 5}),
                FakeResponse(payload={"items": [{"id": 5}], "totalCount": 5}),
            ]
        })

        song_ids = await connector.iter_artist_song_ids(5)

        assert song_ids == [1, 2, 3, 4, 5]
        assert [dict(params)["start"] for _, params in session.calls] == ["0", "2", "4"]

    @pytest.mark.asyncio
    async def test_iter_artist_song_ids_stops_on_empty_page(self):
        connector, session = _connector({
            f"{BASE}/songs": [
                FakeResponse(payload={"items": [{"id": 1}], "totalCount": 10}),
                FakeResponse(payload={"items": [], "totalCount": 10}),
            ]
        })

        assert await connector.iter_artist_song_ids(5) == [1]
        assert len(session.calls) == 2

    @pytest.mark.asyncio
    async def test_iter_artist_song_ids_malformed_listing(self):
        connector, _ = _connector({f"{BASE}/songs": FakeResponse(payload={"oops": True})})

        with pytest.raises(MalformedRecordError):
            await connector.iter_artist_song_ids(5)


class TestSessionLifecycle:
    """Test session ownership."""

    @pytest.mark.asyncio
    async def test_injected_session_not_closed(self):
        connector, session = _connector({})

        async with connector:
            pass

        assert session.closed is False

    @pytest.mark.asyncio
    async def test_owned_session_closed(self):
        async with VocaDBConnector(base_url=BASE) as connector:
            assert connector.session is not None

        assert connector.session is None
