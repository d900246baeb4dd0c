"""VocaDB catalog connector.

This module provides a thin async client for the public VocaDB API using
aiohttp. It returns raw JSON payloads; normalization happens in the domain
transforms.

Key components:
- VocaDBConnector: Session-owning client with artist, song listing and song lookups

Endpoints used:
- GET /artists/{id}                  raw artist record
- GET /songs?artistId[]={id}&...     paginated song listing for an artist
- GET /songs/{id}?fields=...         raw song record with credits and PVs
"""

from typing import Any

import aiohttp
from attrs import define, field

from vocaworks.config import get_config, get_logger, resilient_operation
from vocaworks.domain.errors import FetchError, MalformedRecordError

# Get contextual logger with service binding
logger = get_logger(__name__).bind(service="vocadb")

SONG_FIELDS = "Artists,MainPicture,PVs"
LISTED_SONG_TYPES = "Original,Remaster,Remix,Cover"


@define(slots=True)
class VocaDBConnector:
    """Async wrapper around the VocaDB REST API.

    Use as an async context manager, or pass an existing ``session``. A
    session created by the connector is closed by :meth:`close`.

    Attributes:
        base_url: API root, e.g. ``https://vocadb.net/api``
        timeout: Total timeout per request in seconds
        user_agent: User-Agent header sent with every request
        page_size: Page size used when walking song listings
        session: Optional externally managed aiohttp session
    """

    base_url: str = field(factory=lambda: get_config("VOCADB_BASE_URL"))
    timeout: float = field(factory=lambda: get_config("VOCADB_API_TIMEOUT", 30.0))
    user_agent: str = field(factory=lambda: get_config("USER_AGENT", "vocaworks"))
    page_size: int = field(factory=lambda: get_config("VOCADB_API_PAGE_SIZE", 10))
    session: Any = field(default=None, repr=False)
    _owns_session: bool = field(default=False, init=False, repr=False)

    async def __aenter__(self) -> "VocaDBConnector":
        self._ensure_session()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _ensure_session(self) -> Any:
        if self.session is None:
            logger.debug("Opening VocaDB session")
            self.session = aiohttp.ClientSession(
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
            self._owns_session = True
        return self.session

    async def close(self) -> None:
        """Close the session if this connector created it."""
        if self._owns_session and self.session is not None:
            await self.session.close()
            self.session = None
            self._owns_session = False

    async def _get_json(
        self,
        path: str,
        identifier: int | str,
        params: Any = None,
    ) -> Any:
        """GET a JSON document, translating transport failures to FetchError."""
        session = self._ensure_session()
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    raise FetchError(
                        identifier,
                        f"VocaDB returned HTTP {response.status} for {path}",
                        status=response.status,
                    )
                return await response.json()
        except aiohttp.ClientError as e:
            raise FetchError(identifier, f"Request to {path} failed: {e}") from e
        except TimeoutError as e:
            raise FetchError(identifier, f"Request to {path} timed out") from e
        except ValueError as e:
            raise FetchError(identifier, f"Invalid JSON from {path}: {e}") from e

    @resilient_operation("vocadb_get_artist")
    async def get_artist(self, artist_id: int) -> dict[str, Any]:
        """Fetch a raw artist record.

        Args:
            artist_id: VocaDB artist id

        Returns:
            Raw artist payload
        """
        return await self._get_json(
            f"artists/{artist_id}", artist_id, params={"lang": "Default"}
        )

    @resilient_operation("vocadb_get_artist_songs")
    async def get_artist_songs(
        self,
        artist_id: int,
        page: int = 1,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """Fetch one page of songs credited to an artist.

        Args:
            artist_id: VocaDB artist id
            page: 1-based page number
            page_size: Songs per page (defaults to the connector's page size)

        Returns:
            Raw listing payload with ``items`` and ``totalCount``
        """
        size = page_size or self.page_size
        params = [
            ("start", str(size * (page - 1))),
            ("getTotalCount", "true"),
            ("maxResults", str(size)),
            ("query", ""),
            ("fields", SONG_FIELDS),
            ("lang", "Default"),
            ("nameMatchMode", "Auto"),
            ("sort", "PublishDate"),
            ("childTags", "false"),
            ("artistId[]", str(artist_id)),
            ("artistParticipationStatus", "Everything"),
            ("songTypes", LISTED_SONG_TYPES),
            ("onlyWithPvs", "true"),
        ]
        return await self._get_json("songs", artist_id, params=params)

    async def iter_artist_song_ids(self, artist_id: int) -> list[int]:
        """Walk every listing page for an artist and collect song ids in order.

        Stops when ``totalCount`` ids have been collected or a page comes back
        empty.

        Raises:
            FetchError: If any page cannot be fetched
            MalformedRecordError: If a page lacks its ``items`` list
        """
        song_ids: list[int] = []
        page = 1
        while True:
            payload = await self.get_artist_songs(artist_id, page=page)
            items = payload.get("items") if isinstance(payload, dict) else None
            if not isinstance(items, list):
                raise MalformedRecordError(artist_id, "Song listing has no 'items' list")

            song_ids.extend(item["id"] for item in items if "id" in item)
            total = payload.get("totalCount") or 0
            logger.debug(
                f"Listed page {page} for artist {artist_id}",
                collected=len(song_ids),
                total=total,
            )
            if not items or len(song_ids) >= total:
                return song_ids
            page += 1

    @resilient_operation("vocadb_get_song")
    async def get_song(self, song_id: int) -> dict[str, Any]:
        """Fetch a raw song record with credits, main picture and PVs.

        Args:
            song_id: VocaDB song id

        Returns:
            Raw song payload
        """
        return await self._get_json(
            f"songs/{song_id}",
            song_id,
            params={"fields": SONG_FIELDS, "lang": "Default"},
        )
