"""Producer discovery backend connector.

Resolves human-facing producer entries (wiki page aliases) to canonical
producer ids and lists their song ids. The backend base URL is selected by
the configured environment.

Endpoints used:
- GET {base}/producer/id?entry={alias}     plain-text producer id
- GET {base}/producer/song?id={producer}   JSON list of {song_id, ...}
"""

from typing import Any

import aiohttp
from attrs import define, field

from vocaworks.config import get_config, get_logger, resilient_operation
from vocaworks.domain.errors import DiscoveryError

logger = get_logger(__name__).bind(service="discovery")


@define(slots=True)
class DiscoveryConnector:
    """Async client for the producer discovery backend.

    Attributes:
        base_url: Backend root; defaults to the URL for the configured environment
        timeout: Total timeout per request in seconds
        session: Optional externally managed aiohttp session
    """

    base_url: str = field(factory=lambda: get_config("DISCOVERY_BASE_URL"))
    timeout: float = field(factory=lambda: get_config("VOCADB_API_TIMEOUT", 30.0))
    session: Any = field(default=None, repr=False)
    _owns_session: bool = field(default=False, init=False, repr=False)

    async def __aenter__(self) -> "DiscoveryConnector":
        self._ensure_session()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _ensure_session(self) -> Any:
        if self.session is None:
            self.session = aiohttp.ClientSession(
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

    async def _get(self, path: str, params: dict[str, str], as_json: bool) -> Any:
        session = self._ensure_session()
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    raise DiscoveryError(
                        f"Discovery backend returned HTTP {response.status} for {path}"
                    )
                if as_json:
                    return await response.json(content_type=None)
                return await response.text()
        except aiohttp.ClientError as e:
            raise DiscoveryError(f"Discovery request to {path} failed: {e}") from e
        except TimeoutError as e:
            raise DiscoveryError(f"Discovery request to {path} timed out") from e
        except ValueError as e:
            raise DiscoveryError(f"Invalid JSON from discovery {path}: {e}") from e

    @resilient_operation("discovery_resolve_producer")
    async def resolve_producer_id(self, entry: str) -> str:
        """Resolve a producer entry alias to its canonical id.

        Raises:
            DiscoveryError: If the backend fails or returns an empty id
        """
        producer_id = (await self._get("producer/id", {"entry": entry}, False)).strip()
        if not producer_id:
            raise DiscoveryError(f"No producer found for entry {entry!r}")
        logger.debug(f"Entry {entry!r} resolved to producer {producer_id}")
        return producer_id

    @resilient_operation("discovery_list_songs")
    async def list_song_ids(self, producer_id: str) -> list[int]:
        """List a producer's song ids in backend order.

        Raises:
            DiscoveryError: If the backend fails or the payload is not a list
        """
        payload = await self._get("producer/song", {"id": producer_id}, True)
        if not isinstance(payload, list):
            raise DiscoveryError(
                f"Unexpected song list payload for producer {producer_id}"
            )

        try:
            song_ids = [
                int(item["song_id"])
                for item in payload
                if isinstance(item, dict) and item.get("song_id") is not None
            ]
        except (TypeError, ValueError) as e:
            raise DiscoveryError(
                f"Invalid song id in list for producer {producer_id}: {e}"
            ) from e
        logger.info(f"Producer {producer_id} has {len(song_ids)} songs")
        return song_ids
