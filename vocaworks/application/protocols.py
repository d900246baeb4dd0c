"""Protocol definitions for use case dependency injection.

These protocols define the contracts the aggregation use case needs from the
catalog and discovery connectors, so use cases can be tested with fakes.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SongFetcherProtocol(Protocol):
    """Retrieves raw song records from the catalog."""

    async def get_song(self, song_id: int) -> dict[str, Any]:
        """Fetch one raw song record.

        Raises:
            FetchError: On network failure or non-success response
        """
        ...


@runtime_checkable
class ArtistSongsProtocol(Protocol):
    """Lists the song identifiers credited to a catalog artist."""

    async def iter_artist_song_ids(self, artist_id: int) -> list[int]:
        """Walk the paginated song listing and return ids in listing order."""
        ...


@runtime_checkable
class ProducerDiscoveryProtocol(Protocol):
    """Resolves human-facing producer aliases to song identifiers."""

    async def resolve_producer_id(self, entry: str) -> str:
        """Resolve an alias to the canonical producer id.

        Raises:
            DiscoveryError: If the alias cannot be resolved
        """
        ...

    async def list_song_ids(self, producer_id: str) -> list[int]:
        """List the producer's song ids in backend order."""
        ...
