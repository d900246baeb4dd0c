"""Producer works aggregation use case.

Fetches every song of a producer from the catalog under a concurrency cap,
normalizes each record (credit classification, PV selection) and returns the
collection sorted by publish date, together with the per-song errors of the
songs that could not be aggregated.

Flow:
    song ids -> one fetch task per id -> TaskScheduler -> parse + normalize
    -> sort by publish date -> AggregationResult
"""

from collections.abc import Sequence
import time
from typing import Any

from attrs import define, field

from vocaworks.application.protocols import (
    ArtistSongsProtocol,
    ProducerDiscoveryProtocol,
    SongFetcherProtocol,
)
from vocaworks.application.utilities.results import AggregationResult, RecordError
from vocaworks.application.utilities.scheduling import (
    ProgressCallback,
    TaskOutcome,
    TaskScheduler,
)
from vocaworks.config import get_config, get_logger
from vocaworks.domain.entities.song import AggregatedSong, parse_song_record
from vocaworks.domain.lookups import DEFAULT_TABLES, LookupTables
from vocaworks.domain.transforms.songs import aggregate_song, sort_by_publish_date

logger = get_logger(__name__)

DEFAULT_CONCURRENCY = 10


def _default_concurrency() -> int:
    return get_config("VOCADB_API_CONCURRENCY", DEFAULT_CONCURRENCY)


@define(slots=True)
class AggregateWorksUseCase:
    """Aggregate catalog songs into a sorted, display-ready collection.

    Per-song failures (fetch errors, malformed records, unmapped roles) are
    recovered here and reported in the result; they never discard unrelated
    successes.

    Attributes:
        fetcher: Catalog connector used for the per-song fetches
        tables: Lookup tables for labels, icons and thumbnail priority
        concurrency: Maximum number of fetches in flight
        discovery: Optional backend resolving producer aliases
        artist_songs: Optional catalog listing used for direct artist lookups
    """

    fetcher: SongFetcherProtocol
    tables: LookupTables = field(default=DEFAULT_TABLES)
    concurrency: int = field(factory=_default_concurrency)
    discovery: ProducerDiscoveryProtocol | None = field(default=None)
    artist_songs: ArtistSongsProtocol | None = field(default=None)

    async def execute(
        self,
        song_ids: Sequence[int],
        progress_callback: ProgressCallback | None = None,
    ) -> AggregationResult:
        """Fetch and normalize the given songs.

        Args:
            song_ids: Song identifiers in discovery order
            progress_callback: Optional ``(completed, total)`` fetch progress hook

        Returns:
            AggregationResult with songs sorted by publish date and per-song errors
        """
        start_time = time.time()

        with logger.contextualize(
            operation="aggregate_works", song_count=len(song_ids)
        ):
            logger.info(f"Aggregating {len(song_ids)} songs")

            tasks = [self._fetch_task(song_id) for song_id in song_ids]
            scheduler = TaskScheduler(
                concurrency_limit=self.concurrency,
                progress_log_frequency=get_config("BATCH_PROGRESS_LOG_FREQUENCY", 10),
            )
            outcomes = await scheduler.run(tasks, progress_callback=progress_callback)

            songs: list[AggregatedSong] = []
            errors: list[RecordError] = []
            for song_id, outcome in zip(song_ids, outcomes, strict=True):
                try:
                    songs.append(self._normalize(outcome))
                except Exception as e:
                    logger.warning(
                        "Skipping song {}: {}",
                        song_id,
                        e,
                        song_id=song_id,
                        error_type=type(e).__name__,
                    )
                    errors.append(RecordError.from_exception(song_id, e))

            result = AggregationResult(
                songs=sort_by_publish_date(songs),
                errors=errors,
            )

            execution_time_ms = int((time.time() - start_time) * 1000)
            logger.info(
                f"Aggregated {result.success_count}/{len(song_ids)} songs "
                f"in {execution_time_ms}ms",
                errors=result.error_summary,
            )
            return result

    async def execute_for_entry(
        self,
        entry: str,
        progress_callback: ProgressCallback | None = None,
    ) -> AggregationResult:
        """Resolve a producer alias through discovery, then aggregate its songs.

        Raises:
            DiscoveryError: If the alias or its song list cannot be resolved
            ValueError: If no discovery connector is configured
        """
        if self.discovery is None:
            raise ValueError("A discovery connector is required to resolve entries")

        producer_id = await self.discovery.resolve_producer_id(entry)
        logger.debug(f"Resolved entry {entry!r} to producer {producer_id}")
        song_ids = await self.discovery.list_song_ids(producer_id)
        return await self.execute(song_ids, progress_callback=progress_callback)

    async def execute_for_artist(
        self,
        artist_id: int,
        progress_callback: ProgressCallback | None = None,
    ) -> AggregationResult:
        """Aggregate the songs listed for a catalog artist id.

        Raises:
            ValueError: If no artist listing connector is configured
        """
        if self.artist_songs is None:
            raise ValueError("An artist listing connector is required")

        song_ids = await self.artist_songs.iter_artist_song_ids(artist_id)
        return await self.execute(song_ids, progress_callback=progress_callback)

    def _fetch_task(self, song_id: int):
        async def fetch() -> dict[str, Any]:
            return await self.fetcher.get_song(song_id)

        return fetch

    def _normalize(self, outcome: TaskOutcome[dict[str, Any]]) -> AggregatedSong:
        raw = parse_song_record(outcome.unwrap())
        return aggregate_song(raw, self.tables)
