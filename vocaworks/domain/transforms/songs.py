"""Song-level normalization and ordering.

Composes credit classification and media selection into one aggregated song,
and orders collections by publish date.
"""

from collections.abc import Iterable
from datetime import datetime

from vocaworks.domain.entities.shared import parse_publish_date
from vocaworks.domain.entities.song import AggregatedSong, RawSong
from vocaworks.domain.lookups import DEFAULT_TABLES, LookupTables

from .credits import classify_credits
from .media import select_media


def aggregate_song(
    raw: RawSong,
    tables: LookupTables = DEFAULT_TABLES,
) -> AggregatedSong:
    """Normalize one validated catalog song.

    Raises:
        UnmappedRoleError: If a credit role has no display label
    """
    classification = classify_credits(raw.credits, tables)
    selection = select_media(raw.media, tables)
    return AggregatedSong(
        id=raw.id,
        name=raw.name,
        publish_date=parse_publish_date(raw.publish_date_raw),
        credit_buckets=classification.buckets,
        vocalists=classification.vocalists,
        media=selection.media,
        best_thumbnail=selection.best_thumbnail,
    )


def _publish_date_key(song: AggregatedSong) -> tuple[bool, datetime | None]:
    # Dateless songs sort after every dated one; the sort is stable
    if not song.has_publish_date:
        return (True, None)
    return (False, song.publish_date)


def sort_by_publish_date(songs: Iterable[AggregatedSong]) -> list[AggregatedSong]:
    """Sort ascending by publish date, dateless songs last in input order."""
    return sorted(songs, key=_publish_date_key)
