"""PV validation, icon annotation and thumbnail selection."""

from collections.abc import Iterable

from vocaworks.domain.entities.media import MediaEntry, MediaSelection
from vocaworks.domain.lookups import DEFAULT_TABLES, LookupTables

ORIGINAL_PV_TYPE = "Original"
AUTO_CHANNEL_SUFFIX = "Topic"


def is_valid_pv(entry: MediaEntry) -> bool:
    """Keep original uploads that are not auto-generated "... - Topic" channels."""
    return entry.pv_type == ORIGINAL_PV_TYPE and not entry.author.endswith(
        AUTO_CHANNEL_SUFFIX
    )


def select_media(
    entries: Iterable[MediaEntry],
    tables: LookupTables = DEFAULT_TABLES,
) -> MediaSelection:
    """Filter, annotate and rank PVs, then pick the best thumbnail.

    Sorting is stable, so entries from the same service keep their catalog
    order. Services missing from the priority table rank after every known one.
    """
    valid = [
        entry.with_icon(tables.icon_for(entry.service))
        for entry in entries
        if is_valid_pv(entry)
    ]
    ranked = sorted(valid, key=lambda entry: tables.rank_of(entry.service))

    best_thumbnail = (ranked[0].thumb_url or None) if ranked else None
    return MediaSelection(media=ranked, best_thumbnail=best_thumbnail)
