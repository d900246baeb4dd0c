"""Core domain entities representing catalog songs, credits and PVs."""

from .credit import Credit, CreditClassification, RoleBucket
from .media import MediaEntry, MediaSelection, PVService
from .shared import ensure_utc, parse_publish_date
from .song import (
    AggregatedSong,
    RawSong,
    parse_credit,
    parse_media_entry,
    parse_song_record,
)

__all__ = [
    # Credit entities
    "Credit",
    "CreditClassification",
    "RoleBucket",
    # Media entities
    "MediaEntry",
    "MediaSelection",
    "PVService",
    # Song entities
    "AggregatedSong",
    "RawSong",
    "parse_credit",
    "parse_media_entry",
    "parse_song_record",
    # Shared utilities
    "ensure_utc",
    "parse_publish_date",
]
