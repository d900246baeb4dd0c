"""Conversion of aggregated songs into the display payload."""

from typing import Any

from vocaworks.domain.entities.media import MediaEntry
from vocaworks.domain.entities.song import AggregatedSong


def format_publish_date(
    song: AggregatedSong,
    date_format: str = "%Y-%m-%d",
    unknown_label: str = "unknown",
) -> str:
    if song.publish_date is None:
        return unknown_label
    return song.publish_date.strftime(date_format)


def media_to_dict(entry: MediaEntry) -> dict[str, Any]:
    return {
        "service": entry.service,
        "author": entry.author,
        "pvType": entry.pv_type,
        "thumbUrl": entry.thumb_url,
        "icon": entry.icon,
        "url": entry.url,
    }


def to_display_item(
    song: AggregatedSong,
    site_url: str = "https://vocadb.net",
    date_format: str = "%Y-%m-%d",
    unknown_label: str = "unknown",
) -> dict[str, Any]:
    """Build the presentation payload for one song."""
    return {
        "id": song.id,
        "name": song.name,
        "publishDate": format_publish_date(song, date_format, unknown_label),
        "url": f"{site_url.rstrip('/')}/S/{song.id}",
        "artists": [
            {"role": bucket.role, "names": list(bucket.names)}
            for bucket in song.credit_buckets
        ],
        "pvs": [media_to_dict(entry) for entry in song.media],
        "thumb": song.best_thumbnail,
        "vocalists": list(song.vocalists),
    }


def render_collection(
    songs: list[AggregatedSong],
    site_url: str = "https://vocadb.net",
    date_format: str = "%Y-%m-%d",
    unknown_label: str = "unknown",
) -> list[dict[str, Any]]:
    """Build display payloads preserving the collection order."""
    return [
        to_display_item(song, site_url, date_format, unknown_label) for song in songs
    ]
