"""Song-related domain entities.

Raw catalog songs as validated on arrival and the aggregated, display-ready
shape produced by the normalization pipeline.
"""

from datetime import datetime
from typing import Any

from attrs import define, field

from vocaworks.domain.errors import MalformedRecordError

from .credit import Credit, RoleBucket
from .media import MediaEntry


@define(frozen=True, slots=True)
class RawSong:
    """Structurally validated song record from the catalog."""

    id: int
    name: str
    publish_date_raw: str | None = None
    credits: tuple[Credit, ...] = field(converter=tuple, factory=tuple)
    media: tuple[MediaEntry, ...] = field(converter=tuple, factory=tuple)


@define(frozen=True, slots=True)
class AggregatedSong:
    """Immutable, normalized song ready for display.

    The vocalist bucket never appears in ``credit_buckets``; it is hoisted
    into ``vocalists``. ``best_thumbnail`` always comes from an entry in
    ``media``.
    """

    id: int
    name: str
    publish_date: datetime | None = None
    credit_buckets: tuple[RoleBucket, ...] = field(converter=tuple, factory=tuple)
    vocalists: tuple[str, ...] = field(converter=tuple, factory=tuple)
    media: tuple[MediaEntry, ...] = field(converter=tuple, factory=tuple)
    best_thumbnail: str | None = None

    @property
    def has_publish_date(self) -> bool:
        return self.publish_date is not None


def _require(data: dict[str, Any], key: str, kind: type, identifier: Any) -> Any:
    value = data.get(key)
    if not isinstance(value, kind):
        raise MalformedRecordError(
            identifier,
            f"Field {key!r} missing or not {kind.__name__} (got {type(value).__name__})",
        )
    return value


def parse_credit(data: Any, song_id: Any = None) -> Credit:
    """Build a Credit from a catalog ``artists`` entry."""
    if not isinstance(data, dict):
        raise MalformedRecordError(song_id, "Credit entry is not an object")
    return Credit(
        name=_require(data, "name", str, song_id),
        categories=_require(data, "categories", str, song_id),
        effective_roles=data.get("effectiveRoles") or "Default",
    )


def parse_media_entry(data: Any, song_id: Any = None) -> MediaEntry:
    """Build a MediaEntry from a catalog ``pvs`` entry."""
    if not isinstance(data, dict):
        raise MalformedRecordError(song_id, "PV entry is not an object")
    return MediaEntry(
        service=_require(data, "service", str, song_id),
        author=data.get("author") or "",
        pv_type=_require(data, "pvType", str, song_id),
        thumb_url=data.get("thumbUrl") or "",
        url=data.get("url"),
        name=data.get("name"),
    )


def parse_song_record(data: Any) -> RawSong:
    """Validate a raw catalog song payload and convert it to a RawSong.

    Raises:
        MalformedRecordError: If the payload lacks id, name, artists or pvs
    """
    if not isinstance(data, dict):
        raise MalformedRecordError(None, "Song record is not an object")

    song_id = data.get("id")
    if not isinstance(song_id, int) or isinstance(song_id, bool):
        raise MalformedRecordError(song_id, "Field 'id' missing or not int")

    name = _require(data, "name", str, song_id)
    artists = _require(data, "artists", list, song_id)
    pvs = _require(data, "pvs", list, song_id)

    publish_date = data.get("publishDate")
    return RawSong(
        id=song_id,
        name=name,
        publish_date_raw=publish_date if isinstance(publish_date, str) else None,
        credits=[parse_credit(entry, song_id) for entry in artists],
        media=[parse_media_entry(entry, song_id) for entry in pvs],
    )
