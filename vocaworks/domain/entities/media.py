"""Media-related domain entities."""

from enum import StrEnum

import attrs
from attrs import define, field, validators


class PVService(StrEnum):
    """Video services with a known icon and thumbnail priority."""

    BILIBILI = "Bilibili"
    NICONICO = "NicoNicoDouga"
    YOUTUBE = "Youtube"
    SOUNDCLOUD = "SoundCloud"


@define(frozen=True, slots=True)
class MediaEntry:
    """One externally hosted preview (PV) of a song.

    ``service`` is kept as a plain string because the catalog knows more
    services than :class:`PVService` lists.
    """

    service: str = field(validator=validators.instance_of(str))
    author: str = field(validator=validators.instance_of(str))
    pv_type: str = field(validator=validators.instance_of(str))
    thumb_url: str = field(default="")
    icon: str = field(default="")
    url: str | None = field(default=None)
    name: str | None = field(default=None)

    def with_icon(self, icon: str) -> "MediaEntry":
        """Create a new entry with the given icon URL."""
        return attrs.evolve(self, icon=icon)


@define(frozen=True, slots=True)
class MediaSelection:
    """Validated media list and the thumbnail chosen from it."""

    media: tuple[MediaEntry, ...] = field(converter=tuple, factory=tuple)
    best_thumbnail: str | None = None
