"""Fixed lookup tables for credit labels, service icons and thumbnail priority.

Tables are read-only mappings bundled in a frozen :class:`LookupTables`,
built once and passed by reference into the transforms that need them.
"""

from collections.abc import Mapping
from types import MappingProxyType

from attrs import define, field

from .entities.media import PVService

ROLE_LABELS: Mapping[str, str] = MappingProxyType({
    "Animator": "PV",
    "Arranger": "编曲",
    "Composer": "作曲",
    "Distributor": "发行",
    "EffectiveVocalist": "和声",
    "Illustrator": "曲绘",
    "Instrumentalist": "演奏",
    "Lyricist": "作词",
    "Mastering": "母带",
    "Mixer": "混音",
    "Other": "其他",
    "Producer": "词·曲",
    "Publisher": "出版",
    "VocalDataProvider": "音源",
    "Vocalist": "演唱",
    "VoiceManipulator": "调教",
})

SERVICE_ICONS: Mapping[str, str] = MappingProxyType({
    PVService.YOUTUBE: "https://voca.wiki/images/6/60/YouTube_Icon_Red.svg",
    PVService.BILIBILI: "https://voca.wiki/images/f/f5/Bilibili_Icon.svg",
    PVService.SOUNDCLOUD: "https://voca.wiki/images/7/7d/SoundCloud_Icon.svg",
    PVService.NICONICO: "https://voca.wiki/images/e/e0/Niconico_Logo_%282020%29.svg",
})

# Lower rank wins
SERVICE_PRIORITY: Mapping[str, int] = MappingProxyType({
    PVService.BILIBILI: 0,
    PVService.NICONICO: 1,
    PVService.YOUTUBE: 2,
    PVService.SOUNDCLOUD: 3,
})

VOCALIST_ROLE = "Vocalist"


def _freeze(mapping: Mapping) -> Mapping:
    if isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping))


@define(frozen=True, slots=True)
class LookupTables:
    """Immutable bundle of the lookup tables used during normalization."""

    role_labels: Mapping[str, str] = field(default=ROLE_LABELS, converter=_freeze)
    service_icons: Mapping[str, str] = field(default=SERVICE_ICONS, converter=_freeze)
    service_priority: Mapping[str, int] = field(
        default=SERVICE_PRIORITY, converter=_freeze
    )

    @property
    def unranked(self) -> int:
        """Rank given to services missing from the priority table."""
        return max(self.service_priority.values(), default=-1) + 1

    def rank_of(self, service: str) -> int:
        return self.service_priority.get(service, self.unranked)

    def icon_for(self, service: str) -> str:
        return self.service_icons.get(service, "")


DEFAULT_TABLES = LookupTables()
