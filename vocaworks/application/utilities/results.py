"""Result types for aggregation runs.

Per-song failures are collected next to the successful songs so a run always
returns whatever subset succeeded.
"""

from collections import Counter
from enum import StrEnum

from attrs import define, field

from vocaworks.domain.entities.song import AggregatedSong
from vocaworks.domain.errors import FetchError, MalformedRecordError, UnmappedRoleError


class ErrorKind(StrEnum):
    """Category of a per-song failure."""

    FETCH = "fetch_failure"
    MALFORMED = "malformed_record"
    UNMAPPED_ROLE = "unmapped_role"
    UNEXPECTED = "unexpected"


@define(frozen=True, slots=True)
class RecordError:
    """Failure recorded for one song identifier."""

    song_id: int | str
    kind: ErrorKind
    message: str

    @classmethod
    def from_exception(cls, song_id: int | str, error: Exception) -> "RecordError":
        """Classify an exception raised while fetching or normalizing a song."""
        match error:
            case FetchError():
                kind = ErrorKind.FETCH
            case MalformedRecordError():
                kind = ErrorKind.MALFORMED
            case UnmappedRoleError():
                kind = ErrorKind.UNMAPPED_ROLE
            case _:
                kind = ErrorKind.UNEXPECTED
        return cls(song_id=song_id, kind=kind, message=str(error) or type(error).__name__)


@define(frozen=True, slots=True)
class AggregationResult:
    """Sorted songs plus the errors of the identifiers that did not make it."""

    songs: tuple[AggregatedSong, ...] = field(converter=tuple, factory=tuple)
    errors: tuple[RecordError, ...] = field(converter=tuple, factory=tuple)

    @property
    def requested_count(self) -> int:
        return len(self.songs) + len(self.errors)

    @property
    def success_count(self) -> int:
        return len(self.songs)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def is_partial(self) -> bool:
        """True when some requested songs are missing from the collection."""
        return bool(self.errors)

    @property
    def error_summary(self) -> dict[str, int]:
        """Count of errors per kind."""
        return dict(Counter(str(error.kind) for error in self.errors))
