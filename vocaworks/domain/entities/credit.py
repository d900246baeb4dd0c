"""Credit-related domain entities.

Raw contributor attributions and the role buckets they are normalized into.
"""

from attrs import define, field, validators


@define(frozen=True, slots=True)
class Credit:
    """One contributor's raw attribution as received from the catalog.

    ``categories`` holds one category or several joined by ", ".
    """

    name: str = field(validator=validators.instance_of(str))
    categories: str = field(validator=validators.instance_of(str))
    effective_roles: str = field(default="Default", validator=validators.instance_of(str))


@define(frozen=True, slots=True)
class RoleBucket:
    """Contributor names sharing one display role label."""

    role: str
    names: tuple[str, ...] = field(converter=tuple, factory=tuple)


@define(frozen=True, slots=True)
class CreditClassification:
    """Result of classifying a song's credits.

    Attributes:
        buckets: Labeled role buckets in first-creation order, vocalists excluded
        vocalists: Deduplicated vocalist names in first-seen order
        producers: Names credited under a Producer category, in credit order
    """

    buckets: tuple[RoleBucket, ...] = field(converter=tuple, factory=tuple)
    vocalists: tuple[str, ...] = field(converter=tuple, factory=tuple)
    producers: tuple[str, ...] = field(converter=tuple, factory=tuple)
