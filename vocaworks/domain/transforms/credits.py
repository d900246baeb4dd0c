"""Credit classification into labeled role buckets.

Pure functions: no I/O, no shared state. Every call builds its own ordered
accumulator and returns immutable results.
"""

from collections.abc import Iterable, Mapping

from toolz import unique

from vocaworks.domain.entities.credit import Credit, CreditClassification, RoleBucket
from vocaworks.domain.errors import UnmappedRoleError
from vocaworks.domain.lookups import DEFAULT_TABLES, VOCALIST_ROLE, LookupTables

ROLE_SEPARATOR = ", "


def resolve_role_string(credit: Credit) -> str:
    """Pick the role string for a credit from its categories and effective roles."""
    if credit.categories == "Other":
        return credit.effective_roles
    if credit.categories == VOCALIST_ROLE:
        return VOCALIST_ROLE
    if "Producer" in credit.categories:
        if credit.effective_roles == "Default":
            return "Producer"
        return credit.effective_roles
    return credit.categories


def group_by_role(
    credits: Iterable[Credit],
) -> tuple[dict[str, list[str]], list[str]]:
    """Accumulate credit names per role token.

    Returns:
        Tuple of (role token -> names in insertion order, producer names)
    """
    groups: dict[str, list[str]] = {}
    producers: list[str] = []
    for credit in credits:
        if "Producer" in credit.categories:
            producers.append(credit.name)
        for role in resolve_role_string(credit).split(ROLE_SEPARATOR):
            groups.setdefault(role, []).append(credit.name)
    return groups, producers


def label_for(role: str, name: str, role_labels: Mapping[str, str]) -> str:
    try:
        return role_labels[role]
    except KeyError:
        raise UnmappedRoleError(role, name) from None


def classify_credits(
    credits: Iterable[Credit],
    tables: LookupTables = DEFAULT_TABLES,
) -> CreditClassification:
    """Normalize raw credits into labeled role buckets.

    The vocalist bucket is deduplicated (first occurrence wins) and returned
    separately instead of as a bucket.

    Args:
        credits: Raw credits in catalog order
        tables: Lookup tables providing the role label mapping

    Returns:
        CreditClassification with buckets, vocalists and producers

    Raises:
        UnmappedRoleError: If a role token has no display label
    """
    groups, producers = group_by_role(credits)

    buckets = [
        RoleBucket(role=label_for(role, names[0], tables.role_labels), names=names)
        for role, names in groups.items()
        if role != VOCALIST_ROLE
    ]
    vocalists = list(unique(groups.get(VOCALIST_ROLE, [])))

    return CreditClassification(
        buckets=buckets,
        vocalists=vocalists,
        producers=producers,
    )
