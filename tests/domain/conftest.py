"""Domain layer test fixtures - pure entities with no dependencies."""

import pytest

from vocaworks.domain.entities.credit import Credit
from vocaworks.domain.entities.media import MediaEntry
from vocaworks.domain.lookups import LookupTables


@pytest.fixture
def tables():
    """Default lookup tables."""
    return LookupTables()


@pytest.fixture
def credits():
    """A typical credit list for one song."""
    return [
        Credit(name="DECO*27", categories="Producer", effective_roles="Default"),
        Credit(name="Hatsune Miku", categories="Vocalist"),
        Credit(name="Rockwell", categories="Producer", effective_roles="Arranger"),
        Credit(name="OTOIRO", categories="Illustrator"),
        Credit(name="Hatsune Miku", categories="Vocalist"),
    ]


@pytest.fixture
def media_entry():
    """Factory for media entries with sensible defaults."""

    def _make(
        service: str = "Youtube",
        author: str = "Uploader",
        pv_type: str = "Original",
        thumb_url: str | None = None,
    ) -> MediaEntry:
        return MediaEntry(
            service=service,
            author=author,
            pv_type=pv_type,
            thumb_url=thumb_url if thumb_url is not None else f"thumb://{service}/{author}",
        )

    return _make
