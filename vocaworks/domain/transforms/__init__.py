"""Pure transformations from raw catalog songs to display-ready songs."""

from .credits import classify_credits, group_by_role, resolve_role_string
from .display import render_collection, to_display_item
from .media import is_valid_pv, select_media
from .songs import aggregate_song, sort_by_publish_date

__all__ = [
    "aggregate_song",
    "classify_credits",
    "group_by_role",
    "is_valid_pv",
    "render_collection",
    "resolve_role_string",
    "select_media",
    "sort_by_publish_date",
    "to_display_item",
]
