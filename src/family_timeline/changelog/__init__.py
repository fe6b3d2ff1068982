"""Change-log reconstruction from audit snapshots."""
from .decoding import EntityType, decode_snapshot, resolve_entity_type
from .differ import ChangeDiffer, NameResolver, describe, describe_entry
from .feed import FeedItem, build_feed, format_relative_time
from .formatters import humanize_key, render_value
from .summary import MAJOR_EVENTS, NO_DETAIL_SUMMARY, summarize

__all__ = [
    "ChangeDiffer",
    "NameResolver",
    "describe",
    "describe_entry",
    "EntityType",
    "decode_snapshot",
    "resolve_entity_type",
    "FeedItem",
    "build_feed",
    "format_relative_time",
    "humanize_key",
    "render_value",
    "MAJOR_EVENTS",
    "NO_DETAIL_SUMMARY",
    "summarize",
]
