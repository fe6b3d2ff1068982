"""Change feed: the major events of a family tree, newest first."""
from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict

from ..config import CONFIG, TimelineConfig
from ..models.changelog import AuditEntry, ChangeAction
from ..utils.dates import format_display_date
from .differ import ChangeDiffer

ACTION_SYMBOLS = {
    ChangeAction.CREATE: "+",
    ChangeAction.UPDATE: "✎",
    ChangeAction.DELETE: "×",
}


class FeedItem(BaseModel):
    """One line of a change feed."""

    model_config = ConfigDict(frozen=True)

    entry: AuditEntry
    summary: str
    symbol: str
    actor: str
    when: str


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_relative_time(
    timestamp: datetime | None,
    now: datetime | None = None,
    date_style: str = "us",
) -> str:
    """Describe how long ago something happened.

    Within a week the answer is relative ("3 hours ago"); older entries
    show their date. Naive timestamps are taken as UTC.
    """
    if timestamp is None:
        return ""
    now = _as_utc(now or datetime.now(UTC))
    timestamp = _as_utc(timestamp)

    minutes = int((now - timestamp).total_seconds() // 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return _plural(minutes, "minute")
    hours = minutes // 60
    if hours < 24:
        return _plural(hours, "hour")
    days = hours // 24
    if days < 7:
        return _plural(days, "day")
    return format_display_date(timestamp.date(), date_style) or ""


def build_feed(
    entries: Iterable[AuditEntry],
    now: datetime | None = None,
    config: TimelineConfig | None = None,
) -> list[FeedItem]:
    """Build the feed for a family tree's audit log.

    Args:
        entries: Audit entries in any order
        now: Reference time for relative timestamps
        config: Display configuration

    Returns:
        Feed items for major events only, newest first
    """
    config = config or CONFIG
    differ = ChangeDiffer(config)
    now = now or datetime.now(UTC)

    items = []
    for entry in entries:
        summary = differ.summarize_entry(entry)
        if summary is None:
            continue
        items.append(
            FeedItem(
                entry=entry,
                summary=summary,
                symbol=ACTION_SYMBOLS[entry.action],
                actor="System" if entry.user_id in (None, "") else "User",
                when=format_relative_time(entry.timestamp, now, config.date_display_style),
            )
        )

    oldest = datetime.min.replace(tzinfo=UTC)
    items.sort(
        key=lambda item: _as_utc(item.entry.timestamp) if item.entry.timestamp else oldest,
        reverse=True,
    )
    return items
