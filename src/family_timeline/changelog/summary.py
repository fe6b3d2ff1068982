"""Feed sentences for audit entries.

Only major events get a sentence; everything else is a minor change that
change feeds leave out.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models.changelog import ChangeAction
from .decoding import EntityType

NO_DETAIL_SUMMARY = "No detailed change data available."

MAJOR_EVENTS = frozenset(
    {
        EntityType.PERSON,
        EntityType.PASSING_RECORD,
        EntityType.ACHIEVEMENT,
        EntityType.RELATIONSHIP,
    }
)

SUMMARIES: dict[EntityType, dict[ChangeAction, str]] = {
    EntityType.PERSON: {
        ChangeAction.CREATE: "New family member added.",
        ChangeAction.UPDATE: "Family member information updated.",
        ChangeAction.DELETE: "Family member removed.",
    },
    EntityType.PASSING_RECORD: {
        ChangeAction.CREATE: "Passing record added.",
        ChangeAction.UPDATE: "Passing record updated.",
        ChangeAction.DELETE: "Passing record removed.",
    },
    EntityType.ACHIEVEMENT: {
        ChangeAction.CREATE: "Achievement recorded.",
        ChangeAction.UPDATE: "Achievement updated.",
        ChangeAction.DELETE: "Achievement removed.",
    },
    EntityType.RELATIONSHIP: {
        ChangeAction.CREATE: "Marriage recorded.",
        ChangeAction.UPDATE: "Marriage information updated.",
        ChangeAction.DELETE: "Divorce recorded.",
    },
}

BIRTH_SUMMARY = "Birth recorded."
DIVORCE_SUMMARY = "Divorce recorded."


def _populated(data: Mapping[str, Any] | None, key: str) -> bool:
    value = (data or {}).get(key)
    return value is not None and value != ""


def summarize(
    entity: EntityType | None,
    action: ChangeAction,
    new_data: Mapping[str, Any] | None = None,
    old_data: Mapping[str, Any] | None = None,
) -> str | None:
    """Feed sentence for an entity type and action.

    Args:
        entity: Resolved entity type, None when unrecognised
        action: Audit action
        new_data: Decoded new snapshot, used to tell a birth under a
            parent from a new root member
        old_data: Decoded old snapshot; a relationship update that sets
            the divorce date is a divorce

    Returns:
        The sentence, or None for minor events
    """
    if entity not in MAJOR_EVENTS:
        return None
    if entity == EntityType.PERSON and action == ChangeAction.CREATE:
        if _populated(new_data, "parentId"):
            return BIRTH_SUMMARY
    if entity == EntityType.RELATIONSHIP and action == ChangeAction.UPDATE:
        if _populated(new_data, "divorceDate") and not _populated(old_data, "divorceDate"):
            return DIVORCE_SUMMARY
    return SUMMARIES[entity][action]
