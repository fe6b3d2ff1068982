"""Reconstruct field-level changes from audit snapshots.

The audit log stores an opaque before/after snapshot per change. The
differ reads them back through the entity's typed schema and reports what
was added, updated or removed, along with the sentence a change feed
shows for the entry.

Relationship snapshots only carry member ids. ``describe`` resolves those
through an injected lookup before handing off to the synchronous core,
``describe_entry``, which takes the resolved names as a plain mapping.
"""
from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from ..config import CONFIG, TimelineConfig
from ..exceptions import SnapshotDecodeError
from ..models.changelog import AuditEntry, ChangeAction, ChangeDescription, ChangeDetail
from ..models.snapshots import SpouseRelationshipSnapshot
from ..models.timeline import PersonRef
from .decoding import EntityType, decode_lenient, decode_snapshot, resolve_entity_type
from .formatters import (
    ENTITY_RULES,
    EntityRules,
    diff_fields,
    generic_diff,
    generic_listing,
    rows_to_added,
    rows_to_removed,
)
from .summary import MAJOR_EVENTS, NO_DETAIL_SUMMARY, summarize

logger = structlog.get_logger(__name__)

NameResolver = Callable[[PersonRef], "str | None | Awaitable[str | None]"]


class ChangeDiffer:
    """Describes audit entries as field-level changes.

    Never raises for a well-formed ``AuditEntry``: missing or unreadable
    snapshots produce an empty description and a neutral summary.
    """

    def __init__(self, config: TimelineConfig | None = None):
        self._config = config or CONFIG

    @property
    def date_style(self) -> str:
        return self._config.date_display_style

    def describe_entry(
        self,
        entry: AuditEntry,
        names: Mapping[Any, str] | None = None,
    ) -> ChangeDescription:
        """Describe an audit entry with member names already resolved.

        Args:
            entry: Persisted audit entry
            names: Member id to display name, for relationship entries

        Returns:
            ChangeDescription with the ordered changes and feed summary
        """
        names = names or {}
        entity = resolve_entity_type(entry.entity_type)

        try:
            old_data, new_data = self._required_snapshots(entry)
        except SnapshotDecodeError as e:
            logger.warning(
                "snapshot_degraded",
                entity_type=entry.entity_type,
                entity_id=entry.entity_id,
                action=entry.action.value,
                reason=str(e),
            )
            summary = NO_DETAIL_SUMMARY if entity in MAJOR_EVENTS else None
            return ChangeDescription(changes=[], summary=summary)

        rules = ENTITY_RULES.get(entity) if entity is not None else None
        changes = None
        if rules is not None:
            changes = self._typed_changes(entry, rules, old_data, new_data, names)
        if changes is None:
            changes = self._generic_changes(entry.action, old_data, new_data)

        return ChangeDescription(
            changes=changes,
            summary=summarize(entity, entry.action, new_data, old_data),
        )

    async def describe(
        self,
        entry: AuditEntry,
        resolve_name: NameResolver | None = None,
    ) -> ChangeDescription:
        """Describe an audit entry, resolving member names as needed.

        Args:
            entry: Persisted audit entry
            resolve_name: Lookup from member id to display name; may be
                sync or async. Failures and timeouts fall back to a
                ``Member #<id>`` label.

        Returns:
            ChangeDescription with the ordered changes and feed summary
        """
        refs = self.referenced_members(entry)
        names: dict[Any, str] = {}
        if refs and resolve_name is not None:
            resolved = await asyncio.gather(
                *(self._resolve(resolve_name, ref) for ref in refs)
            )
            names = {ref: name for ref, name in zip(refs, resolved) if name}
        return self.describe_entry(entry, names)

    def referenced_members(self, entry: AuditEntry) -> list[PersonRef]:
        """Member ids the entry's rendering needs names for."""
        if resolve_entity_type(entry.entity_type) != EntityType.RELATIONSHIP:
            return []
        data = decode_lenient(entry.new_snapshot) or decode_lenient(entry.old_snapshot)
        if data is None:
            return []
        try:
            snapshot = SpouseRelationshipSnapshot.model_validate(data)
        except ValidationError:
            return []
        refs = []
        for ref in (snapshot.family_member1_id, snapshot.family_member2_id):
            if ref is not None and ref not in refs:
                refs.append(ref)
        return refs

    def summarize_entry(self, entry: AuditEntry) -> str | None:
        """Feed sentence for an entry, reading the snapshot leniently."""
        entity = resolve_entity_type(entry.entity_type)
        return summarize(
            entity,
            entry.action,
            decode_lenient(entry.new_snapshot),
            decode_lenient(entry.old_snapshot),
        )

    async def _resolve(self, resolve_name: NameResolver, ref: PersonRef) -> str | None:
        try:
            result = resolve_name(ref)
            if inspect.isawaitable(result):
                result = await asyncio.wait_for(
                    result, timeout=self._config.name_resolution_timeout
                )
        except TimeoutError:
            logger.warning("name_resolution_failed", member_id=ref, reason="timeout")
            return None
        except Exception as e:
            logger.warning("name_resolution_failed", member_id=ref, reason=str(e))
            return None
        if isinstance(result, str) and result.strip():
            return result
        return None

    def _required_snapshots(
        self, entry: AuditEntry
    ) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
        """Decode the snapshots the action needs.

        Raises:
            SnapshotDecodeError: If a needed snapshot is missing or unreadable
        """
        needs_old = entry.action in (ChangeAction.UPDATE, ChangeAction.DELETE)
        needs_new = entry.action in (ChangeAction.CREATE, ChangeAction.UPDATE)

        old_data = decode_snapshot(entry.old_snapshot) if needs_old else None
        new_data = decode_snapshot(entry.new_snapshot) if needs_new else None

        if needs_old and old_data is None:
            raise SnapshotDecodeError("Missing previous snapshot")
        if needs_new and new_data is None:
            raise SnapshotDecodeError("Missing new snapshot")
        return old_data, new_data

    def _typed_changes(
        self,
        entry: AuditEntry,
        rules: EntityRules,
        old_data: dict[str, Any] | None,
        new_data: dict[str, Any] | None,
        names: Mapping[Any, str],
    ) -> list[ChangeDetail] | None:
        """Changes via the entity's schema; None if a snapshot does not fit it."""
        try:
            old = rules.snapshot_model.model_validate(old_data) if old_data is not None else None
            new = rules.snapshot_model.model_validate(new_data) if new_data is not None else None
        except ValidationError as e:
            logger.warning(
                "snapshot_schema_mismatch",
                entity_type=entry.entity_type,
                entity_id=entry.entity_id,
                errors=e.error_count(),
            )
            return None

        if entry.action == ChangeAction.CREATE:
            return rows_to_added(rules.listing(new, names), self.date_style)
        if entry.action == ChangeAction.DELETE:
            return rows_to_removed(rules.listing(old, names), self.date_style)
        if not rules.has_update_path:
            return []
        return diff_fields(old, new, rules.update_fields, self.date_style)

    def _generic_changes(
        self,
        action: ChangeAction,
        old_data: dict[str, Any] | None,
        new_data: dict[str, Any] | None,
    ) -> list[ChangeDetail]:
        if action == ChangeAction.CREATE:
            return rows_to_added(generic_listing(new_data or {}), self.date_style)
        if action == ChangeAction.DELETE:
            return rows_to_removed(generic_listing(old_data or {}), self.date_style)
        return generic_diff(old_data or {}, new_data or {}, self.date_style)


def describe_entry(
    entry: AuditEntry,
    names: Mapping[Any, str] | None = None,
    config: TimelineConfig | None = None,
) -> ChangeDescription:
    """Describe an audit entry with already-resolved member names."""
    return ChangeDiffer(config).describe_entry(entry, names)


async def describe(
    entry: AuditEntry,
    resolve_name: NameResolver | None = None,
    config: TimelineConfig | None = None,
) -> ChangeDescription:
    """Describe an audit entry, resolving member names through ``resolve_name``."""
    return await ChangeDiffer(config).describe(entry, resolve_name)
