"""Per-entity rules for turning snapshots into change rows.

Each known entity type has a *listing*, the rows shown when the entity is
created (and, mirrored onto the old side, when it is deleted), and a fixed
list of fields compared on update. An entity with no update fields has no
update rendering.
"""
from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from ..models.changelog import ChangeDetail, ChangeKind
from ..models.snapshots import (
    AchievementSnapshot,
    FamilyMemberSnapshot,
    OccupationSnapshot,
    PassingRecordSnapshot,
    SnapshotModel,
    SpouseRelationshipSnapshot,
)
from ..models.timeline import PersonRef
from ..utils.dates import format_display_date
from .decoding import EntityType

UNKNOWN_MEMBER = "Unknown Member"


@dataclass(frozen=True)
class FieldSpec:
    attr: str
    label: str
    kind: ChangeKind = ChangeKind.TEXT


@dataclass(frozen=True)
class Row:
    label: str
    value: Any
    kind: ChangeKind = ChangeKind.TEXT


Names = Mapping[Any, str]
Listing = Callable[[Any, Names], list[Row]]


def is_populated(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str | list | tuple | dict):
        return len(value) > 0
    return True


def render_value(value: Any, kind: ChangeKind, date_style: str = "us") -> str | None:
    """Render a raw snapshot value as display text."""
    if value is None:
        return None
    if kind == ChangeKind.DATE:
        return format_display_date(value, date_style)
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, list | tuple):
        return ", ".join(
            text for item in value if (text := render_value(item, kind, date_style)) is not None
        )
    if isinstance(value, SnapshotModel):
        value = value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def humanize_key(key: str) -> str:
    """Turn a snapshot key into a field label.

    ``familyMemberName`` becomes ``Family Member Name``; snake_case keys
    are split on underscores.
    """
    if "_" in key:
        return " ".join(part[:1].upper() + part[1:] for part in key.split("_") if part)
    return key[:1].upper() + re.sub(r"([A-Z])", r" \1", key[1:])


def member_label(ref: PersonRef | None, names: Names) -> str:
    """Display name for a member id, falling back to ``Member #<id>``."""
    if ref is None:
        return UNKNOWN_MEMBER
    name = names.get(ref) or names.get(str(ref))
    if name and name.strip():
        return name
    return f"Member #{ref}"


def _same(before: Any, after: Any) -> bool:
    """Strict equality: 1, 1.0 and True are different stored values."""
    return type(before) is type(after) and before == after


def _populated(rows: list[Row]) -> list[Row]:
    return [row for row in rows if is_populated(row.value)]


def _spec_rows(snapshot: SnapshotModel, specs: tuple[FieldSpec, ...]) -> list[Row]:
    return _populated(
        [Row(spec.label, getattr(snapshot, spec.attr), spec.kind) for spec in specs]
    )


PERSON_FIELDS = (
    FieldSpec("full_name", "Name"),
    FieldSpec("birthday", "Birthday", ChangeKind.DATE),
    FieldSpec("gender", "Gender"),
    FieldSpec("address", "Address"),
    FieldSpec("generation", "Generation"),
    FieldSpec("is_adopted", "Adopted", ChangeKind.BOOLEAN),
)
PERSON_UPDATE_FIELDS = (*PERSON_FIELDS, FieldSpec("profile_picture", "Profile Picture"))

ACHIEVEMENT_FIELDS = (
    FieldSpec("title", "Title"),
    FieldSpec("achieve_date", "Achievement Date", ChangeKind.DATE),
    FieldSpec("description", "Description"),
)

OCCUPATION_FIELDS = (
    FieldSpec("display_title", "Job Title"),
    FieldSpec("start_date", "Start Date", ChangeKind.DATE),
    FieldSpec("end_date", "End Date", ChangeKind.DATE),
)


def list_person(snapshot: FamilyMemberSnapshot, names: Names) -> list[Row]:
    return _spec_rows(snapshot, PERSON_FIELDS)


def list_achievement(snapshot: AchievementSnapshot, names: Names) -> list[Row]:
    member = Row("Family Member", snapshot.family_member_name or UNKNOWN_MEMBER)
    return [member, *_spec_rows(snapshot, ACHIEVEMENT_FIELDS)]


def list_relationship(snapshot: SpouseRelationshipSnapshot, names: Names) -> list[Row]:
    rows = [
        Row("Partner 1", member_label(snapshot.family_member1_id, names)),
        Row("Partner 2", member_label(snapshot.family_member2_id, names)),
    ]
    if is_populated(snapshot.established):
        rows.append(Row("Marriage Date", snapshot.established, ChangeKind.DATE))
    return rows


def list_occupation(snapshot: OccupationSnapshot, names: Names) -> list[Row]:
    return _spec_rows(snapshot, OCCUPATION_FIELDS)


def list_passing_record(snapshot: PassingRecordSnapshot, names: Names) -> list[Row]:
    rows = [
        Row("Family Member", snapshot.family_member_name or UNKNOWN_MEMBER),
        Row("Date of Passing", snapshot.passed_on, ChangeKind.DATE),
        Row("Causes of Death", [cause for cause in snapshot.cause_list if cause.strip()]),
    ]
    for number, place in enumerate(snapshot.burials, start=1):
        rows.append(Row(f"Burial Place {number} – Location", place.location))
        rows.append(Row(f"Burial Place {number} – Start Date", place.start_date, ChangeKind.DATE))
    return [rows[0], *_populated(rows[1:])]


@dataclass(frozen=True)
class EntityRules:
    snapshot_model: type[SnapshotModel]
    listing: Listing
    update_fields: tuple[FieldSpec, ...] = ()

    @property
    def has_update_path(self) -> bool:
        return bool(self.update_fields)


ENTITY_RULES: dict[EntityType, EntityRules] = {
    EntityType.PERSON: EntityRules(FamilyMemberSnapshot, list_person, PERSON_UPDATE_FIELDS),
    EntityType.ACHIEVEMENT: EntityRules(AchievementSnapshot, list_achievement, ACHIEVEMENT_FIELDS),
    # Spouse relationships are append-only; a divorce is a delete
    EntityType.RELATIONSHIP: EntityRules(SpouseRelationshipSnapshot, list_relationship),
    EntityType.OCCUPATION: EntityRules(OccupationSnapshot, list_occupation, OCCUPATION_FIELDS),
    EntityType.PASSING_RECORD: EntityRules(PassingRecordSnapshot, list_passing_record),
}


def rows_to_added(rows: list[Row], date_style: str) -> list[ChangeDetail]:
    return [
        ChangeDetail(
            field=row.label,
            new_value=render_value(row.value, row.kind, date_style),
            kind=row.kind,
        )
        for row in rows
    ]


def rows_to_removed(rows: list[Row], date_style: str) -> list[ChangeDetail]:
    return [
        ChangeDetail(
            field=row.label,
            old_value=render_value(row.value, row.kind, date_style),
            kind=row.kind,
        )
        for row in rows
    ]


def diff_fields(
    old: SnapshotModel,
    new: SnapshotModel,
    specs: tuple[FieldSpec, ...],
    date_style: str,
) -> list[ChangeDetail]:
    """Compare a fixed field list; only fields whose stored values differ."""
    changes = []
    for spec in specs:
        before, after = getattr(old, spec.attr), getattr(new, spec.attr)
        if _same(before, after):
            continue
        changes.append(
            ChangeDetail(
                field=spec.label,
                old_value=render_value(before, spec.kind, date_style),
                new_value=render_value(after, spec.kind, date_style),
                kind=spec.kind,
            )
        )
    return changes


def generic_listing(data: Mapping[str, Any]) -> list[Row]:
    return [Row(humanize_key(key), value) for key, value in data.items()]


def generic_diff(
    old: Mapping[str, Any], new: Mapping[str, Any], date_style: str
) -> list[ChangeDetail]:
    """Compare every key present on either side."""
    keys = list(old)
    keys.extend(key for key in new if key not in old)
    changes = []
    for key in keys:
        before, after = old.get(key), new.get(key)
        if _same(before, after):
            continue
        changes.append(
            ChangeDetail(
                field=humanize_key(key),
                old_value=render_value(before, ChangeKind.TEXT, date_style),
                new_value=render_value(after, ChangeKind.TEXT, date_style),
            )
        )
    return changes
