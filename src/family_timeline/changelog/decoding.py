"""Entity-type lookup and snapshot decoding for audit entries."""
from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

from ..exceptions import SnapshotDecodeError


class EntityType(str, Enum):
    """Entity types with dedicated change rendering."""

    PERSON = "FamilyMember"
    ACHIEVEMENT = "Achievement"
    RELATIONSHIP = "SpouseRelationship"
    OCCUPATION = "Occupation"
    PASSING_RECORD = "PassingRecord"


ENTITY_ALIASES = {
    "familymember": EntityType.PERSON,
    "person": EntityType.PERSON,
    "member": EntityType.PERSON,
    "achievement": EntityType.ACHIEVEMENT,
    "spouserelationship": EntityType.RELATIONSHIP,
    "relationship": EntityType.RELATIONSHIP,
    "marriage": EntityType.RELATIONSHIP,
    "occupation": EntityType.OCCUPATION,
    "passingrecord": EntityType.PASSING_RECORD,
    "passing": EntityType.PASSING_RECORD,
}


def resolve_entity_type(name: str) -> EntityType | None:
    """Map a stored entity type name to a known type, None if unrecognised."""
    key = name.replace("_", "").replace(" ", "").lower()
    return ENTITY_ALIASES.get(key)


def decode_snapshot(raw: Any) -> dict[str, Any] | None:
    """Read a stored snapshot as a string-keyed record.

    Args:
        raw: JSON text, a mapping, or None

    Returns:
        The decoded record, or None when nothing was stored

    Raises:
        SnapshotDecodeError: If the value is not a JSON object
    """
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        return {str(key): value for key, value in raw.items()}
    if isinstance(raw, bytes | bytearray):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SnapshotDecodeError("Snapshot is not valid UTF-8") from e
    if not isinstance(raw, str):
        raise SnapshotDecodeError(f"Unsupported snapshot type: {type(raw).__name__}")
    if not raw.strip():
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SnapshotDecodeError(f"Snapshot is not valid JSON: {e.msg}", raw=raw) from e

    if data is None:
        return None
    if not isinstance(data, dict):
        raise SnapshotDecodeError(
            f"Snapshot is a JSON {type(data).__name__}, expected an object", raw=raw
        )
    return data


def decode_lenient(raw: Any) -> dict[str, Any] | None:
    """Decode a snapshot, treating undecodable input as absent."""
    try:
        return decode_snapshot(raw)
    except SnapshotDecodeError:
        return None
