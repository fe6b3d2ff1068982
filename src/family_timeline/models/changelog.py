"""Audit log entries and the change descriptions derived from them."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator


class ChangeAction(str, Enum):
    """Action recorded by the audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ChangeKind(str, Enum):
    """How a changed value should be rendered."""

    TEXT = "text"
    DATE = "date"
    BOOLEAN = "boolean"


class ChangeStatus(str, Enum):
    ADDED = "Added"
    UPDATED = "Updated"
    REMOVED = "Removed"


class AuditEntry(BaseModel):
    """A persisted change-log record, handed over read-only.

    Snapshots are whatever the log stored: JSON text, an already decoded
    mapping, or nothing at all. Records exported straight from the log
    (``entityType``, ``oldValues``, ``newValues``, ``createdAt``) are
    accepted as they are.
    """

    model_config = ConfigDict(frozen=True)

    entity_type: str = Field(validation_alias=AliasChoices("entity_type", "entityType"))
    action: ChangeAction
    old_snapshot: Any = Field(
        default=None, validation_alias=AliasChoices("old_snapshot", "oldSnapshot", "oldValues")
    )
    new_snapshot: Any = Field(
        default=None, validation_alias=AliasChoices("new_snapshot", "newSnapshot", "newValues")
    )
    timestamp: datetime | None = Field(
        default=None, validation_alias=AliasChoices("timestamp", "createdAt")
    )
    entity_id: int | str | None = Field(
        default=None, validation_alias=AliasChoices("entity_id", "entityId")
    )
    user_id: int | str | None = Field(
        default=None,
        validation_alias=AliasChoices("user_id", "userId"),
        description="Actor, None for system changes",
    )

    @field_validator("action", mode="before")
    @classmethod
    def _normalize_action(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class ChangeDetail(BaseModel):
    """One field-level difference between two snapshots."""

    model_config = ConfigDict(frozen=True)

    field: str
    old_value: str | None = None
    new_value: str | None = None
    kind: ChangeKind = ChangeKind.TEXT

    @computed_field
    @property
    def status(self) -> ChangeStatus | None:
        if self.old_value is None and self.new_value is not None:
            return ChangeStatus.ADDED
        if self.old_value is not None and self.new_value is None:
            return ChangeStatus.REMOVED
        if self.old_value is not None and self.new_value is not None:
            return ChangeStatus.UPDATED
        return None


class ChangeDescription(BaseModel):
    """Field-level changes plus the feed sentence for one audit entry.

    ``summary`` is None for minor entity types, which change feeds skip.
    """

    model_config = ConfigDict(frozen=True)

    changes: list[ChangeDetail] = Field(default_factory=list)
    summary: str | None = None
