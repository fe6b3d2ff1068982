"""Pydantic data models."""

from .changelog import (
    AuditEntry,
    ChangeAction,
    ChangeDescription,
    ChangeDetail,
    ChangeKind,
    ChangeStatus,
)
from .snapshots import (
    AchievementSnapshot,
    BurialPlaceSnapshot,
    FamilyMemberSnapshot,
    OccupationSnapshot,
    PassingRecordSnapshot,
    SnapshotModel,
    SpouseRelationshipSnapshot,
)
from .timeline import (
    BurialPlace,
    Interval,
    PassingDraft,
    PersonDraft,
    PersonRef,
    RelationshipClaim,
    RelationshipKind,
    SpouseExclusivityContext,
    SpouseRecord,
)
from .validation import FieldKey, ValidationIssue, ValidationResult

__all__ = [
    "AuditEntry",
    "ChangeAction",
    "ChangeDescription",
    "ChangeDetail",
    "ChangeKind",
    "ChangeStatus",
    "SnapshotModel",
    "FamilyMemberSnapshot",
    "AchievementSnapshot",
    "SpouseRelationshipSnapshot",
    "OccupationSnapshot",
    "BurialPlaceSnapshot",
    "PassingRecordSnapshot",
    "BurialPlace",
    "Interval",
    "PassingDraft",
    "PersonDraft",
    "PersonRef",
    "RelationshipClaim",
    "RelationshipKind",
    "SpouseExclusivityContext",
    "SpouseRecord",
    "FieldKey",
    "ValidationIssue",
    "ValidationResult",
]
