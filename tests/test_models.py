"""Tests for the data models."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from family_timeline.changelog import EntityType, decode_snapshot, resolve_entity_type
from family_timeline.exceptions import SnapshotDecodeError
from family_timeline.models import (
    AuditEntry,
    ChangeAction,
    ChangeDetail,
    ChangeStatus,
    FieldKey,
    Interval,
    PassingRecordSnapshot,
    SpouseRecord,
    ValidationIssue,
    ValidationResult,
)


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_empty_is_valid(self):
        assert ValidationResult().is_valid

    def test_fields_in_reporting_order(self):
        result = ValidationResult(
            issues=[
                ValidationIssue(field=FieldKey.OCCUPATIONS, message="a"),
                ValidationIssue(field=FieldKey.BIRTH_DATE, message="b"),
                ValidationIssue(field=FieldKey.OCCUPATIONS, message="c"),
            ]
        )
        assert not result.is_valid
        assert result.fields() == [FieldKey.OCCUPATIONS, FieldKey.BIRTH_DATE]
        assert result.messages_for(FieldKey.OCCUPATIONS) == ["a", "c"]

    def test_merge(self):
        first = ValidationResult(issues=[ValidationIssue(field=FieldKey.CAUSES, message="a")])
        second = ValidationResult(issues=[ValidationIssue(field=FieldKey.CAUSES, message="b")])
        assert first.merge(second).messages_for(FieldKey.CAUSES) == ["a", "b"]

    def test_serializes_validity(self):
        data = ValidationResult().model_dump()
        assert data["is_valid"] is True


class TestTimelineModels:
    def test_interval_keeps_raw_text(self):
        interval = Interval(location="Hue", start_date="not a date")
        assert interval.start_date == "not a date"

    def test_interval_is_frozen(self):
        interval = Interval(location="Hue", start_date=date(2000, 1, 1))
        with pytest.raises(ValidationError):
            interval.location = "Hanoi"

    @pytest.mark.parametrize("divorce,active", [(None, True), ("  ", True), ("2012-01-01", False)])
    def test_spouse_record_active(self, divorce, active):
        record = SpouseRecord(relationship_id=1, partner_ids=(1, 2), divorce_date=divorce)
        assert record.is_active is active


class TestAuditEntry:
    """Tests for AuditEntry."""

    def test_exported_field_names(self):
        entry = AuditEntry.model_validate(
            {
                "entityType": "Achievement",
                "action": "create",
                "oldValues": None,
                "newValues": '{"title": "MSc"}',
                "createdAt": "2025-05-15T10:30:00Z",
                "userId": 7,
            }
        )
        assert entry.action == ChangeAction.CREATE
        assert entry.new_snapshot == '{"title": "MSc"}'
        assert isinstance(entry.timestamp, datetime)
        assert entry.user_id == 7

    def test_unknown_action_rejected(self):
        with pytest.raises(ValidationError):
            AuditEntry(entity_type="Achievement", action="ARCHIVE")


class TestChangeDetail:
    @pytest.mark.parametrize(
        "old,new,status",
        [
            (None, "x", ChangeStatus.ADDED),
            ("x", None, ChangeStatus.REMOVED),
            ("x", "y", ChangeStatus.UPDATED),
            (None, None, None),
        ],
    )
    def test_status(self, old, new, status):
        assert ChangeDetail(field="Title", old_value=old, new_value=new).status == status


class TestSnapshots:
    def test_passing_record_alternate_keys(self):
        snapshot = PassingRecordSnapshot.model_validate(
            {
                "passingDate": "2020-03-01",
                "causeOfDeath": "Stroke",
                "buriedPlaces": [{"location": "Hue"}],
            }
        )
        assert snapshot.passed_on == "2020-03-01"
        assert snapshot.cause_list == ["Stroke"]
        assert snapshot.burials[0].location == "Hue"


class TestDecoding:
    """Tests for snapshot decoding and entity lookup."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("FamilyMember", EntityType.PERSON),
            ("family_member", EntityType.PERSON),
            ("Spouse Relationship", EntityType.RELATIONSHIP),
            ("PASSINGRECORD", EntityType.PASSING_RECORD),
            ("Note", None),
        ],
    )
    def test_resolve_entity_type(self, name, expected):
        assert resolve_entity_type(name) == expected

    def test_decode_variants(self):
        assert decode_snapshot(None) is None
        assert decode_snapshot("  ") is None
        assert decode_snapshot("null") is None
        assert decode_snapshot('{"a": 1}') == {"a": 1}
        assert decode_snapshot(b'{"a": 1}') == {"a": 1}
        assert decode_snapshot({"a": 1}) == {"a": 1}

    @pytest.mark.parametrize("raw", ["{broken", "[1, 2]", "42", 42])
    def test_decode_rejects_non_objects(self, raw):
        with pytest.raises(SnapshotDecodeError):
            decode_snapshot(raw)
