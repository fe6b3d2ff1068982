"""Tests for passing record validation."""

from datetime import date

import pytest

from family_timeline.models.timeline import BurialPlace, PassingDraft
from family_timeline.models.validation import FieldKey
from family_timeline.validation import validate_passing

PASSED = date(2020, 3, 1)


def _passing(**overrides) -> PassingDraft:
    data = {
        "date_of_passing": PASSED,
        "causes": ["Heart failure"],
        "burial_places": [BurialPlace(location="Hue Cemetery", start_date=date(2020, 3, 3))],
        "birth_date": date(1930, 5, 1),
    }
    data.update(overrides)
    return PassingDraft(**data)


class TestDateOfPassing:
    """Tests for the date of passing."""

    def test_valid_record(self):
        assert validate_passing(_passing()).is_valid

    def test_required(self):
        result = validate_passing(_passing(date_of_passing=None))
        assert result.messages_for(FieldKey.DATE_OF_PASSING) == ["Date of passing is required"]

    def test_malformed(self):
        result = validate_passing(_passing(date_of_passing="sometime in spring"))
        assert result.messages_for(FieldKey.DATE_OF_PASSING) == [
            "Date of passing is not a valid date"
        ]

    def test_on_birth_date_fails(self):
        result = validate_passing(_passing(birth_date=PASSED))
        assert result.messages_for(FieldKey.DATE_OF_PASSING) == [
            "Date of passing must be after the birth date"
        ]

    def test_unknown_birth_date_skips_ordering(self):
        assert validate_passing(_passing(birth_date=None)).is_valid


class TestCauses:
    """Tests for causes of passing."""

    def test_at_least_one_required(self):
        result = validate_passing(_passing(causes=[]))
        assert result.messages_for(FieldKey.CAUSES) == [
            "At least one cause of passing is required"
        ]

    def test_blank_entry_rejected(self):
        result = validate_passing(_passing(causes=["Stroke", "  "]))
        assert result.messages_for(FieldKey.CAUSES) == ["Causes of passing must not be blank"]


class TestBurialPlaces:
    """Tests for burial places."""

    def test_at_least_one_required(self):
        result = validate_passing(_passing(burial_places=[]))
        assert result.messages_for(FieldKey.BURIAL_PLACES) == [
            "At least one burial place is required"
        ]

    def test_start_date_required(self):
        result = validate_passing(_passing(burial_places=[BurialPlace(location="Hue")]))
        assert result.messages_for(FieldKey.BURIAL_PLACES) == [
            "Burial places must have start dates"
        ]

    def test_location_required_when_dated(self):
        places = [
            BurialPlace(location="Hue", start_date=date(2020, 3, 3)),
            BurialPlace(location="", start_date=date(2021, 1, 1)),
        ]
        result = validate_passing(_passing(burial_places=places))
        assert result.messages_for(FieldKey.BURIAL_PLACES) == [
            "Burial places must have a location"
        ]

    def test_malformed_start_date(self):
        places = [BurialPlace(location="Hue", start_date="13/45/2020")]
        result = validate_passing(_passing(burial_places=places))
        assert result.messages_for(FieldKey.BURIAL_PLACES) == ["Burial place has an invalid date"]

    def test_burial_on_day_of_passing_passes(self):
        """Burial on the day of passing is allowed."""
        places = [BurialPlace(location="Hue", start_date=PASSED)]
        assert validate_passing(_passing(burial_places=places)).is_valid

    @pytest.mark.parametrize("start", [date(2020, 2, 29), date(2019, 1, 1)])
    def test_burial_before_passing_fails(self, start):
        places = [BurialPlace(location="Hue", start_date=start)]
        result = validate_passing(_passing(burial_places=places))
        assert result.messages_for(FieldKey.BURIAL_PLACES) == [
            "Date of passing must be on or before the burial start date"
        ]

    def test_reburial_checked_too(self):
        places = [
            BurialPlace(location="Hue", start_date=date(2020, 3, 3)),
            BurialPlace(location="Family plot", start_date=date(2019, 12, 1)),
        ]
        result = validate_passing(_passing(burial_places=places))
        assert not result.is_valid

    def test_each_field_reports_once(self):
        result = validate_passing(PassingDraft())
        assert result.fields() == [
            FieldKey.DATE_OF_PASSING,
            FieldKey.CAUSES,
            FieldKey.BURIAL_PLACES,
        ]
        assert len(result.issues) == 3
