"""Tests for marriage, divorce, birth and achievement date checks."""

from datetime import date

from family_timeline.models.validation import FieldKey
from family_timeline.validation import (
    validate_achievement,
    validate_birth,
    validate_divorce,
    validate_marriage,
)


class TestMarriage:
    def test_after_both_birthdays(self):
        result = validate_marriage(date(2015, 5, 1), date(1990, 1, 1), date(1992, 2, 2))
        assert result.is_valid

    def test_before_first_birthday(self):
        result = validate_marriage("2015-05-01", "2016-01-01", "1990-01-01")
        assert result.messages_for(FieldKey.MARRIAGE_DATE) == [
            "Marriage date must be after first member's birthday"
        ]

    def test_on_second_birthday(self):
        result = validate_marriage("2015-05-01", "1990-01-01", "2015-05-01")
        assert result.messages_for(FieldKey.MARRIAGE_DATE) == [
            "Marriage date must be after second member's birthday"
        ]

    def test_missing_date(self):
        result = validate_marriage(None, "1990-01-01")
        assert result.messages_for(FieldKey.MARRIAGE_DATE) == ["Marriage date is required"]

    def test_unknown_birthdays_are_skipped(self):
        assert validate_marriage("2015-05-01").is_valid


class TestDivorce:
    def test_after_marriage(self):
        assert validate_divorce("2010-01-01", "2012-06-30").is_valid

    def test_on_marriage_date_fails(self):
        result = validate_divorce("2010-01-01", "2010-01-01")
        assert result.messages_for(FieldKey.DIVORCE_DATE) == [
            "Divorce date must be after the marriage date"
        ]

    def test_already_divorced(self):
        result = validate_divorce("2010-01-01", "2012-06-30", already_divorced=True)
        assert result.messages_for(FieldKey.DIVORCE_DATE) == ["This couple is already divorced"]

    def test_malformed_divorce_date(self):
        result = validate_divorce("2010-01-01", "later")
        assert result.messages_for(FieldKey.DIVORCE_DATE) == ["Divorce date is not a valid date"]


class TestBirth:
    def test_after_parent(self):
        assert validate_birth("6/9/1960", "9 JUN 1932").is_valid

    def test_before_parent(self):
        result = validate_birth("1930-01-01", "1932-06-09")
        assert result.messages_for(FieldKey.BIRTH_DATE) == [
            "Birth date must be after parent's birthday"
        ]


class TestAchievement:
    def test_after_birth(self):
        assert validate_achievement("2001-09-01", "1990-06-15").is_valid

    def test_on_birth_date_fails(self):
        result = validate_achievement("1990-06-15", "1990-06-15")
        assert result.messages_for(FieldKey.ACHIEVEMENT_DATE) == [
            "Achievement date must be after the birth date"
        ]

    def test_required(self):
        result = validate_achievement("", "1990-06-15")
        assert result.messages_for(FieldKey.ACHIEVEMENT_DATE) == ["Achievement date is required"]

    def test_documented(self):
        assert validate_achievement.__doc__
