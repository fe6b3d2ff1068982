"""Passing record validation.

Burial may take place on the day of passing, so the burial check is
inclusive where the residence and occupation checks are strict.
"""
from __future__ import annotations

from datetime import date

from ..config import BURIAL_AFTER_PASSING_INCLUSIVE
from ..models.timeline import PassingDraft
from ..models.validation import FieldKey, ValidationIssue, ValidationResult
from ..utils.dates import is_blank, parse_date, try_parse_date


def _issue(field: FieldKey, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, message=message)


def _check_date_of_passing(passing: PassingDraft) -> tuple[date | None, ValidationIssue | None]:
    try:
        passed = parse_date(passing.date_of_passing)
    except ValueError:
        return None, _issue(FieldKey.DATE_OF_PASSING, "Date of passing is not a valid date")
    if passed is None:
        return None, _issue(FieldKey.DATE_OF_PASSING, "Date of passing is required")

    birth = try_parse_date(passing.birth_date)
    if birth is not None and passed <= birth:
        return passed, _issue(
            FieldKey.DATE_OF_PASSING, "Date of passing must be after the birth date"
        )
    return passed, None


def _check_causes(causes: list[str]) -> ValidationIssue | None:
    if not any(cause.strip() for cause in causes):
        return _issue(FieldKey.CAUSES, "At least one cause of passing is required")
    if any(not cause.strip() for cause in causes):
        return _issue(FieldKey.CAUSES, "Causes of passing must not be blank")
    return None


def _check_burial_places(passing: PassingDraft, passed: date | None) -> ValidationIssue | None:
    places = passing.burial_places
    if not any(place.has_location for place in places):
        return _issue(FieldKey.BURIAL_PLACES, "At least one burial place is required")

    for place in places:
        if place.has_location and is_blank(place.start_date):
            return _issue(FieldKey.BURIAL_PLACES, "Burial places must have start dates")
        if not place.has_location and not is_blank(place.start_date):
            return _issue(FieldKey.BURIAL_PLACES, "Burial places must have a location")

    for place in places:
        if not place.has_location:
            continue
        try:
            start = parse_date(place.start_date)
        except ValueError:
            return _issue(FieldKey.BURIAL_PLACES, "Burial place has an invalid date")
        if passed is None:
            continue
        too_early = start < passed if BURIAL_AFTER_PASSING_INCLUSIVE else start <= passed
        if too_early:
            return _issue(
                FieldKey.BURIAL_PLACES,
                "Date of passing must be on or before the burial start date",
            )
    return None


def check_passing(passing: PassingDraft) -> list[ValidationIssue]:
    """Run every passing check; at most one issue per field."""
    issues = []

    passed, issue = _check_date_of_passing(passing)
    if issue:
        issues.append(issue)

    for issue in (
        _check_causes(passing.causes),
        _check_burial_places(passing, passed),
    ):
        if issue:
            issues.append(issue)

    return issues


def validate_passing(passing: PassingDraft) -> ValidationResult:
    """Validate a passing record on its own.

    Args:
        passing: Draft built from the passing form

    Returns:
        ValidationResult, empty when the record is valid
    """
    return ValidationResult(issues=check_passing(passing))
