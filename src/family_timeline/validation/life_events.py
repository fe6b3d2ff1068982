"""Date checks for the life-event record forms.

Marriage, divorce, birth-of-child and achievement records each compare a
single event date against one or two reference dates. All comparisons
are strict: an event on the reference date itself is rejected.
"""
from __future__ import annotations

from datetime import date

from ..models.validation import FieldKey, ValidationIssue, ValidationResult
from ..utils.dates import DateInput, parse_date, try_parse_date

_LABELS = {
    FieldKey.MARRIAGE_DATE: "Marriage date",
    FieldKey.DIVORCE_DATE: "Divorce date",
    FieldKey.BIRTH_DATE: "Birth date",
    FieldKey.ACHIEVEMENT_DATE: "Achievement date",
}


def _event_date(value: DateInput, field: FieldKey) -> tuple[date | None, list[ValidationIssue]]:
    label = _LABELS[field]
    try:
        parsed = parse_date(value)
    except ValueError:
        return None, [ValidationIssue(field=field, message=f"{label} is not a valid date")]
    if parsed is None:
        return None, [ValidationIssue(field=field, message=f"{label} is required")]
    return parsed, []


def _result(issues: list[ValidationIssue]) -> ValidationResult:
    return ValidationResult(issues=issues)


def validate_marriage(
    marriage_date: DateInput,
    first_birth_date: DateInput = None,
    second_birth_date: DateInput = None,
) -> ValidationResult:
    """Marriage must fall after both partners were born."""
    married, issues = _event_date(marriage_date, FieldKey.MARRIAGE_DATE)
    if married is None:
        return _result(issues)

    for birth_value, who in ((first_birth_date, "first"), (second_birth_date, "second")):
        birth = try_parse_date(birth_value)
        if birth is not None and married <= birth:
            return _result([
                ValidationIssue(
                    field=FieldKey.MARRIAGE_DATE,
                    message=f"Marriage date must be after {who} member's birthday",
                )
            ])
    return _result([])


def validate_divorce(
    marriage_date: DateInput,
    divorce_date: DateInput,
    already_divorced: bool = False,
) -> ValidationResult:
    """Divorce must end a marriage that is still active and predates it."""
    if already_divorced:
        return _result([
            ValidationIssue(field=FieldKey.DIVORCE_DATE, message="This couple is already divorced")
        ])

    divorced, issues = _event_date(divorce_date, FieldKey.DIVORCE_DATE)
    if divorced is None:
        return _result(issues)

    married = try_parse_date(marriage_date)
    if married is not None and divorced <= married:
        return _result([
            ValidationIssue(
                field=FieldKey.DIVORCE_DATE,
                message="Divorce date must be after the marriage date",
            )
        ])
    return _result([])


def validate_birth(birth_date: DateInput, parent_birth_date: DateInput) -> ValidationResult:
    """A child recorded under a parent must be born after the parent."""
    born, issues = _event_date(birth_date, FieldKey.BIRTH_DATE)
    if born is None:
        return _result(issues)

    parent_born = try_parse_date(parent_birth_date)
    if parent_born is not None and born <= parent_born:
        return _result([
            ValidationIssue(
                field=FieldKey.BIRTH_DATE,
                message="Birth date must be after parent's birthday",
            )
        ])
    return _result([])


def validate_achievement(achieve_date: DateInput, birth_date: DateInput) -> ValidationResult:
    """An achievement must fall after the member was born."""
    achieved, issues = _event_date(achieve_date, FieldKey.ACHIEVEMENT_DATE)
    if achieved is None:
        return _result(issues)

    born = try_parse_date(birth_date)
    if born is not None and achieved <= born:
        return _result([
            ValidationIssue(
                field=FieldKey.ACHIEVEMENT_DATE,
                message="Achievement date must be after the birth date",
            )
        ])
    return _result([])
