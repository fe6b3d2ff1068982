"""Chronology validation for a person's biographical timeline.

Every form that adds or edits a member runs the same rules:
- Birth date is present and readable
- Residence and occupation intervals start after birth and do not overlap
- A parent or spouse relationship date is plausible for the birth date
- A spouse relationship does not collide with one that was never ended
- Passing and burial dates agree (see ``passing``)

Problems are returned as data for the form to render; nothing here raises
for well-typed input.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import structlog

from ..config import CONFIG, INTERVAL_START_AFTER_BIRTH_STRICT, TimelineConfig
from ..models.timeline import (
    Interval,
    PassingDraft,
    PersonDraft,
    RelationshipClaim,
    RelationshipKind,
    SpouseExclusivityContext,
)
from ..models.validation import FieldKey, ValidationIssue, ValidationResult
from ..utils.dates import DateInput, add_years, is_blank, parse_date
from .passing import check_passing

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class IntervalRole:
    """Wording and field key for one of the two interval sequences."""

    field: FieldKey
    singular: str
    plural: str

    @property
    def title(self) -> str:
        return self.singular[:1].upper() + self.singular[1:]

    @property
    def plural_title(self) -> str:
        return self.plural[:1].upper() + self.plural[1:]


RESIDENCE = IntervalRole(FieldKey.RESIDENCES, "place of residence", "places of residence")
OCCUPATION = IntervalRole(FieldKey.OCCUPATIONS, "occupation", "occupations")


class _Malformed(Exception):
    pass


def _read(value: DateInput) -> date | None:
    try:
        return parse_date(value)
    except ValueError as e:
        raise _Malformed(str(e)) from e


def is_after(later: date, earlier: date, strict: bool) -> bool:
    return later > earlier if strict else later >= earlier


class TimelineValidator:
    """Validates a person draft against the chronology rules.

    The walk over each interval sequence stops at the first problem, so
    each sequence contributes at most one issue per pass.
    """

    def __init__(self, config: TimelineConfig | None = None):
        """Initialize validator.

        Args:
            config: Thresholds to apply; defaults to the environment config
        """
        self._config = config or CONFIG

    def validate(
        self,
        person: PersonDraft,
        passing: PassingDraft | None = None,
        exclusivity: SpouseExclusivityContext | None = None,
    ) -> ValidationResult:
        """Validate a person draft.

        Args:
            person: Draft built from the member form
            passing: Passing record entered alongside, if any
            exclusivity: Spouse relationships already on record

        Returns:
            ValidationResult, empty when the draft is valid
        """
        issues: list[ValidationIssue] = []

        birth, birth_issue = self.check_birth_date(person.birth_date)
        if birth_issue:
            issues.append(birth_issue)

        if person.relationship is not None:
            issue = self.check_relationship_date(person.relationship, birth)
            if issue:
                issues.append(issue)

        for role, intervals in (
            (RESIDENCE, person.residences),
            (OCCUPATION, person.occupations),
        ):
            issue = self.check_intervals(intervals, birth, role)
            if issue:
                issues.append(issue)

        if (
            person.relationship is not None
            and person.relationship.kind == RelationshipKind.SPOUSE
            and exclusivity is not None
        ):
            issues.extend(self.check_spouse_exclusivity(person.relationship, exclusivity))

        if passing is not None:
            if is_blank(passing.birth_date) and birth is not None:
                passing = passing.model_copy(update={"birth_date": birth})
            issues.extend(check_passing(passing))

        result = ValidationResult(issues=issues)
        logger.debug(
            "timeline_validated",
            valid=result.is_valid,
            issue_count=len(issues),
            fields=[f.value for f in result.fields()],
        )
        return result

    def check_birth_date(self, value: DateInput) -> tuple[date | None, ValidationIssue | None]:
        """Read the birth date, reporting it if missing or malformed."""
        try:
            birth = _read(value)
        except _Malformed:
            return None, ValidationIssue(
                field=FieldKey.BIRTH_DATE, message="Birth date is not a valid date"
            )
        if birth is None:
            return None, ValidationIssue(
                field=FieldKey.BIRTH_DATE, message="Birth date is required"
            )
        return birth, None

    def check_intervals(
        self,
        intervals: list[Interval],
        birth: date | None,
        role: IntervalRole,
    ) -> ValidationIssue | None:
        """Check one interval sequence; returns the first problem found.

        Args:
            intervals: Residences or occupations in entry order
            birth: Parsed birth date, None when unusable
            role: Which sequence is being checked

        Returns:
            The first issue, or None
        """

        def issue(message: str) -> ValidationIssue:
            return ValidationIssue(field=role.field, message=message)

        filled = [interval for interval in intervals if interval.has_location]
        if not filled:
            return issue(f"At least one {role.singular} is required")

        if any(is_blank(interval.start_date) for interval in filled):
            return issue(f"{role.plural_title} must have start dates")

        starts: list[date | None] = []
        ends: list[date | None] = []
        for interval in intervals:
            try:
                start, end = _read(interval.start_date), _read(interval.end_date)
            except _Malformed:
                if interval.has_location:
                    return issue(f"{role.title} has an invalid date")
                start = end = None
            starts.append(start)
            ends.append(end)

        if birth is not None:
            for interval, start in zip(intervals, starts):
                if not interval.has_location or start is None:
                    continue
                if not is_after(start, birth, INTERVAL_START_AFTER_BIRTH_STRICT):
                    return issue(f"{role.title} start dates must be after birth date")

        for i in range(1, len(intervals)):
            current = intervals[i]
            if not current.has_location or starts[i] is None:
                continue
            previous_end = ends[i - 1]
            if previous_end is None:
                if not is_blank(intervals[i - 1].end_date):
                    return issue(f"{role.title} has an invalid date")
                return issue(f"Previous {role.singular} must have an end date")
            if starts[i] <= previous_end:
                return issue(
                    f"Start date must be after the end date of the previous {role.singular}"
                )

        return None

    def check_relationship_date(
        self, claim: RelationshipClaim, birth: date | None
    ) -> ValidationIssue | None:
        """Check the date a parent or spouse relationship was established."""

        def issue(message: str) -> ValidationIssue:
            return ValidationIssue(field=FieldKey.RELATIONSHIP_DATE, message=message)

        try:
            established = _read(claim.established_date)
        except _Malformed:
            return issue("Relationship date is not a valid date")
        if established is None:
            return issue("Relationship date is required")
        if birth is None:
            return None

        if claim.kind == RelationshipKind.PARENT:
            if established < birth:
                return issue("Relationship date must be on or after birth date")
            return None

        years = self._config.min_spouse_age_years
        try:
            earliest = add_years(birth, years)
        except ValueError:
            # Floor lies past the last representable date
            earliest = date.max
        if established < earliest:
            return issue(f"Relationship date must be at least {years} years after birth date")
        return None

    def check_spouse_exclusivity(
        self, claim: RelationshipClaim, context: SpouseExclusivityContext
    ) -> list[ValidationIssue]:
        """Flag a spouse claim when either side is still married on record."""
        issues = []

        def blocking(records) -> bool:
            return any(
                record.is_active
                and (claim.relationship_id is None or record.relationship_id != claim.relationship_id)
                for record in records
            )

        if blocking(context.counterpart_relationships):
            issues.append(
                ValidationIssue(
                    field=FieldKey.RELATIONSHIP,
                    message=(
                        "Counterpart already has an active spouse relationship; "
                        "record a divorce first"
                    ),
                )
            )
        if blocking(context.own_relationships):
            issues.append(
                ValidationIssue(
                    field=FieldKey.RELATIONSHIP,
                    message=(
                        "Person already has an active spouse relationship; "
                        "record a divorce first"
                    ),
                )
            )
        return issues


def validate(
    person: PersonDraft,
    passing: PassingDraft | None = None,
    exclusivity: SpouseExclusivityContext | None = None,
    config: TimelineConfig | None = None,
) -> ValidationResult:
    """Validate a person draft with the default or given configuration."""
    return TimelineValidator(config).validate(person, passing, exclusivity)
