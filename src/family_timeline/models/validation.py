"""Validation result models."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class FieldKey(str, Enum):
    """Form field an issue is rendered next to."""

    BIRTH_DATE = "birth_date"
    RESIDENCES = "residences"
    OCCUPATIONS = "occupations"
    RELATIONSHIP = "relationship"
    RELATIONSHIP_DATE = "relationship_date"
    DATE_OF_PASSING = "date_of_passing"
    CAUSES = "causes"
    BURIAL_PLACES = "burial_places"
    MARRIAGE_DATE = "marriage_date"
    DIVORCE_DATE = "divorce_date"
    ACHIEVEMENT_DATE = "achievement_date"


class ValidationIssue(BaseModel):
    """A single user-correctable problem."""

    model_config = ConfigDict(frozen=True)

    field: FieldKey
    message: str


class ValidationResult(BaseModel):
    """Outcome of a validation pass.

    An empty issue list means the draft is valid.
    """

    model_config = ConfigDict(frozen=True)

    issues: list[ValidationIssue] = Field(default_factory=list)

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.issues

    def messages_for(self, field: FieldKey) -> list[str]:
        return [issue.message for issue in self.issues if issue.field == field]

    def fields(self) -> list[FieldKey]:
        """Fields with at least one issue, in reporting order."""
        seen: list[FieldKey] = []
        for issue in self.issues:
            if issue.field not in seen:
                seen.append(issue.field)
        return seen

    def merge(self, other: ValidationResult) -> ValidationResult:
        return ValidationResult(issues=[*self.issues, *other.issues])
