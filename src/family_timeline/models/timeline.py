"""Draft models for a person's biographical timeline.

Drafts are built by a form surface from raw user input right before
validation and discarded afterwards. Dates are kept exactly as entered
(``date`` objects or text) so that malformed input reaches the validator
and is reported there instead of failing model construction.
"""
from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DateValue = date | str | None
PersonRef = int | str


class RelationshipKind(str, Enum):
    """How the person is being attached to the tree."""

    PARENT = "parent"  # Recorded as the counterpart's child
    SPOUSE = "spouse"


class Interval(BaseModel):
    """A residence or occupation period.

    For occupations ``location`` holds the job title.
    """

    model_config = ConfigDict(frozen=True)

    location: str = ""
    start_date: DateValue = None
    end_date: DateValue = Field(
        default=None, description="Open-ended only on the last entry"
    )

    @property
    def has_location(self) -> bool:
        return bool(self.location.strip())


class RelationshipClaim(BaseModel):
    """A proposed parent or spouse link to an existing member."""

    model_config = ConfigDict(frozen=True)

    kind: RelationshipKind
    counterpart: PersonRef
    established_date: DateValue = None
    relationship_id: PersonRef | None = Field(
        default=None, description="Stored relationship being edited, if any"
    )


class PersonDraft(BaseModel):
    """Biographical data for a person being added or edited."""

    model_config = ConfigDict(frozen=True)

    birth_date: DateValue = None
    residences: list[Interval] = Field(default_factory=list)
    occupations: list[Interval] = Field(default_factory=list)
    relationship: RelationshipClaim | None = None


class BurialPlace(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: str = ""
    start_date: DateValue = None

    @property
    def has_location(self) -> bool:
        return bool(self.location.strip())


class PassingDraft(BaseModel):
    """A passing (death and burial) record being entered for a member."""

    model_config = ConfigDict(frozen=True)

    date_of_passing: DateValue = None
    causes: list[str] = Field(default_factory=list)
    burial_places: list[BurialPlace] = Field(default_factory=list)
    birth_date: DateValue = Field(
        default=None, description="Birth date of the deceased, when known"
    )


class SpouseRecord(BaseModel):
    """An existing stored spouse relationship."""

    model_config = ConfigDict(frozen=True)

    relationship_id: PersonRef | None = None
    partner_ids: tuple[PersonRef, ...] = ()
    marriage_date: DateValue = None
    divorce_date: DateValue = None

    @property
    def is_active(self) -> bool:
        if self.divorce_date is None:
            return True
        return isinstance(self.divorce_date, str) and not self.divorce_date.strip()


class SpouseExclusivityContext(BaseModel):
    """Read-only view of spouse relationships already on record.

    Supplied by the caller from its own store; the validator only reads it.
    """

    model_config = ConfigDict(frozen=True)

    counterpart_relationships: list[SpouseRecord] = Field(default_factory=list)
    own_relationships: list[SpouseRecord] = Field(default_factory=list)
