"""Typed views of the snapshots stored in the audit log.

Snapshots are written by the record store in camelCase JSON. Each known
entity type gets a model with every field optional; unknown keys are kept
so nothing is lost if the store adds columns. Entity types without a
model are read as plain string-keyed records.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SnapshotModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class FamilyMemberSnapshot(SnapshotModel):
    full_name: str | None = Field(default=None, alias="fullName")
    birthday: str | None = None
    gender: str | None = None
    address: str | None = None
    # Text in the record store ("0", "2")
    generation: str | int | None = None
    is_adopted: bool | None = Field(default=None, alias="isAdopted")
    parent_id: int | str | None = Field(default=None, alias="parentId")
    profile_picture: str | None = Field(default=None, alias="profilePicture")


class AchievementSnapshot(SnapshotModel):
    family_member_id: int | str | None = Field(default=None, alias="familyMemberId")
    # Denormalised at write time so readers need no member lookup
    family_member_name: str | None = Field(default=None, alias="familyMemberName")
    title: str | None = None
    achieve_date: str | None = Field(default=None, alias="achieveDate")
    description: str | None = None
    achievement_type_name: str | None = Field(default=None, alias="achievementTypeName")


class SpouseRelationshipSnapshot(SnapshotModel):
    family_member1_id: int | str | None = Field(default=None, alias="familyMember1Id")
    family_member2_id: int | str | None = Field(default=None, alias="familyMember2Id")
    marriage_date: str | None = Field(default=None, alias="marriageDate")
    relationship_established: str | None = Field(
        default=None, alias="relationshipEstablished"
    )
    divorce_date: str | None = Field(default=None, alias="divorceDate")

    @property
    def established(self) -> str | None:
        return self.marriage_date or self.relationship_established


class OccupationSnapshot(SnapshotModel):
    family_member_id: int | str | None = Field(default=None, alias="familyMemberId")
    job_title: str | None = Field(default=None, alias="jobTitle")
    title: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")

    @property
    def display_title(self) -> str | None:
        return self.job_title or self.title


class BurialPlaceSnapshot(SnapshotModel):
    location: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")


class PassingRecordSnapshot(SnapshotModel):
    family_member_id: int | str | None = Field(default=None, alias="familyMemberId")
    family_member_name: str | None = Field(default=None, alias="familyMemberName")
    date_of_passing: str | None = Field(default=None, alias="dateOfPassing")
    passing_date: str | None = Field(default=None, alias="passingDate")
    causes_of_death: list[str] | None = Field(default=None, alias="causesOfDeath")
    causes: list[str] | None = None
    cause_of_death: str | None = Field(default=None, alias="causeOfDeath")
    burial_places: list[BurialPlaceSnapshot] | None = Field(
        default=None, alias="burialPlaces"
    )
    buried_places: list[BurialPlaceSnapshot] | None = Field(
        default=None, alias="buriedPlaces"
    )

    @property
    def passed_on(self) -> str | None:
        return self.date_of_passing or self.passing_date

    @property
    def cause_list(self) -> list[str]:
        if self.causes_of_death is not None:
            return self.causes_of_death
        if self.causes is not None:
            return self.causes
        if self.cause_of_death:
            return [self.cause_of_death]
        return []

    @property
    def burials(self) -> list[BurialPlaceSnapshot]:
        if self.burial_places is not None:
            return self.burial_places
        return self.buried_places or []
