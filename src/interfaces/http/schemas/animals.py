from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.models.history_event import HistoryEventType, PregnancyCheckResult
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus


def _blank_to_none(value: Any) -> Any:
    # Older clients send "" for unset dates
    if isinstance(value, str) and not value.strip():
        return None
    return value


class AnimalCreate(BaseModel):
    tag_number: str = Field(min_length=1, max_length=128)
    category: AnimalCategory = AnimalCategory.MILKING
    status: ReproductiveStatus | None = None
    farm: FarmLocation = FarmLocation.MILKING_FARM
    insemination_date: date | None = None
    semen_name: str | None = None
    expected_calving_date: date | None = None
    calving_date: date | None = None
    mother_id: str | None = None
    remarks: str | None = None
    medications: str | None = None

    @field_validator(
        "insemination_date", "expected_calving_date", "calving_date", mode="before"
    )
    @classmethod
    def empty_dates(cls, value: Any) -> Any:
        return _blank_to_none(value)


class AnimalUpdate(BaseModel):
    tag_number: str | None = Field(default=None, min_length=1, max_length=128)
    category: AnimalCategory | None = None
    status: ReproductiveStatus | None = None
    farm: FarmLocation | None = None
    insemination_date: date | None = None
    semen_name: str | None = None
    calving_date: date | None = None
    mother_id: str | None = None
    remarks: str | None = None
    medications: str | None = None

    @field_validator("insemination_date", "calving_date", mode="before")
    @classmethod
    def empty_dates(cls, value: Any) -> Any:
        return _blank_to_none(value)


class HistoryEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: HistoryEventType
    date: datetime
    details: str
    remarks: str | None = None
    medications: str | None = None
    semen: str | None = None
    result: PregnancyCheckResult | None = None
    calf_id: str | None = None
    recorded_by: str | None = None


class HistoryEntryResponse(HistoryEventResponse):
    calf_tag: str | None = None


class AnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tag_number: str
    category: AnimalCategory
    status: ReproductiveStatus
    farm: FarmLocation
    insemination_date: date | None = None
    semen_name: str | None = None
    expected_calving_date: date | None = None
    calving_date: date | None = None
    mother_id: str | None = None
    calves_ids: list[str] = Field(default_factory=list)
    remarks: str | None = None
    medications: str | None = None
    image: str | None = None
    images: list[str] = Field(default_factory=list)
    last_updated: datetime
    history: list[HistoryEventResponse] = Field(default_factory=list)


class AnimalsListResponse(BaseModel):
    items: list[AnimalResponse]
    total: int


class AnimalRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tag_number: str
    category: AnimalCategory
    status: ReproductiveStatus


class LineageResponse(BaseModel):
    mother: AnimalRef | None = None
    calves: list[AnimalRef] = Field(default_factory=list)
    sire: str | None = None


class BreedingScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    days_to_pregnancy_check: int | None = None
    days_to_calving: int | None = None
    gestation_days: int | None = None
    days_in_dry: int | None = None
    days_since_calving: int | None = None
    needs_dry_off: bool = False


class AnimalProfileResponse(BaseModel):
    animal: AnimalResponse
    schedule: BreedingScheduleResponse
    lineage: LineageResponse


class FarmShiftRequest(BaseModel):
    remarks: str | None = None


class MarkSoldRequest(BaseModel):
    remarks: str | None = None


class MedicationRequest(BaseModel):
    medications: str = Field(min_length=1)
    given_on: date | None = None
    remarks: str | None = None


class ImportRequest(BaseModel):
    records: list[dict[str, Any]]
    strict: bool = False


class ImportResponse(BaseModel):
    imported: int
    skipped: list[dict[str, Any]] = Field(default_factory=list)
    items: list[AnimalResponse] = Field(default_factory=list)
