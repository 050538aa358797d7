from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from src.domain.models.history_event import HistoryEvent
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus
from src.utils.datetime_tz import utc_now


@dataclass(slots=True, frozen=True)
class Animal:
    id: str
    tag_number: str
    category: AnimalCategory
    status: ReproductiveStatus
    farm: FarmLocation

    # Breeding fields, set and cleared together by the lifecycle rules
    insemination_date: date | None = None
    semen_name: str | None = None
    expected_calving_date: date | None = None
    calving_date: date | None = None

    # Genealogy: weak reference by id, never cascaded
    mother_id: str | None = None
    calves_ids: tuple[str, ...] = ()

    remarks: str | None = None
    medications: str | None = None
    image: str | None = None
    images: tuple[str, ...] = ()

    # Also the anchor for "days in dry" while status is Dry
    last_updated: datetime = field(default_factory=utc_now)
    # Newest first
    history: tuple[HistoryEvent, ...] = ()

    @property
    def is_male(self) -> bool:
        return self.category.is_male

    @property
    def is_active(self) -> bool:
        return self.status is not ReproductiveStatus.SOLD

    @property
    def is_female_breeder(self) -> bool:
        return not self.is_male
