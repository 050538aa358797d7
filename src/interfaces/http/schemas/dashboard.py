from __future__ import annotations

from pydantic import BaseModel, Field

from src.domain.value_objects.farm_location import FarmLocation
from src.interfaces.http.schemas.animals import AnimalRef


class HerdSummaryResponse(BaseModel):
    total: int
    sold: int
    by_status: dict[str, int] = Field(default_factory=dict)
    by_category: dict[str, int] = Field(default_factory=dict)
    by_farm: dict[str, int] = Field(default_factory=dict)


class DueAnimal(AnimalRef):
    farm: FarmLocation
    days: int | None = None


class DueListsResponse(BaseModel):
    pregnancy_check: list[DueAnimal] = Field(default_factory=list)
    calving: list[DueAnimal] = Field(default_factory=list)
    dry_off: list[DueAnimal] = Field(default_factory=list)
    ready_for_insemination: list[DueAnimal] = Field(default_factory=list)
    total: int = 0
