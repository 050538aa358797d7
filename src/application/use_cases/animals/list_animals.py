from __future__ import annotations

from dataclasses import dataclass

from src.application.herd_store import HerdStore
from src.domain.models.animal import Animal
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus


@dataclass(slots=True)
class ListAnimalsResult:
    items: list[Animal]
    total: int


async def execute(
    store: HerdStore,
    *,
    farm: FarmLocation | None = None,
    status: ReproductiveStatus | None = None,
    search: str | None = None,
) -> ListAnimalsResult:
    items = store.filter(farm=farm, status=status, search=search)
    return ListAnimalsResult(items=items, total=len(items))
