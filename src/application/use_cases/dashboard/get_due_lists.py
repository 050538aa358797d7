from __future__ import annotations

from datetime import date

from src.application.herd_store import HerdStore
from src.domain.services import due_lists
from src.domain.value_objects.farm_location import FarmLocation


async def execute(
    store: HerdStore, *, farm: FarmLocation | None = None, today: date | None = None
) -> due_lists.DueLists:
    animals = [a for a in store.snapshot if a.is_active and (farm is None or a.farm == farm)]
    return due_lists.compute(animals, today=today)
