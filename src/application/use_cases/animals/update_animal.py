from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from src.application.errors import NotFound, domain_errors
from src.application.herd_store import HerdStore
from src.domain.models.animal import Animal
from src.domain.services import lifecycle
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus


@dataclass(slots=True)
class UpdateAnimalInput:
    tag_number: str | None = None
    category: AnimalCategory | None = None
    status: ReproductiveStatus | None = None
    farm: FarmLocation | None = None
    insemination_date: date | None = None
    semen_name: str | None = None
    calving_date: date | None = None
    mother_id: str | None = None
    remarks: str | None = None
    medications: str | None = None


async def execute(store: HerdStore, animal_id: str, payload: UpdateAnimalInput) -> Animal:
    animal = store.get(animal_id)
    if payload.mother_id and store.find(payload.mother_id) is None:
        raise NotFound(f"Mother {payload.mother_id} not found")
    with domain_errors():
        transition = lifecycle.edit(
            animal,
            lifecycle.AnimalChanges(
                tag_number=payload.tag_number,
                category=payload.category,
                status=payload.status,
                farm=payload.farm,
                insemination_date=payload.insemination_date,
                semen_name=payload.semen_name,
                calving_date=payload.calving_date,
                mother_id=payload.mother_id,
                remarks=payload.remarks,
                medications=payload.medications,
            ),
            store.snapshot,
        )
    await store.commit(transition)
    return transition.animal
