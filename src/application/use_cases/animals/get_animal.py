from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from src.application.herd_store import HerdStore
from src.domain.models.animal import Animal
from src.domain.services import breeding_calendar, lineage


@dataclass(slots=True)
class AnimalProfile:
    animal: Animal
    schedule: breeding_calendar.BreedingSchedule
    lineage: lineage.Lineage


async def execute(store: HerdStore, animal_id: str, *, today: date | None = None) -> AnimalProfile:
    animal = store.get(animal_id)
    return AnimalProfile(
        animal=animal,
        schedule=breeding_calendar.schedule_for(animal, today=today),
        lineage=lineage.lineage_of(animal, store.snapshot),
    )
