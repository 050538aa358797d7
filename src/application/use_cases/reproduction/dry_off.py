from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from src.application.errors import domain_errors
from src.application.herd_store import HerdStore
from src.domain.models.animal import Animal
from src.domain.services import lifecycle


@dataclass(slots=True)
class DryOffInput:
    force: bool = False
    remarks: str | None = None


async def execute(
    store: HerdStore, animal_id: str, payload: DryOffInput, *, today: date | None = None
) -> Animal:
    animal = store.get(animal_id)
    with domain_errors():
        transition = lifecycle.dry_off(
            animal, force=payload.force, remarks=payload.remarks, today=today
        )
    await store.commit(transition)
    return transition.animal
