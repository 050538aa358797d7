from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from src.application.errors import domain_errors
from src.application.herd_store import HerdStore
from src.domain.models.animal import Animal
from src.domain.services import lifecycle


@dataclass(slots=True)
class RecordMedicationInput:
    medications: str
    given_on: date | None = None
    remarks: str | None = None


async def execute(store: HerdStore, animal_id: str, payload: RecordMedicationInput) -> Animal:
    animal = store.get(animal_id)
    with domain_errors():
        transition = lifecycle.record_medication(
            animal,
            medications=payload.medications,
            given_on=payload.given_on,
            remarks=payload.remarks,
        )
    await store.commit(transition)
    return transition.animal
