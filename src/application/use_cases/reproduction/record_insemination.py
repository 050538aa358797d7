from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from src.application.errors import domain_errors
from src.application.herd_store import HerdStore
from src.domain.models.animal import Animal
from src.domain.services import lifecycle

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordInseminationInput:
    semen_name: str
    insemination_date: date
    remarks: str | None = None


async def execute(store: HerdStore, animal_id: str, payload: RecordInseminationInput) -> Animal:
    animal = store.get(animal_id)
    with domain_errors():
        transition = lifecycle.record_insemination(
            animal,
            semen_name=payload.semen_name,
            insemination_date=payload.insemination_date,
            remarks=payload.remarks,
        )
    await store.commit(transition)
    logger.info(
        "Insemination recorded for %s with %s on %s",
        animal.id,
        transition.animal.semen_name,
        payload.insemination_date.isoformat(),
    )
    return transition.animal
