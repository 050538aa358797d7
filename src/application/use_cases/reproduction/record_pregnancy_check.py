from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from src.application.errors import domain_errors
from src.application.herd_store import HerdStore
from src.domain.models.animal import Animal
from src.domain.models.history_event import PregnancyCheckResult
from src.domain.services import lifecycle

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordPregnancyCheckInput:
    result: PregnancyCheckResult
    checked_on: date | None = None
    remarks: str | None = None


async def execute(store: HerdStore, animal_id: str, payload: RecordPregnancyCheckInput) -> Animal:
    animal = store.get(animal_id)
    with domain_errors():
        transition = lifecycle.record_pregnancy_check(
            animal,
            result=payload.result,
            checked_on=payload.checked_on,
            remarks=payload.remarks,
        )
    await store.commit(transition)
    logger.info(
        "Pregnancy check for %s: %s -> %s",
        animal.id,
        PregnancyCheckResult(payload.result).value,
        transition.animal.status.value,
    )
    return transition.animal
