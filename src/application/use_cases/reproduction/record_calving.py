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
class RecordCalvingInput:
    calf_tag: str
    calf_gender: str
    calving_date: date
    remarks: str | None = None


@dataclass(slots=True)
class CalvingResult:
    mother: Animal
    calf: Animal


async def execute(store: HerdStore, animal_id: str, payload: RecordCalvingInput) -> CalvingResult:
    mother = store.get(animal_id)
    with domain_errors():
        transition = lifecycle.record_calving(
            mother,
            store.snapshot,
            calf_tag=payload.calf_tag,
            calf_gender=payload.calf_gender,
            calving_date=payload.calving_date,
            remarks=payload.remarks,
        )
    # Calf and mother go out as one batch
    await store.commit(transition)
    logger.info(
        "Calving recorded for %s: calf %s (tag %s)",
        mother.id,
        transition.calf.id,
        transition.calf.tag_number,
    )
    return CalvingResult(mother=transition.animal, calf=transition.calf)
