from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import domain_errors
from src.application.herd_store import HerdStore
from src.domain.models.animal import Animal
from src.domain.services import lifecycle

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MarkSoldInput:
    remarks: str | None = None


async def execute(store: HerdStore, animal_id: str, payload: MarkSoldInput) -> Animal:
    animal = store.get(animal_id)
    with domain_errors():
        transition = lifecycle.mark_sold(animal, remarks=payload.remarks)
    await store.commit(transition)
    logger.info("Animal %s marked as sold", animal.id)
    return transition.animal
