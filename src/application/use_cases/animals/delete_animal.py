from __future__ import annotations

import logging

from src.application.herd_store import HerdStore

logger = logging.getLogger(__name__)


async def execute(store: HerdStore, animal_id: str) -> None:
    # Calves keep their mother_id; lineage lookups simply find no mother
    await store.delete(animal_id)
    logger.info("Deleted animal %s for owner %s", animal_id, store.owner_id)
