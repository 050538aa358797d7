from __future__ import annotations

from src.application.herd_store import HerdStore
from src.domain.services import lineage


async def execute(store: HerdStore, animal_id: str) -> lineage.Lineage:
    return lineage.lineage_of(store.get(animal_id), store.snapshot)
