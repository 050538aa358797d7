from __future__ import annotations

from src.application.herd_store import HerdStore
from src.domain.services import herd_summary


async def execute(store: HerdStore) -> herd_summary.HerdSummary:
    return herd_summary.summarize(store.snapshot)
