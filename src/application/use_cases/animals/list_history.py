from __future__ import annotations

from dataclasses import dataclass

from src.application.herd_store import HerdStore
from src.domain.models.history_event import HistoryEvent, HistoryEventType
from src.domain.services import ledger, legacy_details


@dataclass(slots=True)
class HistoryEntry:
    event: HistoryEvent
    semen: str | None
    calf_tag: str | None


def _calf_tag(event: HistoryEvent, store: HerdStore) -> str | None:
    if event.type is not HistoryEventType.CALVING:
        return None
    if event.calf_id:
        calf = store.find(event.calf_id)
        if calf is not None:
            return calf.tag_number
    return legacy_details.calf_tag(event.details)


async def execute(
    store: HerdStore, animal_id: str, *, event_type: HistoryEventType | None = None
) -> list[HistoryEntry]:
    """Ledger entries newest first, with semen and calf tag filled from legacy text."""
    animal = store.get(animal_id)
    events = ledger.events_of_type(animal, event_type) if event_type else animal.history
    return [
        HistoryEntry(
            event=event,
            semen=legacy_details.event_semen(event),
            calf_tag=_calf_tag(event, store),
        )
        for event in events
    ]
