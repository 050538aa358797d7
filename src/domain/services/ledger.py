from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from src.domain.models.animal import Animal
from src.domain.models.history_event import HistoryEvent
from src.utils.datetime_tz import utc_now
from src.utils.ids import new_id


def append(animal: Animal, event: HistoryEvent, *, now: datetime | None = None) -> Animal:
    """Return a copy of ``animal`` with ``event`` recorded as its newest entry.

    The event is given a fresh id so that two appends of the same event value
    never collide. ``last_updated`` is refreshed.
    """
    recorded = replace(event, id=new_id())
    return replace(
        animal,
        history=(recorded, *animal.history),
        last_updated=now or utc_now(),
    )


def events_of_type(animal: Animal, *types: str) -> list[HistoryEvent]:
    wanted = set(types)
    return [event for event in animal.history if event.type in wanted]
