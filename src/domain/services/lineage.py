"""Sire inference for calves.

The sire is not a field on the calf. It is recovered from the ledgers, in
order of reliability:

1. the calf's own birth entry, when it carries the semen used;
2. the mother's Calving entry for this calf;
3. the mother's Insemination entries, picking the latest one whose distance
   to the calf's estimated birth date is a plausible gestation.

Any failure yields None. Nothing here raises.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from src.domain.models.animal import Animal
from src.domain.models.history_event import HistoryEvent, HistoryEventType
from src.domain.services import legacy_details
from src.domain.value_objects.reproductive_status import ReproductiveStatus
from src.utils.datetime_tz import to_local_date

logger = logging.getLogger(__name__)

# Observed-data bounds, wider than the fixed gestation estimate on purpose
MIN_GESTATION_WINDOW_DAYS = 240
MAX_GESTATION_WINDOW_DAYS = 310


def is_calf_like(animal: Animal) -> bool:
    # Newly registered offspring are tagged Open/Child before any breeding
    return animal.category.is_calf or animal.status in (
        ReproductiveStatus.OPEN,
        ReproductiveStatus.CHILD,
    )


def find_mother(animal: Animal, animals: Iterable[Animal]) -> Animal | None:
    if not animal.mother_id:
        return None
    return next((a for a in animals if a.id == animal.mother_id), None)


def find_calves(animal: Animal, animals: Iterable[Animal]) -> list[Animal]:
    return [a for a in animals if a.mother_id == animal.id]


def _from_own_history(calf: Animal) -> str | None:
    for event in calf.history:
        if not event.semen:
            continue
        if "born" in (event.details or "").lower() or event.type == HistoryEventType.GENERAL:
            return event.semen
    return None


def _references_calf(event: HistoryEvent, calf: Animal) -> bool:
    if event.calf_id and event.calf_id == calf.id:
        return True
    details = event.details or ""
    tag = legacy_details.calf_tag(details)
    if tag is not None:
        return tag == calf.tag_number
    return bool(calf.tag_number) and calf.tag_number in details


def _from_mother_calving(calf: Animal, mother: Animal) -> str | None:
    for event in mother.history:
        if event.type != HistoryEventType.CALVING or not _references_calf(event, calf):
            continue
        semen = event.semen or legacy_details.semen_or_sire(event.details)
        if semen:
            return semen
    return None


def estimated_birth_date(calf: Animal) -> date | None:
    # History is newest first; the oldest entry is the birth/registration
    if calf.history:
        return to_local_date(calf.history[-1].date)
    return to_local_date(calf.last_updated)


def _from_insemination_window(calf: Animal, mother: Animal) -> str | None:
    birth = estimated_birth_date(calf)
    if birth is None:
        return None
    best: tuple[date, HistoryEvent] | None = None
    for event in mother.history:
        if event.type != HistoryEventType.INSEMINATION:
            continue
        inseminated_on = to_local_date(event.date)
        if inseminated_on is None or inseminated_on >= birth:
            continue
        distance = (birth - inseminated_on).days
        if not MIN_GESTATION_WINDOW_DAYS <= distance <= MAX_GESTATION_WINDOW_DAYS:
            continue
        if best is None or inseminated_on > best[0]:
            best = (inseminated_on, event)
    if best is None:
        return None
    event = best[1]
    logger.debug("Sire for calf %s inferred from insemination %s", calf.id, event.id)
    return event.semen or legacy_details.inseminated_with(event.details)


def resolve_sire(calf: Animal, animals: Iterable[Animal]) -> str | None:
    if not is_calf_like(calf):
        return None
    semen = _from_own_history(calf)
    if semen:
        return semen
    mother = find_mother(calf, animals)
    if mother is None:
        return None
    return _from_mother_calving(calf, mother) or _from_insemination_window(calf, mother)


@dataclass(slots=True, frozen=True)
class Lineage:
    mother: Animal | None
    calves: tuple[Animal, ...]
    sire: str | None


def lineage_of(animal: Animal, animals: Iterable[Animal]) -> Lineage:
    population = list(animals)
    return Lineage(
        mother=find_mother(animal, population),
        calves=tuple(find_calves(animal, population)),
        sire=resolve_sire(animal, population),
    )
