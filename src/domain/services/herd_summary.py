from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from src.domain.models.animal import Animal
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import FEMALE_STATUSES, ReproductiveStatus


@dataclass(slots=True)
class HerdSummary:
    total: int = 0
    by_status: dict[ReproductiveStatus, int] = field(default_factory=dict)
    by_category: dict[AnimalCategory, int] = field(default_factory=dict)
    by_farm: dict[FarmLocation, int] = field(default_factory=dict)
    sold: int = 0


def summarize(animals: Iterable[Animal]) -> HerdSummary:
    """Counts for the active herd; sold animals are only tallied under ``sold``."""
    active: list[Animal] = []
    sold = 0
    for animal in animals:
        if animal.is_active:
            active.append(animal)
        else:
            sold += 1

    # Reproductive counts only make sense for female breeders
    statuses = Counter(a.status for a in active if a.is_female_breeder)
    categories = Counter(a.category for a in active)
    farms = Counter(a.farm for a in active)
    return HerdSummary(
        total=len(active),
        by_status={s: statuses.get(s, 0) for s in ReproductiveStatus if s in FEMALE_STATUSES},
        by_category={c: categories.get(c, 0) for c in AnimalCategory},
        by_farm={f: farms.get(f, 0) for f in FarmLocation},
        sold=sold,
    )
