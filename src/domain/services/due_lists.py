from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from src.domain.models.animal import Animal
from src.domain.services import breeding_calendar
from src.domain.value_objects.reproductive_status import ReproductiveStatus
from src.utils.datetime_tz import local_today

CALVING_ALERT_DAYS = 5


def needs_pregnancy_check(animal: Animal, *, today: date | None = None) -> bool:
    if animal.status is not ReproductiveStatus.INSEMINATED or not animal.insemination_date:
        return False
    days = breeding_calendar.days_to_pregnancy_check(
        animal.insemination_date, animal.category, today=today
    )
    return days is not None and days <= 0


def is_calving_due(animal: Animal, *, today: date | None = None) -> bool:
    if animal.status not in (ReproductiveStatus.PREGNANT, ReproductiveStatus.DRY):
        return False
    if not animal.expected_calving_date:
        return False
    days = breeding_calendar.days_until(animal.expected_calving_date, today=today)
    return days is not None and days <= CALVING_ALERT_DAYS


def needs_dry_off(animal: Animal, *, today: date | None = None) -> bool:
    if animal.status is not ReproductiveStatus.PREGNANT or not animal.insemination_date:
        return False
    days = breeding_calendar.gestation_days(animal.insemination_date, today=today)
    return days is not None and days >= breeding_calendar.DRY_OFF_GESTATION_DAYS


def is_ready_for_insemination(animal: Animal, *, today: date | None = None) -> bool:
    if animal.status not in (ReproductiveStatus.NEWLY_CALVED, ReproductiveStatus.OPEN):
        return False
    if not animal.calving_date:
        return False
    ready_on = breeding_calendar.re_insemination_date(animal.calving_date)
    days = breeding_calendar.days_until(ready_on, today=today)
    return days is not None and days <= 0


@dataclass(slots=True)
class DueLists:
    pregnancy_check: list[Animal] = field(default_factory=list)
    calving: list[Animal] = field(default_factory=list)
    dry_off: list[Animal] = field(default_factory=list)
    ready_for_insemination: list[Animal] = field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            len(self.pregnancy_check)
            + len(self.calving)
            + len(self.dry_off)
            + len(self.ready_for_insemination)
        )


def compute(animals: Iterable[Animal], *, today: date | None = None) -> DueLists:
    """Derive every due list from the current herd; nothing is stored."""
    today = today or local_today()
    lists = DueLists()
    for animal in animals:
        if needs_pregnancy_check(animal, today=today):
            lists.pregnancy_check.append(animal)
        if is_calving_due(animal, today=today):
            lists.calving.append(animal)
        if needs_dry_off(animal, today=today):
            lists.dry_off.append(animal)
        if is_ready_for_insemination(animal, today=today):
            lists.ready_for_insemination.append(animal)
    return lists
