"""Date arithmetic for the breeding cycle.

Every function accepts ``date``/``datetime`` objects or ISO strings and
returns None when the input is missing or does not parse. Differences are
whole calendar days in the farm's timezone; negative values mean the date
has already passed and are returned as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from src.domain.models.animal import Animal
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.reproductive_status import ReproductiveStatus
from src.utils.datetime_tz import local_today, to_local_date

GESTATION_DAYS = 283
PREGNANCY_CHECK_DAYS = 45
HEIFER_PREGNANCY_CHECK_DAYS = 40
RE_INSEMINATION_DAYS = 45
DRY_OFF_GESTATION_DAYS = 225

DateInput = date | datetime | str | None


def _is_heifer(category: AnimalCategory | str | None) -> bool:
    if category is None:
        return False
    try:
        return AnimalCategory(category) is AnimalCategory.HEIFER
    except ValueError:
        return False


def pregnancy_check_interval(category: AnimalCategory | str | None) -> int:
    return HEIFER_PREGNANCY_CHECK_DAYS if _is_heifer(category) else PREGNANCY_CHECK_DAYS


def pregnancy_check_due_date(
    insemination_date: DateInput, category: AnimalCategory | str | None = None
) -> date | None:
    start = to_local_date(insemination_date)
    if start is None:
        return None
    return start + timedelta(days=pregnancy_check_interval(category))


def expected_calving_date(insemination_date: DateInput) -> date | None:
    start = to_local_date(insemination_date)
    if start is None:
        return None
    return start + timedelta(days=GESTATION_DAYS)


def re_insemination_date(calving_date: DateInput) -> date | None:
    start = to_local_date(calving_date)
    if start is None:
        return None
    return start + timedelta(days=RE_INSEMINATION_DAYS)


def days_until(target_date: DateInput, *, today: date | None = None) -> int | None:
    target = to_local_date(target_date)
    if target is None:
        return None
    return (target - (today or local_today())).days


def days_since(source_date: DateInput, *, today: date | None = None) -> int | None:
    source = to_local_date(source_date)
    if source is None:
        return None
    return ((today or local_today()) - source).days


def gestation_days(insemination_date: DateInput, *, today: date | None = None) -> int | None:
    return days_since(insemination_date, today=today)


def days_to_pregnancy_check(
    insemination_date: DateInput,
    category: AnimalCategory | str | None = None,
    *,
    today: date | None = None,
) -> int | None:
    return days_until(pregnancy_check_due_date(insemination_date, category), today=today)


@dataclass(slots=True, frozen=True)
class BreedingSchedule:
    days_to_pregnancy_check: int | None = None
    days_to_calving: int | None = None
    gestation_days: int | None = None
    days_in_dry: int | None = None
    days_since_calving: int | None = None
    needs_dry_off: bool = False


def schedule_for(animal: Animal, *, today: date | None = None) -> BreedingSchedule:
    """Derived counters shown alongside an animal, each only where it applies."""
    today = today or local_today()
    status = animal.status
    in_gestation = status in (ReproductiveStatus.PREGNANT, ReproductiveStatus.DRY)

    to_check = None
    if status is ReproductiveStatus.INSEMINATED and animal.insemination_date:
        to_check = days_to_pregnancy_check(animal.insemination_date, animal.category, today=today)

    to_calving = None
    if in_gestation and animal.expected_calving_date:
        to_calving = days_until(animal.expected_calving_date, today=today)

    gestation = None
    if in_gestation and animal.insemination_date:
        gestation = gestation_days(animal.insemination_date, today=today)

    # lastUpdated doubles as the dry-off anchor; any edit while Dry restarts it
    in_dry = None
    if status is ReproductiveStatus.DRY:
        in_dry = days_since(animal.last_updated, today=today)

    since_calving = None
    if animal.calving_date and status in (ReproductiveStatus.NEWLY_CALVED, ReproductiveStatus.OPEN):
        since_calving = days_since(animal.calving_date, today=today)

    return BreedingSchedule(
        days_to_pregnancy_check=to_check,
        days_to_calving=to_calving,
        gestation_days=gestation,
        days_in_dry=in_dry,
        days_since_calving=since_calving,
        needs_dry_off=(
            status is ReproductiveStatus.PREGNANT
            and gestation is not None
            and gestation >= DRY_OFF_GESTATION_DAYS
        ),
    )
