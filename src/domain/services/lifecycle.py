"""Reproductive lifecycle rules.

Every transition takes the current animal (and, where a rule needs it, the
rest of the herd) and returns new values; nothing is mutated in place. The
returned :class:`Transition` lists every record that must be persisted
together.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime

from src.domain.errors import DuplicateTagError, TransitionError
from src.domain.models.animal import Animal
from src.domain.models.history_event import HistoryEvent, PregnancyCheckResult
from src.domain.services import breeding_calendar, ledger
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import (
    FEMALE_STATUSES,
    MALE_STATUSES,
    TERMINAL_STATUSES,
    ReproductiveStatus,
)
from src.utils.datetime_tz import local_today, utc_now
from src.utils.ids import new_id

INSEMINABLE_STATUSES = frozenset({ReproductiveStatus.OPEN, ReproductiveStatus.NEWLY_CALVED})
CALVING_STATUSES = frozenset({ReproductiveStatus.PREGNANT, ReproductiveStatus.DRY})


@dataclass(slots=True, frozen=True)
class Transition:
    animal: Animal
    calf: Animal | None = None
    related: tuple[Animal, ...] = ()

    @property
    def changed(self) -> list[Animal]:
        # Calf first so a partial reader never sees a mother pointing at nothing
        records = [self.calf] if self.calf else []
        records.append(self.animal)
        records.extend(self.related)
        return records


@dataclass(slots=True)
class NewAnimal:
    tag_number: str
    category: AnimalCategory = AnimalCategory.MILKING
    status: ReproductiveStatus | None = None
    farm: FarmLocation = FarmLocation.MILKING_FARM
    insemination_date: date | None = None
    semen_name: str | None = None
    expected_calving_date: date | None = None
    calving_date: date | None = None
    mother_id: str | None = None
    remarks: str | None = None
    medications: str | None = None


@dataclass(slots=True)
class AnimalChanges:
    """Fields a manual edit may set. ``None`` means "leave unchanged"."""

    tag_number: str | None = None
    category: AnimalCategory | None = None
    status: ReproductiveStatus | None = None
    farm: FarmLocation | None = None
    insemination_date: date | None = None
    semen_name: str | None = None
    calving_date: date | None = None
    mother_id: str | None = None
    remarks: str | None = None
    medications: str | None = None


def legal_statuses_for(category: AnimalCategory) -> frozenset[ReproductiveStatus]:
    base = MALE_STATUSES if AnimalCategory(category).is_male else FEMALE_STATUSES
    return base | TERMINAL_STATUSES


def default_status_for(category: AnimalCategory) -> ReproductiveStatus:
    if AnimalCategory(category).is_male:
        return ReproductiveStatus.OTHER
    return ReproductiveStatus.OPEN


def coerce(category: AnimalCategory, status: ReproductiveStatus | None) -> ReproductiveStatus:
    """Return ``status`` if legal for the category's gender class, else its default."""
    if status is not None and status in legal_statuses_for(category):
        return status
    return default_status_for(category)


def _normalize_tag(tag_number: str) -> str:
    return tag_number.strip().lower()


def ensure_unique_tag(
    tag_number: str, animals: Iterable[Animal], *, exclude_id: str | None = None
) -> None:
    wanted = _normalize_tag(tag_number)
    if not wanted:
        raise TransitionError("Tag number is required")
    for other in animals:
        if other.id == exclude_id or not other.is_active:
            continue
        if _normalize_tag(other.tag_number) == wanted:
            raise DuplicateTagError(tag_number)


def _require_female(animal: Animal, action: str) -> None:
    if animal.is_male:
        raise TransitionError(f"Cannot {action} a male animal ({animal.category.value})")


def _require_status(animal: Animal, allowed: Iterable[ReproductiveStatus], action: str) -> None:
    allowed = frozenset(allowed)
    if animal.status not in allowed:
        expected = ", ".join(sorted(s.value for s in allowed))
        raise TransitionError(
            f"Cannot {action} animal {animal.tag_number} in status {animal.status.value}"
            f" (expected {expected})"
        )


def register(
    data: NewAnimal, animals: Iterable[Animal], *, now: datetime | None = None
) -> Transition:
    population = list(animals)
    ensure_unique_tag(data.tag_number, population)
    now = now or utc_now()
    category = AnimalCategory(data.category)
    status = coerce(category, data.status)
    expected = data.expected_calving_date
    if status in CALVING_STATUSES and data.insemination_date:
        expected = breeding_calendar.expected_calving_date(data.insemination_date)

    animal = Animal(
        id=new_id(),
        tag_number=data.tag_number.strip(),
        category=category,
        status=status,
        farm=FarmLocation(data.farm),
        insemination_date=data.insemination_date,
        semen_name=data.semen_name or None,
        expected_calving_date=expected,
        calving_date=data.calving_date,
        mother_id=data.mother_id or None,
        remarks=data.remarks or None,
        medications=data.medications or None,
        last_updated=now,
    )
    animal = ledger.append(animal, HistoryEvent.general("Animal registered", on=now), now=now)

    related: tuple[Animal, ...] = ()
    mother = next((a for a in population if a.id == animal.mother_id), None)
    if mother is not None and animal.id not in mother.calves_ids:
        related = (replace(mother, calves_ids=(*mother.calves_ids, animal.id), last_updated=now),)
    return Transition(animal=animal, related=related)


def record_insemination(
    animal: Animal,
    *,
    semen_name: str,
    insemination_date: date,
    remarks: str | None = None,
    now: datetime | None = None,
) -> Transition:
    _require_female(animal, "inseminate")
    _require_status(animal, INSEMINABLE_STATUSES, "inseminate")
    if not semen_name or not semen_name.strip():
        raise TransitionError("Semen name is required to record an insemination")
    semen_name = semen_name.strip()
    now = now or utc_now()
    updated = replace(
        animal,
        status=ReproductiveStatus.INSEMINATED,
        insemination_date=insemination_date,
        semen_name=semen_name,
        expected_calving_date=None,
    )
    event = HistoryEvent.insemination(semen=semen_name, on=insemination_date, remarks=remarks)
    return Transition(animal=ledger.append(updated, event, now=now))


def record_pregnancy_check(
    animal: Animal,
    *,
    result: PregnancyCheckResult,
    checked_on: date | None = None,
    remarks: str | None = None,
    now: datetime | None = None,
) -> Transition:
    _require_status(animal, {ReproductiveStatus.INSEMINATED}, "pregnancy-check")
    result = PregnancyCheckResult(result)
    now = now or utc_now()
    checked_on = checked_on or local_today()
    interval = breeding_calendar.pregnancy_check_interval(animal.category)

    if result is PregnancyCheckResult.POSITIVE:
        expected = breeding_calendar.expected_calving_date(animal.insemination_date)
        if expected is None:
            raise TransitionError(
                f"Animal {animal.tag_number} has no insemination date to date the pregnancy from"
            )
        updated = replace(
            animal, status=ReproductiveStatus.PREGNANT, expected_calving_date=expected
        )
        event = HistoryEvent.pregnancy_check(
            result=result,
            details=f"Confirmed PREGNANT after {interval}-day check.",
            on=checked_on,
            semen=animal.semen_name,
            remarks=remarks,
        )
    else:
        updated = replace(
            animal,
            status=ReproductiveStatus.OPEN,
            insemination_date=None,
            semen_name=None,
            expected_calving_date=None,
        )
        event = HistoryEvent.pregnancy_check(
            result=result,
            details=f"Marked OPEN after {interval}-day check.",
            on=checked_on,
            remarks=remarks,
        )
    return Transition(animal=ledger.append(updated, event, now=now))


def dry_off(
    animal: Animal,
    *,
    force: bool = False,
    remarks: str | None = None,
    today: date | None = None,
    now: datetime | None = None,
) -> Transition:
    _require_status(animal, {ReproductiveStatus.PREGNANT}, "dry off")
    gestation = breeding_calendar.gestation_days(animal.insemination_date, today=today)
    threshold = breeding_calendar.DRY_OFF_GESTATION_DAYS
    if not force and gestation is not None and gestation < threshold:
        raise TransitionError(
            f"Animal {animal.tag_number} is at {gestation} days of gestation;"
            f" dry-off is due from {threshold} days"
        )
    now = now or utc_now()
    updated = replace(animal, status=ReproductiveStatus.DRY)
    event = HistoryEvent.general(
        "Animal shifted to DRY status after 7.5 months of gestation.", on=now, remarks=remarks
    )
    return Transition(animal=ledger.append(updated, event, now=now))


def record_calving(
    mother: Animal,
    animals: Iterable[Animal],
    *,
    calf_tag: str,
    calf_gender: str,
    calving_date: date,
    remarks: str | None = None,
    now: datetime | None = None,
) -> Transition:
    _require_female(mother, "record a calving for")
    _require_status(mother, CALVING_STATUSES, "record a calving for")
    ensure_unique_tag(calf_tag, animals)
    try:
        calf_category = AnimalCategory.for_calf(calf_gender)
    except ValueError as exc:
        raise TransitionError(str(exc)) from exc
    now = now or utc_now()
    prior_semen = mother.semen_name
    prior_insemination = mother.insemination_date

    calf = Animal(
        id=new_id(),
        tag_number=calf_tag.strip(),
        category=calf_category,
        status=coerce(calf_category, ReproductiveStatus.OPEN),
        farm=mother.farm,
        mother_id=mother.id,
        last_updated=now,
    )
    calf = ledger.append(
        calf,
        HistoryEvent.general(
            f"Born to Mother Tag: {mother.tag_number}", on=calving_date, semen=prior_semen
        ),
        now=now,
    )

    updated_mother = replace(
        mother,
        status=ReproductiveStatus.NEWLY_CALVED,
        calving_date=calving_date,
        insemination_date=None,
        expected_calving_date=None,
        semen_name=None,
        calves_ids=(*mother.calves_ids, calf.id),
    )
    updated_mother = ledger.append(
        updated_mother,
        HistoryEvent.calving(
            calf_id=calf.id,
            calf_tag=calf.tag_number,
            calf_category=calf_category.value,
            on=calving_date,
            semen=prior_semen,
            insemination_date=prior_insemination,
            remarks=remarks,
        ),
        now=now,
    )
    return Transition(animal=updated_mother, calf=calf)


def mark_sold(
    animal: Animal, *, remarks: str | None = None, now: datetime | None = None
) -> Transition:
    if not animal.is_active:
        raise TransitionError(f"Animal {animal.tag_number} is already sold")
    now = now or utc_now()
    updated = replace(animal, status=ReproductiveStatus.SOLD)
    event = HistoryEvent.general(
        f"Animal marked as Sold (was {animal.status.value})", on=now, remarks=remarks
    )
    return Transition(animal=ledger.append(updated, event, now=now))


def shift_farm(
    animal: Animal, *, remarks: str | None = None, now: datetime | None = None
) -> Transition:
    now = now or utc_now()
    target = animal.farm.other()
    updated = replace(animal, farm=target)
    event = HistoryEvent.farm_shift(
        from_farm=animal.farm.value, to_farm=target.value, on=now, remarks=remarks
    )
    return Transition(animal=ledger.append(updated, event, now=now))


def record_medication(
    animal: Animal,
    *,
    medications: str,
    given_on: date | None = None,
    remarks: str | None = None,
    now: datetime | None = None,
) -> Transition:
    if not medications or not medications.strip():
        raise TransitionError("Medication text is required")
    now = now or utc_now()
    updated = replace(animal, medications=medications.strip())
    event = HistoryEvent.medication(
        medications=medications.strip(), on=given_on or now, remarks=remarks
    )
    return Transition(animal=ledger.append(updated, event, now=now))


def edit(
    animal: Animal,
    changes: AnimalChanges,
    animals: Iterable[Animal],
    *,
    now: datetime | None = None,
) -> Transition:
    """Apply a manual edit.

    At most one ledger entry is written per edit: a status change wins over
    an insemination-data change, which wins over a medication change.
    """
    population = list(animals)
    now = now or utc_now()
    fields: dict = {}

    tag_number = animal.tag_number
    if changes.tag_number is not None and changes.tag_number.strip() != animal.tag_number:
        tag_number = changes.tag_number.strip()
        fields["tag_number"] = tag_number
    for name in ("farm", "calving_date", "mother_id", "remarks"):
        value = getattr(changes, name)
        if value is not None:
            fields[name] = value
    if changes.mother_id is not None and changes.mother_id == animal.id:
        raise TransitionError("An animal cannot be its own mother")

    category = AnimalCategory(changes.category or animal.category)
    requested_status = changes.status or animal.status
    status = coerce(category, requested_status)
    fields["category"] = category
    fields["status"] = status
    # Leaving Sold re-enters the active herd, where the tag must be free again
    if status is not ReproductiveStatus.SOLD and (
        "tag_number" in fields or not animal.is_active
    ):
        ensure_unique_tag(tag_number, population, exclude_id=animal.id)

    insemination_date = animal.insemination_date
    semen_name = animal.semen_name
    if changes.insemination_date is not None:
        insemination_date = changes.insemination_date
    if changes.semen_name is not None:
        semen_name = changes.semen_name.strip() or None
    insemination_changed = (
        insemination_date != animal.insemination_date or semen_name != animal.semen_name
    )
    fields["insemination_date"] = insemination_date
    fields["semen_name"] = semen_name
    if status in CALVING_STATUSES and insemination_date and (
        insemination_changed or status is not animal.status or not animal.expected_calving_date
    ):
        fields["expected_calving_date"] = breeding_calendar.expected_calving_date(
            insemination_date
        )

    medication_changed = (
        changes.medications is not None and changes.medications != (animal.medications or "")
    )
    if changes.medications is not None:
        fields["medications"] = changes.medications or None

    updated = replace(animal, **fields, last_updated=now)

    if status is not animal.status:
        event = HistoryEvent.general(
            f"Status manually changed to: {status.value}", on=now, remarks=changes.remarks
        )
        updated = ledger.append(updated, event, now=now)
    elif insemination_changed and semen_name:
        event = HistoryEvent.insemination(
            semen=semen_name,
            on=insemination_date or now,
            remarks=changes.remarks,
            details=f"Insemination details updated - Inseminated with {semen_name}",
        )
        updated = ledger.append(updated, event, now=now)
    elif medication_changed and changes.medications:
        event = HistoryEvent.medication(
            medications=changes.medications, on=now, remarks=changes.remarks
        )
        updated = ledger.append(updated, event, now=now)

    related: list[Animal] = []
    new_mother_id = fields.get("mother_id")
    if new_mother_id and new_mother_id != animal.mother_id:
        for other in population:
            if other.id == animal.mother_id and animal.id in other.calves_ids:
                related.append(
                    replace(
                        other,
                        calves_ids=tuple(c for c in other.calves_ids if c != animal.id),
                        last_updated=now,
                    )
                )
            elif other.id == new_mother_id and animal.id not in other.calves_ids:
                related.append(
                    replace(other, calves_ids=(*other.calves_ids, animal.id), last_updated=now)
                )
    return Transition(animal=updated, related=tuple(related))
