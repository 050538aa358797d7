from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from src.application.errors import ConflictError, ValidationError
from src.application.herd_store import HerdStore
from src.domain.errors import DuplicateTagError
from src.domain.models.animal import Animal
from src.domain.models.history_event import HistoryEvent, HistoryEventType, PregnancyCheckResult
from src.domain.services import lifecycle
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus
from src.utils.datetime_tz import parse_datetime, to_local_date, utc_now
from src.utils.ids import new_id

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ImportResult:
    imported: list[Animal]
    skipped: list[dict[str, Any]]


def _text(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _event_from_record(record: Mapping[str, Any]) -> HistoryEvent:
    try:
        event_type = HistoryEventType(record.get("type") or HistoryEventType.GENERAL)
    except ValueError:
        event_type = HistoryEventType.GENERAL
    try:
        result = PregnancyCheckResult(record["result"]) if record.get("result") else None
    except ValueError:
        result = None
    return HistoryEvent(
        id=_text(record.get("id")) or new_id(),
        type=event_type,
        date=parse_datetime(record.get("date")) or utc_now(),
        details=record.get("details") or "",
        remarks=_text(record.get("remarks")),
        medications=_text(record.get("medications")),
        semen=_text(record.get("semen")),
        result=result,
        calf_id=_text(record.get("calfId")),
        recorded_by=_text(record.get("recordedBy")),
    )


def animal_from_record(record: Mapping[str, Any]) -> Animal:
    """Build an Animal from a record exported by the previous application.

    Keys are camelCase, optional dates may be empty strings and the history
    may be missing. The status is coerced into the category's legal set.
    """
    tag_number = _text(record.get("tagNumber"))
    if not tag_number:
        raise ValueError("tagNumber is required")
    category = AnimalCategory(record.get("category") or AnimalCategory.MILKING)
    raw_status = record.get("status")
    status = ReproductiveStatus(raw_status) if raw_status else None
    history = tuple(_event_from_record(e) for e in record.get("history") or ())
    return Animal(
        id=_text(record.get("id")) or new_id(),
        tag_number=tag_number,
        category=category,
        status=lifecycle.coerce(category, status),
        farm=FarmLocation(record.get("farm") or FarmLocation.MILKING_FARM),
        insemination_date=to_local_date(record.get("inseminationDate") or None),
        semen_name=_text(record.get("semenName")),
        expected_calving_date=to_local_date(record.get("expectedCalvingDate") or None),
        calving_date=to_local_date(record.get("calvingDate") or None),
        mother_id=_text(record.get("motherId")),
        calves_ids=tuple(record.get("calvesIds") or ()),
        remarks=_text(record.get("remarks")),
        medications=_text(record.get("medications")),
        image=_text(record.get("image")),
        images=tuple(record.get("images") or ()),
        last_updated=parse_datetime(record.get("lastUpdated")) or utc_now(),
        history=history,
    )


async def execute(
    store: HerdStore, records: list[Mapping[str, Any]], *, strict: bool = False
) -> ImportResult:
    """Upsert legacy records as one batch.

    Records that do not parse, or whose tag is already held by another
    active animal, are reported back in ``skipped``; with ``strict`` the
    first such record aborts the whole import.
    """
    animals: list[Animal] = []
    skipped: list[dict[str, Any]] = []
    # Upsert by id: an imported record replaces the stored one with its id
    herd = {a.id: a for a in store.snapshot}
    for index, record in enumerate(records):
        try:
            animal = animal_from_record(record)
            if animal.is_active:
                lifecycle.ensure_unique_tag(animal.tag_number, herd.values(), exclude_id=animal.id)
        except DuplicateTagError as exc:
            if strict:
                raise ConflictError(
                    f"Record {index} could not be imported: {exc.message}",
                    details={"index": index, "tag_number": exc.tag_number},
                ) from exc
            skipped.append({"index": index, "reason": exc.message})
            continue
        except ValueError as exc:
            if strict:
                raise ValidationError(
                    f"Record {index} could not be imported: {exc}", details={"index": index}
                ) from exc
            skipped.append({"index": index, "reason": str(exc)})
            continue
        herd[animal.id] = animal
        animals.append(animal)
    if animals:
        await store.commit(animals)
    logger.info(
        "Imported %d legacy record(s) for owner %s, skipped %d",
        len(animals),
        store.owner_id,
        len(skipped),
    )
    return ImportResult(imported=animals, skipped=skipped)
