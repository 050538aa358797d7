from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from src.utils.datetime_tz import format_date, parse_datetime, utc_now
from src.utils.ids import new_id


class HistoryEventType(str, Enum):
    INSEMINATION = "INSEMINATION"
    PREGNANCY_CHECK = "PREGNANCY_CHECK"
    CALVING = "CALVING"
    MEDICATION = "MEDICATION"
    GENERAL = "GENERAL"
    FARM_SHIFT = "FARM_SHIFT"


class PregnancyCheckResult(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"


def _event_date(value: date | datetime | str | None) -> datetime:
    parsed = parse_datetime(value)
    return parsed if parsed is not None else utc_now()


@dataclass(slots=True, frozen=True)
class HistoryEvent:
    """One immutable fact in an animal's ledger.

    ``details`` is the human-readable summary. It repeats the structured
    fields in a fixed wording so that older readers which only parse text
    keep working; new code reads the structured fields.
    """

    id: str
    type: HistoryEventType
    date: datetime
    details: str
    remarks: str | None = None
    medications: str | None = None
    semen: str | None = None
    result: PregnancyCheckResult | None = None
    calf_id: str | None = None
    recorded_by: str | None = None

    @classmethod
    def general(
        cls,
        details: str,
        *,
        on: date | datetime | str | None = None,
        remarks: str | None = None,
        semen: str | None = None,
    ) -> HistoryEvent:
        return cls(
            id=new_id(),
            type=HistoryEventType.GENERAL,
            date=_event_date(on),
            details=details,
            remarks=remarks or None,
            semen=semen or None,
        )

    @classmethod
    def insemination(
        cls,
        *,
        semen: str,
        on: date | datetime | str,
        remarks: str | None = None,
        details: str | None = None,
    ) -> HistoryEvent:
        if not semen:
            raise ValueError("Insemination events require a semen name")
        when = _event_date(on)
        return cls(
            id=new_id(),
            type=HistoryEventType.INSEMINATION,
            date=when,
            details=details or f"Insemination on {format_date(when)} - Inseminated with {semen}",
            remarks=remarks or None,
            semen=semen,
        )

    @classmethod
    def pregnancy_check(
        cls,
        *,
        result: PregnancyCheckResult,
        details: str,
        on: date | datetime | str | None = None,
        semen: str | None = None,
        remarks: str | None = None,
    ) -> HistoryEvent:
        return cls(
            id=new_id(),
            type=HistoryEventType.PREGNANCY_CHECK,
            date=_event_date(on),
            details=details,
            remarks=remarks or None,
            semen=semen or None,
            result=PregnancyCheckResult(result),
        )

    @classmethod
    def calving(
        cls,
        *,
        calf_id: str,
        calf_tag: str,
        calf_category: str,
        on: date | datetime | str,
        semen: str | None = None,
        insemination_date: date | None = None,
        remarks: str | None = None,
    ) -> HistoryEvent:
        if not calf_id:
            raise ValueError("Calving events require the calf id")
        parts = [f"Official Calving Recorded: Produced {calf_category} (Tag: {calf_tag})"]
        # Prior breeding data survives here after the mother's fields are cleared
        if semen:
            parts.append(f"Semen/Sire: {semen}")
        if insemination_date:
            parts.append(f"Insemination Date: {format_date(insemination_date)}")
        return cls(
            id=new_id(),
            type=HistoryEventType.CALVING,
            date=_event_date(on),
            details=" | ".join(parts),
            remarks=remarks or None,
            semen=semen or None,
            calf_id=calf_id,
        )

    @classmethod
    def medication(
        cls,
        *,
        medications: str,
        on: date | datetime | str | None = None,
        remarks: str | None = None,
    ) -> HistoryEvent:
        if not medications:
            raise ValueError("Medication events require the medication given")
        return cls(
            id=new_id(),
            type=HistoryEventType.MEDICATION,
            date=_event_date(on),
            details=f"Medication recorded: {medications}",
            remarks=remarks or None,
            medications=medications,
        )

    @classmethod
    def farm_shift(
        cls,
        *,
        from_farm: str,
        to_farm: str,
        on: date | datetime | str | None = None,
        remarks: str | None = None,
    ) -> HistoryEvent:
        return cls(
            id=new_id(),
            type=HistoryEventType.FARM_SHIFT,
            date=_event_date(on),
            details=f"Shifted from {from_farm} to {to_farm}",
            remarks=remarks or None,
        )
