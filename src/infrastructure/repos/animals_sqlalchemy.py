from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import InfrastructureError
from src.application.interfaces.repositories.animals import AnimalRepository
from src.domain.models.animal import Animal
from src.domain.models.history_event import HistoryEvent, HistoryEventType, PregnancyCheckResult
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus
from src.infrastructure.db.orm.animal import AnimalORM
from src.utils.datetime_tz import parse_datetime, to_local_date, utc_now

logger = logging.getLogger(__name__)


def _clean_date(value: date | str | None) -> date | None:
    # Typed columns take NULL, never an empty string
    if value is None or value == "":
        return None
    return to_local_date(value)


def _aware(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; they were stored as UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def event_to_dict(event: HistoryEvent) -> dict[str, Any]:
    return {
        "id": event.id,
        "type": event.type.value,
        "date": event.date.isoformat(),
        "details": event.details,
        "remarks": event.remarks,
        "medications": event.medications,
        "semen": event.semen,
        "result": event.result.value if event.result else None,
        "calf_id": event.calf_id,
        "recorded_by": event.recorded_by,
    }


def event_from_dict(data: dict[str, Any]) -> HistoryEvent:
    return HistoryEvent(
        id=data["id"],
        type=HistoryEventType(data.get("type") or HistoryEventType.GENERAL),
        date=parse_datetime(data.get("date")) or utc_now(),
        details=data.get("details") or "",
        remarks=data.get("remarks"),
        medications=data.get("medications"),
        semen=data.get("semen"),
        result=PregnancyCheckResult(data["result"]) if data.get("result") else None,
        calf_id=data.get("calf_id"),
        recorded_by=data.get("recorded_by"),
    )


class AnimalsSQLAlchemyRepository(AnimalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> Animal:
        return Animal(
            id=orm.id,
            tag_number=orm.tag_number,
            category=AnimalCategory(orm.category),
            status=ReproductiveStatus(orm.status),
            farm=FarmLocation(orm.farm),
            insemination_date=orm.insemination_date,
            semen_name=orm.semen_name,
            expected_calving_date=orm.expected_calving_date,
            calving_date=orm.calving_date,
            mother_id=orm.mother_id,
            calves_ids=tuple(orm.calves_ids or ()),
            remarks=orm.remarks,
            medications=orm.medications,
            image=orm.image,
            images=tuple(orm.images or ()),
            last_updated=_aware(orm.last_updated) or utc_now(),
            history=tuple(event_from_dict(e) for e in orm.history or ()),
        )

    def _to_orm(self, owner_id: str, animal: Animal) -> AnimalORM:
        return AnimalORM(
            owner_id=owner_id,
            id=animal.id,
            tag_number=animal.tag_number,
            category=animal.category.value,
            status=animal.status.value,
            farm=animal.farm.value,
            insemination_date=_clean_date(animal.insemination_date),
            semen_name=animal.semen_name,
            expected_calving_date=_clean_date(animal.expected_calving_date),
            calving_date=_clean_date(animal.calving_date),
            mother_id=animal.mother_id,
            calves_ids=list(animal.calves_ids),
            remarks=animal.remarks,
            medications=animal.medications,
            image=animal.image,
            images=list(animal.images),
            last_updated=animal.last_updated.astimezone(timezone.utc),
            history=[event_to_dict(e) for e in animal.history],
        )

    async def load_all(self, owner_id: str) -> list[Animal]:
        stmt = (
            select(AnimalORM)
            .where(AnimalORM.owner_id == owner_id)
            .order_by(AnimalORM.last_updated.desc())
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise InfrastructureError("Could not load animals") from exc
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def upsert_one(self, owner_id: str, animal: Animal) -> None:
        await self.upsert_batch(owner_id, [animal])

    async def upsert_batch(self, owner_id: str, animals: list[Animal]) -> None:
        # merge() is an upsert by primary key: the last write wins
        try:
            for animal in animals:
                await self.session.merge(self._to_orm(owner_id, animal))
            await self.session.flush()
        except SQLAlchemyError as exc:
            logger.error("Upsert of %d animal(s) rejected: %s", len(animals), exc)
            raise InfrastructureError(
                "Could not save animals", details={"animal_ids": [a.id for a in animals]}
            ) from exc

    async def delete_one(self, owner_id: str, animal_id: str) -> bool:
        stmt = delete(AnimalORM).where(
            AnimalORM.owner_id == owner_id, AnimalORM.id == animal_id
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise InfrastructureError("Could not delete animal") from exc
        return (result.rowcount or 0) > 0
