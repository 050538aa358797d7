from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from src.application.errors import AppError, NotFound, PersistenceError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.animal import Animal
from src.domain.services.lifecycle import Transition
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus

logger = logging.getLogger(__name__)


def _upsert(snapshot: tuple[Animal, ...], changed: Iterable[Animal]) -> tuple[Animal, ...]:
    animals = list(snapshot)
    index = {a.id: i for i, a in enumerate(animals)}
    for animal in changed:
        if animal.id in index:
            animals[index[animal.id]] = animal
        else:
            animals.insert(0, animal)
            index = {a.id: i for i, a in enumerate(animals)}
    return tuple(animals)


class HerdStore:
    """The owner's animal collection as the application sees it.

    Reads are served from an immutable snapshot. Writes are applied to the
    snapshot first and then persisted; when persistence rejects a write the
    snapshot is replaced with a fresh load and :class:`PersistenceError` is
    raised.
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork], owner_id: str) -> None:
        self._uow_factory = uow_factory
        self.owner_id = owner_id
        self._snapshot: tuple[Animal, ...] = ()
        self.loaded = False

    @property
    def snapshot(self) -> tuple[Animal, ...]:
        return self._snapshot

    async def load(self) -> tuple[Animal, ...]:
        async with self._uow_factory() as uow:
            animals = await uow.animals.load_all(self.owner_id)
        self._snapshot = tuple(animals)
        self.loaded = True
        return self._snapshot

    def find(self, animal_id: str) -> Animal | None:
        return next((a for a in self._snapshot if a.id == animal_id), None)

    def get(self, animal_id: str) -> Animal:
        animal = self.find(animal_id)
        if animal is None:
            raise NotFound(f"Animal {animal_id} not found")
        return animal

    def filter(
        self,
        *,
        farm: FarmLocation | None = None,
        status: ReproductiveStatus | None = None,
        search: str | None = None,
    ) -> list[Animal]:
        needle = (search or "").strip().lower()
        return [
            a
            for a in self._snapshot
            if (farm is None or a.farm == farm)
            and (status is None or a.status == status)
            and (not needle or needle in a.tag_number.lower())
        ]

    async def commit(self, change: Transition | Iterable[Animal]) -> list[Animal]:
        changed = change.changed if isinstance(change, Transition) else list(change)
        if not changed:
            return []
        self._snapshot = _upsert(self._snapshot, changed)
        try:
            async with self._uow_factory() as uow:
                if len(changed) == 1:
                    await uow.animals.upsert_one(self.owner_id, changed[0])
                else:
                    await uow.animals.upsert_batch(self.owner_id, changed)
                await uow.commit()
        except AppError as exc:
            logger.error(
                "Sync failed for %d animal(s) of owner %s: %s",
                len(changed),
                self.owner_id,
                exc.message,
            )
            await self._reconcile()
            raise PersistenceError(
                "Could not save changes; records were reloaded",
                details={"animal_ids": [a.id for a in changed]},
            ) from exc
        logger.info("Committed %d animal(s) for owner %s", len(changed), self.owner_id)
        return changed

    async def delete(self, animal_id: str) -> None:
        self.get(animal_id)
        self._snapshot = tuple(a for a in self._snapshot if a.id != animal_id)
        try:
            async with self._uow_factory() as uow:
                await uow.animals.delete_one(self.owner_id, animal_id)
                await uow.commit()
        except AppError as exc:
            logger.error("Delete failed for animal %s: %s", animal_id, exc.message)
            await self._reconcile()
            raise PersistenceError(
                "Could not delete the record; records were reloaded",
                details={"animal_ids": [animal_id]},
            ) from exc

    async def _reconcile(self) -> None:
        try:
            await self.load()
        except AppError as exc:
            logger.warning("Snapshot reload for owner %s failed: %s", self.owner_id, exc.message)
