from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from src.application.errors import InfrastructureError
from src.application.herd_store import HerdStore
from src.domain.models.animal import Animal
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus

TODAY = date(2026, 3, 1)
NOW = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


def days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


def make_animal(
    tag_number: str = "100",
    *,
    category: AnimalCategory = AnimalCategory.MILKING,
    status: ReproductiveStatus = ReproductiveStatus.OPEN,
    farm: FarmLocation = FarmLocation.MILKING_FARM,
    **fields,
) -> Animal:
    fields.setdefault("id", f"id-{tag_number}")
    fields.setdefault("last_updated", NOW)
    return Animal(tag_number=tag_number, category=category, status=status, farm=farm, **fields)


class RecordingImageStore:
    def __init__(self) -> None:
        self.stored: list[tuple[bytes, str, str | None]] = []

    async def store(self, data: bytes, *, content_type: str, filename: str | None = None) -> str:
        self.stored.append((data, content_type, filename))
        return f"https://images.test/animals/{len(self.stored)}.jpg"


class InMemoryAnimals:
    """Repository double keyed by (owner, id); ``fail`` makes every write raise."""

    def __init__(self, animals: list[Animal] | None = None, *, owner_id: str = "owner-1") -> None:
        self.rows: dict[tuple[str, str], Animal] = {(owner_id, a.id): a for a in animals or ()}
        self.fail = False
        self.batches: list[list[str]] = []

    async def load_all(self, owner_id: str) -> list[Animal]:
        return sorted(
            (a for (owner, _), a in self.rows.items() if owner == owner_id),
            key=lambda a: a.last_updated,
            reverse=True,
        )

    async def upsert_one(self, owner_id: str, animal: Animal) -> None:
        await self.upsert_batch(owner_id, [animal])

    async def upsert_batch(self, owner_id: str, animals: list[Animal]) -> None:
        if self.fail:
            raise InfrastructureError("write rejected")
        self.batches.append([a.id for a in animals])
        for animal in animals:
            self.rows[(owner_id, animal.id)] = animal

    async def delete_one(self, owner_id: str, animal_id: str) -> bool:
        if self.fail:
            raise InfrastructureError("delete rejected")
        return self.rows.pop((owner_id, animal_id), None) is not None


class FakeUnitOfWork:
    def __init__(self, animals: InMemoryAnimals) -> None:
        self.animals = animals
        self.commits = 0

    async def __aenter__(self) -> FakeUnitOfWork:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        return None


async def make_store(
    animals: list[Animal] | None = None, *, owner_id: str = "owner-1"
) -> tuple[HerdStore, InMemoryAnimals]:
    repo = InMemoryAnimals(animals, owner_id=owner_id)
    store = HerdStore(lambda: FakeUnitOfWork(repo), owner_id)
    await store.load()
    return store, repo
