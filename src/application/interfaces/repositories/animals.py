from __future__ import annotations

from typing import Protocol

from src.domain.models.animal import Animal


class AnimalRepository(Protocol):
    async def load_all(self, owner_id: str) -> list[Animal]: ...

    async def upsert_one(self, owner_id: str, animal: Animal) -> None: ...

    async def upsert_batch(self, owner_id: str, animals: list[Animal]) -> None: ...

    async def delete_one(self, owner_id: str, animal_id: str) -> bool: ...
