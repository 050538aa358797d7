from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.errors import InfrastructureError
from src.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """One session and one transaction per ``async with`` block."""

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.animals = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from src.infrastructure.repos.animals_sqlalchemy import AnimalsSQLAlchemyRepository

        self.animals = AnimalsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.animals = None

    async def commit(self) -> None:
        if not self.session:
            return
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise InfrastructureError("Transaction was rejected by the database") from exc

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
