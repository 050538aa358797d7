from __future__ import annotations

import json
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Index, String, Text, TypeDecorator
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from src.infrastructure.db.base import Base


class StringList(TypeDecorator):
    """Stores a list of strings as ARRAY in PostgreSQL, JSON in SQLite."""

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(ARRAY(String))
        return dialect.type_descriptor(Text)

    def process_bind_param(self, value, dialect):
        if value is None:
            value = []
        if dialect.name == "postgresql":
            return list(value)
        return json.dumps(list(value))

    def process_result_value(self, value, dialect):
        if dialect.name == "postgresql":
            return value if value is not None else []
        return json.loads(value) if value else []


class AnimalORM(Base):
    __tablename__ = "animals"
    # Tag uniqueness is a lifecycle rule over active animals, not a table constraint
    __table_args__ = (Index("ix_animals_owner_tag", "owner_id", "tag_number"),)

    owner_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    tag_number: Mapped[str] = mapped_column(String(128), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    farm: Mapped[str] = mapped_column(String(32), nullable=False)

    insemination_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    semen_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    expected_calving_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    calving_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    mother_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    calves_ids: Mapped[list[str]] = mapped_column(StringList, nullable=False, default=list)

    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    medications: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    images: Mapped[list[str]] = mapped_column(StringList, nullable=False, default=list)

    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    history: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
