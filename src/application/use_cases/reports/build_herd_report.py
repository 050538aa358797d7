"""Herd inventory report.

All filtering, counting and cell formatting happens here; the renderer
only lays out the precomputed rows.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from src.application.herd_store import HerdStore
from src.domain.models.animal import Animal
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus
from src.utils.datetime_tz import format_date, utc_now

if TYPE_CHECKING:
    from src.application.interfaces.report_renderer import HerdReportRenderer

logger = logging.getLogger(__name__)

FULL_INVENTORY_TITLE = "Full Inventory Summary"


@dataclass(slots=True)
class HerdReportInput:
    farm: FarmLocation | None = None
    status: ReproductiveStatus | None = None
    format: str = "pdf"


@dataclass(slots=True)
class RegistryRow:
    number: int
    tag_number: str
    category: str
    farm: str
    status: str
    notes: str
    semen_name: str
    insemination_date: str

    def cells(self) -> list[str]:
        return [
            str(self.number),
            self.tag_number,
            self.category,
            self.farm,
            self.status,
            self.notes,
        ]


@dataclass(slots=True)
class HerdReport:
    title: str
    farm_name: str
    proprietor_name: str
    generated_at: datetime
    total: int
    farm_counts: list[tuple[str, int]] = field(default_factory=list)
    category_counts: list[tuple[str, int]] = field(default_factory=list)
    status_counts: list[tuple[str, int]] = field(default_factory=list)
    rows: list[RegistryRow] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "farm_name": self.farm_name,
            "proprietor_name": self.proprietor_name,
            "generated_at": self.generated_at.isoformat(),
            "total": self.total,
            "farm_counts": dict(self.farm_counts),
            "category_counts": dict(self.category_counts),
            "status_counts": dict(self.status_counts),
            "rows": [
                {
                    "number": r.number,
                    "tag_number": r.tag_number,
                    "category": r.category,
                    "farm": r.farm,
                    "status": r.status,
                    "notes": r.notes,
                    "semen_name": r.semen_name,
                    "insemination_date": r.insemination_date,
                }
                for r in self.rows
            ],
        }


@dataclass(slots=True)
class HerdReportOutput:
    report: HerdReport
    content: str | None = None
    file_name: str | None = None


def report_title(status: ReproductiveStatus | None) -> str:
    if status is None:
        return FULL_INVENTORY_TITLE
    return f"{ReproductiveStatus(status).value} Herd Report"


def record_notes(animal: Animal) -> str:
    if animal.expected_calving_date:
        return f"Exp Calving: {format_date(animal.expected_calving_date)}"
    return animal.remarks or "--"


def _counts(values: list[Enum], order: type[Enum]) -> list[tuple[str, int]]:
    # Enum order, zero counts left out
    tally = Counter(values)
    return [(member.value, tally[member]) for member in order if tally[member]]


def build_report(
    animals: list[Animal],
    *,
    title: str,
    farm_name: str,
    proprietor_name: str,
    generated_at: datetime | None = None,
) -> HerdReport:
    rows = [
        RegistryRow(
            number=i,
            tag_number=a.tag_number,
            category=a.category.value,
            farm=a.farm.value,
            status=a.status.value,
            notes=record_notes(a),
            semen_name=a.semen_name or "--",
            insemination_date=format_date(a.insemination_date),
        )
        for i, a in enumerate(animals, start=1)
    ]
    return HerdReport(
        title=title,
        farm_name=farm_name,
        proprietor_name=proprietor_name,
        generated_at=generated_at or utc_now(),
        total=len(animals),
        farm_counts=_counts([a.farm for a in animals], FarmLocation),
        category_counts=_counts([a.category for a in animals], AnimalCategory),
        status_counts=_counts([a.status for a in animals], ReproductiveStatus),
        rows=rows,
    )


async def execute(
    store: HerdStore,
    payload: HerdReportInput,
    *,
    renderer: HerdReportRenderer,
    farm_name: str,
    proprietor_name: str,
) -> HerdReportOutput:
    animals = store.filter(farm=payload.farm, status=payload.status)
    report = build_report(
        animals,
        title=report_title(payload.status),
        farm_name=farm_name,
        proprietor_name=proprietor_name,
    )
    if payload.format == "json":
        return HerdReportOutput(report=report)

    content = renderer.render(report)
    stamp = report.generated_at.strftime("%Y%m%d")
    slug = report.title.lower().replace(" ", "_")
    logger.info(
        "Rendered %s with %d row(s) for owner %s", report.title, report.total, store.owner_id
    )
    return HerdReportOutput(report=report, content=content, file_name=f"{slug}_{stamp}.pdf")
