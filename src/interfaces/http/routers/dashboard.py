from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from src.application.herd_store import HerdStore
from src.application.use_cases.dashboard import get_due_lists, get_herd_summary
from src.domain.models.animal import Animal
from src.domain.services import breeding_calendar
from src.domain.value_objects.farm_location import FarmLocation
from src.interfaces.http.deps import get_herd_store
from src.interfaces.http.schemas.dashboard import (
    DueAnimal,
    DueListsResponse,
    HerdSummaryResponse,
)
from src.utils.datetime_tz import local_today

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _due(animal: Animal, days: int | None) -> DueAnimal:
    return DueAnimal(
        id=animal.id,
        tag_number=animal.tag_number,
        category=animal.category,
        status=animal.status,
        farm=animal.farm,
        days=days,
    )


@router.get("/summary", response_model=HerdSummaryResponse)
async def get_summary(store: HerdStore = Depends(get_herd_store)) -> HerdSummaryResponse:
    summary = await get_herd_summary.execute(store)
    return HerdSummaryResponse(
        total=summary.total,
        sold=summary.sold,
        by_status={k.value: v for k, v in summary.by_status.items()},
        by_category={k.value: v for k, v in summary.by_category.items()},
        by_farm={k.value: v for k, v in summary.by_farm.items()},
    )


@router.get("/due-lists", response_model=DueListsResponse)
async def get_due(
    farm: FarmLocation | None = Query(None),
    as_of: date | None = Query(None, alias="date"),
    store: HerdStore = Depends(get_herd_store),
) -> DueListsResponse:
    today = as_of or local_today()
    lists = await get_due_lists.execute(store, farm=farm, today=today)
    return DueListsResponse(
        pregnancy_check=[
            _due(
                a,
                breeding_calendar.days_to_pregnancy_check(
                    a.insemination_date, a.category, today=today
                ),
            )
            for a in lists.pregnancy_check
        ],
        calving=[
            _due(a, breeding_calendar.days_until(a.expected_calving_date, today=today))
            for a in lists.calving
        ],
        dry_off=[
            _due(a, breeding_calendar.gestation_days(a.insemination_date, today=today))
            for a in lists.dry_off
        ],
        ready_for_insemination=[
            _due(a, breeding_calendar.days_since(a.calving_date, today=today))
            for a in lists.ready_for_insemination
        ],
        total=lists.total,
    )
