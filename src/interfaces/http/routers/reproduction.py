from __future__ import annotations

from fastapi import APIRouter, Depends, status

from src.application.herd_store import HerdStore
from src.application.use_cases.reproduction import (
    dry_off,
    record_calving,
    record_insemination,
    record_pregnancy_check,
)
from src.interfaces.http.deps import get_herd_store
from src.interfaces.http.routers.animals import to_response
from src.interfaces.http.schemas.animals import AnimalResponse
from src.interfaces.http.schemas.reproduction import (
    CalvingCreate,
    CalvingResponse,
    DryOffRequest,
    InseminationCreate,
    PregnancyCheckCreate,
)

router = APIRouter(prefix="/animals/{animal_id}", tags=["reproduction"])


@router.post("/inseminations", response_model=AnimalResponse)
async def record_insemination_endpoint(
    animal_id: str,
    payload: InseminationCreate,
    store: HerdStore = Depends(get_herd_store),
) -> AnimalResponse:
    animal = await record_insemination.execute(
        store,
        animal_id,
        record_insemination.RecordInseminationInput(
            semen_name=payload.semen_name,
            insemination_date=payload.insemination_date,
            remarks=payload.remarks,
        ),
    )
    return to_response(animal)


@router.post("/pregnancy-checks", response_model=AnimalResponse)
async def record_pregnancy_check_endpoint(
    animal_id: str,
    payload: PregnancyCheckCreate,
    store: HerdStore = Depends(get_herd_store),
) -> AnimalResponse:
    animal = await record_pregnancy_check.execute(
        store,
        animal_id,
        record_pregnancy_check.RecordPregnancyCheckInput(
            result=payload.result,
            checked_on=payload.checked_on,
            remarks=payload.remarks,
        ),
    )
    return to_response(animal)


@router.post("/dry-off", response_model=AnimalResponse)
async def dry_off_endpoint(
    animal_id: str,
    payload: DryOffRequest | None = None,
    store: HerdStore = Depends(get_herd_store),
) -> AnimalResponse:
    payload = payload or DryOffRequest()
    animal = await dry_off.execute(
        store, animal_id, dry_off.DryOffInput(force=payload.force, remarks=payload.remarks)
    )
    return to_response(animal)


@router.post("/calvings", response_model=CalvingResponse, status_code=status.HTTP_201_CREATED)
async def record_calving_endpoint(
    animal_id: str,
    payload: CalvingCreate,
    store: HerdStore = Depends(get_herd_store),
) -> CalvingResponse:
    result = await record_calving.execute(
        store,
        animal_id,
        record_calving.RecordCalvingInput(
            calf_tag=payload.calf_tag,
            calf_gender=payload.calf_gender,
            calving_date=payload.calving_date,
            remarks=payload.remarks,
        ),
    )
    return CalvingResponse(mother=to_response(result.mother), calf=to_response(result.calf))
