from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response, status

from src.application.errors import ValidationError
from src.application.herd_store import HerdStore
from src.application.interfaces.image_store import ImageStore
from src.application.use_cases.animals import (
    attach_image,
    create_animal,
    delete_animal,
    get_animal,
    get_lineage,
    import_animals,
    list_animals,
    list_history,
    mark_sold,
    record_medication,
    shift_farm,
    update_animal,
)
from src.domain.models.animal import Animal
from src.domain.models.history_event import HistoryEventType
from src.domain.services.lineage import Lineage
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus
from src.interfaces.http.deps import get_herd_store, get_image_store
from src.interfaces.http.schemas.animals import (
    AnimalCreate,
    AnimalProfileResponse,
    AnimalRef,
    AnimalResponse,
    AnimalsListResponse,
    AnimalUpdate,
    BreedingScheduleResponse,
    FarmShiftRequest,
    HistoryEntryResponse,
    ImportRequest,
    ImportResponse,
    LineageResponse,
    MarkSoldRequest,
    MedicationRequest,
)

router = APIRouter(prefix="/animals", tags=["animals"])


def to_response(animal: Animal) -> AnimalResponse:
    return AnimalResponse.model_validate(animal)


def lineage_response(lineage: Lineage) -> LineageResponse:
    return LineageResponse(
        mother=AnimalRef.model_validate(lineage.mother) if lineage.mother else None,
        calves=[AnimalRef.model_validate(c) for c in lineage.calves],
        sire=lineage.sire,
    )


@router.get("/", response_model=AnimalsListResponse)
async def list_animals_endpoint(
    farm: FarmLocation | None = Query(None),
    status_filter: ReproductiveStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, description="Case-insensitive tag search"),
    store: HerdStore = Depends(get_herd_store),
) -> AnimalsListResponse:
    result = await list_animals.execute(store, farm=farm, status=status_filter, search=search)
    return AnimalsListResponse(items=[to_response(a) for a in result.items], total=result.total)


@router.post("/", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
async def create_animal_endpoint(
    payload: AnimalCreate,
    store: HerdStore = Depends(get_herd_store),
) -> AnimalResponse:
    animal = await create_animal.execute(
        store, create_animal.CreateAnimalInput(**payload.model_dump())
    )
    return to_response(animal)


@router.post("/import", response_model=ImportResponse)
async def import_animals_endpoint(
    payload: ImportRequest,
    store: HerdStore = Depends(get_herd_store),
) -> ImportResponse:
    result = await import_animals.execute(store, payload.records, strict=payload.strict)
    return ImportResponse(
        imported=len(result.imported),
        skipped=result.skipped,
        items=[to_response(a) for a in result.imported],
    )


@router.get("/{animal_id}", response_model=AnimalProfileResponse)
async def get_animal_endpoint(
    animal_id: str,
    store: HerdStore = Depends(get_herd_store),
) -> AnimalProfileResponse:
    profile = await get_animal.execute(store, animal_id)
    return AnimalProfileResponse(
        animal=to_response(profile.animal),
        schedule=BreedingScheduleResponse.model_validate(profile.schedule),
        lineage=lineage_response(profile.lineage),
    )


@router.patch("/{animal_id}", response_model=AnimalResponse)
async def update_animal_endpoint(
    animal_id: str,
    payload: AnimalUpdate,
    store: HerdStore = Depends(get_herd_store),
) -> AnimalResponse:
    animal = await update_animal.execute(
        store, animal_id, update_animal.UpdateAnimalInput(**payload.model_dump())
    )
    return to_response(animal)


@router.delete("/{animal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_animal_endpoint(
    animal_id: str,
    store: HerdStore = Depends(get_herd_store),
) -> Response:
    await delete_animal.execute(store, animal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{animal_id}/history", response_model=list[HistoryEntryResponse])
async def list_history_endpoint(
    animal_id: str,
    event_type: HistoryEventType | None = Query(None, alias="type"),
    store: HerdStore = Depends(get_herd_store),
) -> list[HistoryEntryResponse]:
    entries = await list_history.execute(store, animal_id, event_type=event_type)
    return [
        HistoryEntryResponse.model_validate(entry.event).model_copy(
            update={"semen": entry.semen, "calf_tag": entry.calf_tag}
        )
        for entry in entries
    ]


@router.get("/{animal_id}/lineage", response_model=LineageResponse)
async def get_lineage_endpoint(
    animal_id: str,
    store: HerdStore = Depends(get_herd_store),
) -> LineageResponse:
    return lineage_response(await get_lineage.execute(store, animal_id))


@router.post("/{animal_id}/farm-shift", response_model=AnimalResponse)
async def shift_farm_endpoint(
    animal_id: str,
    payload: FarmShiftRequest | None = None,
    store: HerdStore = Depends(get_herd_store),
) -> AnimalResponse:
    remarks = payload.remarks if payload else None
    animal = await shift_farm.execute(store, animal_id, shift_farm.ShiftFarmInput(remarks))
    return to_response(animal)


@router.post("/{animal_id}/sold", response_model=AnimalResponse)
async def mark_sold_endpoint(
    animal_id: str,
    payload: MarkSoldRequest | None = None,
    store: HerdStore = Depends(get_herd_store),
) -> AnimalResponse:
    remarks = payload.remarks if payload else None
    animal = await mark_sold.execute(store, animal_id, mark_sold.MarkSoldInput(remarks))
    return to_response(animal)


@router.post("/{animal_id}/medications", response_model=AnimalResponse)
async def record_medication_endpoint(
    animal_id: str,
    payload: MedicationRequest,
    store: HerdStore = Depends(get_herd_store),
) -> AnimalResponse:
    animal = await record_medication.execute(
        store,
        animal_id,
        record_medication.RecordMedicationInput(
            medications=payload.medications,
            given_on=payload.given_on,
            remarks=payload.remarks,
        ),
    )
    return to_response(animal)


@router.post("/{animal_id}/images", response_model=AnimalResponse)
async def attach_image_endpoint(
    animal_id: str,
    request: Request,
    filename: str | None = Query(None),
    store: HerdStore = Depends(get_herd_store),
    images: ImageStore = Depends(get_image_store),
) -> AnimalResponse:
    """Upload the raw image bytes as the request body."""
    content_type = (request.headers.get("content-type") or "").split(";")[0].strip()
    if not content_type:
        raise ValidationError("Content-Type header is required")
    data = await request.body()
    animal = await attach_image.execute(
        store,
        images,
        animal_id,
        attach_image.AttachImageInput(data=data, content_type=content_type, filename=filename),
    )
    return to_response(animal)
