from __future__ import annotations

from datetime import timedelta

import pytest

from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.use_cases.animals import (
    attach_image,
    create_animal,
    delete_animal,
    get_animal,
    import_animals,
    list_animals,
    list_history,
    record_medication,
    update_animal,
)
from src.domain.models.history_event import HistoryEvent, HistoryEventType
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus
from tests.factories import NOW, TODAY, RecordingImageStore, days_ago, make_animal, make_store


@pytest.mark.asyncio
async def test_create_animal_rejects_duplicate_active_tag():
    store, repo = await make_store([make_animal("57")])
    with pytest.raises(ConflictError):
        await create_animal.execute(store, create_animal.CreateAnimalInput(tag_number="57"))
    assert len(repo.rows) == 1
    assert len(store.snapshot) == 1


@pytest.mark.asyncio
async def test_create_animal_coerces_status_and_persists():
    store, repo = await make_store()
    animal = await create_animal.execute(
        store,
        create_animal.CreateAnimalInput(
            tag_number="B-1",
            category=AnimalCategory.CATTLE,
            status=ReproductiveStatus.PREGNANT,
        ),
    )
    assert animal.status is ReproductiveStatus.OTHER
    assert ("owner-1", animal.id) in repo.rows
    assert store.snapshot[0] == animal


@pytest.mark.asyncio
async def test_create_calf_links_mother_in_one_batch():
    mother = make_animal("M")
    store, repo = await make_store([mother])
    calf = await create_animal.execute(
        store,
        create_animal.CreateAnimalInput(
            tag_number="C", category=AnimalCategory.FEMALE_CALF, mother_id=mother.id
        ),
    )
    assert repo.batches == [[calf.id, mother.id]]
    assert store.get(mother.id).calves_ids == (calf.id,)

    with pytest.raises(NotFound):
        await create_animal.execute(
            store, create_animal.CreateAnimalInput(tag_number="D", mother_id="missing")
        )


@pytest.mark.asyncio
async def test_update_animal_category_change_coerces_status():
    store, _ = await make_store([make_animal("1", status=ReproductiveStatus.DRY)])
    animal = await update_animal.execute(
        store, "id-1", update_animal.UpdateAnimalInput(category=AnimalCategory.CATTLE)
    )
    assert animal.status is ReproductiveStatus.OTHER
    assert animal.history[0].details == "Status manually changed to: Other"


@pytest.mark.asyncio
async def test_update_animal_errors():
    store, _ = await make_store([make_animal("1"), make_animal("2")])
    with pytest.raises(ConflictError):
        await update_animal.execute(store, "id-1", update_animal.UpdateAnimalInput(tag_number="2"))
    with pytest.raises(NotFound):
        await update_animal.execute(store, "nope", update_animal.UpdateAnimalInput())
    with pytest.raises(ValidationError):
        await update_animal.execute(
            store, "id-1", update_animal.UpdateAnimalInput(mother_id="id-1")
        )


@pytest.mark.asyncio
async def test_update_animal_returning_from_sold_needs_a_free_tag():
    store, repo = await make_store(
        [make_animal("57", status=ReproductiveStatus.SOLD, id="sold-57"), make_animal("57")]
    )
    with pytest.raises(ConflictError):
        await update_animal.execute(
            store, "sold-57", update_animal.UpdateAnimalInput(status=ReproductiveStatus.OPEN)
        )
    assert repo.batches == []
    assert store.get("sold-57").status is ReproductiveStatus.SOLD


@pytest.mark.asyncio
async def test_delete_and_list():
    store, _ = await make_store(
        [make_animal("10"), make_animal("11", farm=FarmLocation.CATTLE_FARM), make_animal("20")]
    )
    await delete_animal.execute(store, "id-20")
    result = await list_animals.execute(store, search="1")
    assert result.total == 2
    result = await list_animals.execute(store, farm=FarmLocation.CATTLE_FARM)
    assert [a.tag_number for a in result.items] == ["11"]


@pytest.mark.asyncio
async def test_get_animal_profile():
    cow = make_animal(
        "1",
        status=ReproductiveStatus.PREGNANT,
        insemination_date=days_ago(230),
        expected_calving_date=days_ago(230) + timedelta(days=283),
    )
    store, _ = await make_store([cow])
    profile = await get_animal.execute(store, "id-1", today=TODAY)
    assert profile.schedule.gestation_days == 230
    assert profile.schedule.days_to_calving == 53
    assert profile.schedule.needs_dry_off
    assert profile.lineage.mother is None


@pytest.mark.asyncio
async def test_list_history_fills_semen_and_calf_tag():
    calving = HistoryEvent(
        id="e2",
        type=HistoryEventType.CALVING,
        date=NOW,
        details="Official Calving Recorded: Produced Male Calf (Tag: OLD-1) | Semen/Sire: BullX",
    )
    insemination = HistoryEvent(
        id="e1",
        type=HistoryEventType.INSEMINATION,
        date=NOW - timedelta(days=283),
        details="Insemination on 01/01/2025 - Inseminated with BullX",
    )
    store, _ = await make_store([make_animal("1", history=(calving, insemination))])

    entries = await list_history.execute(store, "id-1")
    assert [e.event.id for e in entries] == ["e2", "e1"]
    assert entries[0].calf_tag == "OLD-1"
    assert entries[0].semen == "BullX"
    assert entries[1].semen == "BullX"
    assert entries[1].calf_tag is None

    only = await list_history.execute(store, "id-1", event_type=HistoryEventType.INSEMINATION)
    assert [e.event.id for e in only] == ["e1"]


@pytest.mark.asyncio
async def test_record_medication_requires_text():
    store, _ = await make_store([make_animal("1")])
    with pytest.raises(ValidationError):
        await record_medication.execute(
            store, "id-1", record_medication.RecordMedicationInput(medications=" ")
        )
    animal = await record_medication.execute(
        store, "id-1", record_medication.RecordMedicationInput(medications="Calcium")
    )
    assert animal.history[0].type is HistoryEventType.MEDICATION


@pytest.mark.asyncio
async def test_attach_image():
    store, _ = await make_store([make_animal("1")])
    images = RecordingImageStore()
    first = await attach_image.execute(
        store, images, "id-1", attach_image.AttachImageInput(b"jpeg", "image/jpeg", "cow.jpg")
    )
    second = await attach_image.execute(
        store, images, "id-1", attach_image.AttachImageInput(b"png", "image/png")
    )
    assert first.image == "https://images.test/animals/1.jpg"
    assert second.image == first.image
    assert second.images == (
        "https://images.test/animals/1.jpg",
        "https://images.test/animals/2.jpg",
    )
    assert images.stored[0] == (b"jpeg", "image/jpeg", "cow.jpg")

    with pytest.raises(ValidationError):
        await attach_image.execute(
            store, images, "id-1", attach_image.AttachImageInput(b"gif", "image/gif")
        )
    with pytest.raises(ValidationError):
        await attach_image.execute(
            store, images, "id-1", attach_image.AttachImageInput(b"", "image/png")
        )
    assert len(images.stored) == 2


def test_animal_from_record_reads_legacy_shape():
    animal = import_animals.animal_from_record(
        {
            "id": "legacy-1",
            "tagNumber": "57",
            "category": "Male Calf",
            "status": "Pregnant",
            "farm": "Cattle Farm",
            "inseminationDate": "",
            "calvingDate": "2025-11-02",
            "lastUpdated": "2026-02-01T10:00:00.000Z",
            "history": [
                {
                    "id": "h1",
                    "type": "CALVING",
                    "date": "2025-11-02",
                    "details": "x",
                    "calfId": "c",
                },
                {"id": "h2", "type": "SOMETHING_ELSE", "date": "2025-10-01", "details": "y"},
            ],
        }
    )
    assert animal.id == "legacy-1"
    assert animal.status is ReproductiveStatus.OTHER
    assert animal.farm is FarmLocation.CATTLE_FARM
    assert animal.insemination_date is None
    assert animal.calving_date.isoformat() == "2025-11-02"
    assert animal.history[0].calf_id == "c"
    assert animal.history[1].type is HistoryEventType.GENERAL


@pytest.mark.asyncio
async def test_import_skips_bad_records_unless_strict():
    store, repo = await make_store()
    records = [
        {"id": "a", "tagNumber": "1"},
        {"id": "b"},
        {"id": "c", "tagNumber": "3", "category": "Goat"},
        {"id": "d", "tagNumber": "4", "status": "Dry"},
    ]
    result = await import_animals.execute(store, records)
    assert [a.id for a in result.imported] == ["a", "d"]
    assert [s["index"] for s in result.skipped] == [1, 2]
    assert repo.batches == [["a", "d"]]

    store, repo = await make_store()
    with pytest.raises(ValidationError):
        await import_animals.execute(store, records, strict=True)
    assert repo.rows == {}


@pytest.mark.asyncio
async def test_import_rejects_tags_held_by_active_animals():
    store, repo = await make_store(
        [make_animal("57"), make_animal("60", status=ReproductiveStatus.SOLD)]
    )
    records = [
        {"id": "other", "tagNumber": "57"},
        {"id": "id-57", "tagNumber": "57", "status": "Dry"},
        {"id": "x", "tagNumber": "70"},
        {"id": "y", "tagNumber": " 70 "},
        {"id": "z", "tagNumber": "60"},
        {"id": "gone", "tagNumber": "57", "status": "Sold"},
    ]
    result = await import_animals.execute(store, records)
    assert [a.id for a in result.imported] == ["id-57", "x", "z", "gone"]
    assert [s["index"] for s in result.skipped] == [0, 3]
    assert "57" in result.skipped[0]["reason"]
    assert ("owner-1", "other") not in repo.rows
    assert ("owner-1", "y") not in repo.rows

    store, repo = await make_store([make_animal("57")])
    with pytest.raises(ConflictError) as exc_info:
        await import_animals.execute(store, records, strict=True)
    assert exc_info.value.details["index"] == 0
    assert repo.batches == []
