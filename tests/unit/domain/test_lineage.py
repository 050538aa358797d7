from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from src.domain.models.history_event import HistoryEvent, HistoryEventType
from src.domain.services import lineage
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.reproductive_status import ReproductiveStatus
from tests.factories import days_ago, make_animal

BIRTH = days_ago(10)


def _at(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, 6, 0, tzinfo=timezone.utc)


def _insemination(event_id: str, day: date, semen: str | None, details: str = "") -> HistoryEvent:
    return HistoryEvent(
        id=event_id,
        type=HistoryEventType.INSEMINATION,
        date=_at(day),
        details=details or f"Inseminated with {semen}",
        semen=semen,
    )


def _calf(mother_id: str | None = "id-M", *, semen: str | None = None, tag: str = "C-1"):
    birth = HistoryEvent(
        id="birth",
        type=HistoryEventType.GENERAL,
        date=_at(BIRTH),
        details="Animal registered",
        semen=semen,
    )
    return make_animal(
        tag,
        category=AnimalCategory.FEMALE_CALF,
        mother_id=mother_id,
        history=(birth,),
    )


def test_insemination_at_standard_gestation_is_credited():
    mother = make_animal(
        "M",
        history=(_insemination("i1", BIRTH - timedelta(days=283), "BullX"),),
    )
    assert lineage.resolve_sire(_calf(), [mother]) == "BullX"


def test_latest_insemination_in_window_wins_regardless_of_order():
    early = _insemination("i1", BIRTH - timedelta(days=300), "Early")
    late = _insemination("i2", BIRTH - timedelta(days=250), "Late")
    calf = _calf()
    for history in ((early, late), (late, early)):
        mother = make_animal("M", history=history)
        assert lineage.resolve_sire(calf, [mother]) == "Late"


def test_window_bounds_are_inclusive():
    for distance in (240, 310):
        mother = make_animal(
            "M", history=(_insemination("i1", BIRTH - timedelta(days=distance), "Edge"),)
        )
        assert lineage.resolve_sire(_calf(), [mother]) == "Edge"


def test_inseminations_outside_window_are_ignored():
    mother = make_animal(
        "M",
        history=(
            _insemination("i1", BIRTH - timedelta(days=200), "TooLate"),
            _insemination("i2", BIRTH - timedelta(days=320), "TooEarly"),
            _insemination("i3", BIRTH + timedelta(days=5), "After"),
        ),
    )
    assert lineage.resolve_sire(_calf(), [mother]) is None


def test_own_birth_entry_takes_priority():
    calving = HistoryEvent(
        id="c1",
        type=HistoryEventType.CALVING,
        date=_at(BIRTH),
        details="Official Calving Recorded: Produced Female Calf (Tag: C-1)",
        semen="FromMother",
        calf_id="id-C-1",
    )
    mother = make_animal("M", history=(calving,))
    assert lineage.resolve_sire(_calf(semen="OwnBull"), [mother]) == "OwnBull"


def test_mother_calving_entry_beats_insemination_window():
    calving = HistoryEvent(
        id="c1",
        type=HistoryEventType.CALVING,
        date=_at(BIRTH),
        details="Official Calving Recorded: Produced Female Calf (Tag: C-1)",
        semen="CalvingBull",
        calf_id="id-C-1",
    )
    insemination = _insemination("i1", BIRTH - timedelta(days=283), "WindowBull")
    mother = make_animal("M", history=(calving, insemination))
    assert lineage.resolve_sire(_calf(), [mother]) == "CalvingBull"


def test_legacy_calving_text_matched_by_tag():
    calving = HistoryEvent(
        id="c1",
        type=HistoryEventType.CALVING,
        date=_at(BIRTH),
        details="Official Calving Recorded: Produced Female Calf (Tag: C-1) | Semen/Sire: OldBull",
    )
    other_calf = HistoryEvent(
        id="c0",
        type=HistoryEventType.CALVING,
        date=_at(BIRTH - timedelta(days=400)),
        details="Official Calving Recorded: Produced Male Calf (Tag: C-10) | Semen/Sire: Wrong",
    )
    mother = make_animal("M", history=(calving, other_calf))
    assert lineage.resolve_sire(_calf(), [mother]) == "OldBull"


def test_legacy_insemination_text():
    insemination = _insemination(
        "i1",
        BIRTH - timedelta(days=280),
        None,
        details="Insemination on 01/01/2025 - Inseminated with LegacyBull",
    )
    mother = make_animal("M", history=(insemination,))
    assert lineage.resolve_sire(_calf(), [mother]) == "LegacyBull"


def test_no_sire_for_adults_or_orphans():
    mother = make_animal(
        "M", history=(_insemination("i1", BIRTH - timedelta(days=283), "BullX"),)
    )
    adult = make_animal(
        "A", status=ReproductiveStatus.PREGNANT, mother_id=mother.id, history=_calf().history
    )
    assert lineage.resolve_sire(adult, [mother]) is None
    assert lineage.resolve_sire(_calf(mother_id=None), [mother]) is None
    assert lineage.resolve_sire(_calf(mother_id="missing"), [mother]) is None


def test_lineage_of_collects_mother_and_calves():
    mother = make_animal(
        "M", history=(_insemination("i1", BIRTH - timedelta(days=283), "BullX"),)
    )
    calf = _calf()
    unrelated = make_animal("X")
    result = lineage.lineage_of(calf, [mother, calf, unrelated])
    assert result.mother == mother
    assert result.calves == ()
    assert result.sire == "BullX"

    assert lineage.lineage_of(mother, [mother, calf, unrelated]).calves == (calf,)
