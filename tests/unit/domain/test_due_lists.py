from __future__ import annotations

from datetime import timedelta

import pytest

from src.domain.services import due_lists
from src.domain.value_objects.animal_category import AnimalCategory
from src.domain.value_objects.reproductive_status import ReproductiveStatus
from tests.factories import TODAY, days_ago, make_animal


@pytest.mark.parametrize("category", [AnimalCategory.MILKING, AnimalCategory.HEIFER])
def test_pregnancy_check_due_after_46_days(category):
    cow = make_animal(
        category=category, status=ReproductiveStatus.INSEMINATED, insemination_date=days_ago(46)
    )
    lists = due_lists.compute([cow], today=TODAY)
    assert lists.pregnancy_check == [cow]


def test_pregnancy_check_interval_depends_on_category():
    heifer = make_animal(
        "H",
        category=AnimalCategory.HEIFER,
        status=ReproductiveStatus.INSEMINATED,
        insemination_date=days_ago(42),
    )
    cow = make_animal(
        "M", status=ReproductiveStatus.INSEMINATED, insemination_date=days_ago(42)
    )
    lists = due_lists.compute([heifer, cow], today=TODAY)
    assert lists.pregnancy_check == [heifer]


def test_dry_off_due_from_225_days():
    due = make_animal("A", status=ReproductiveStatus.PREGNANT, insemination_date=days_ago(226))
    early = make_animal("B", status=ReproductiveStatus.PREGNANT, insemination_date=days_ago(224))
    lists = due_lists.compute([due, early], today=TODAY)
    assert lists.dry_off == [due]


def test_calving_alert_within_five_days_and_overdue():
    soon = make_animal(
        "A",
        status=ReproductiveStatus.PREGNANT,
        expected_calving_date=TODAY + timedelta(days=5),
    )
    overdue = make_animal(
        "B", status=ReproductiveStatus.DRY, expected_calving_date=days_ago(3)
    )
    later = make_animal(
        "C",
        status=ReproductiveStatus.DRY,
        expected_calving_date=TODAY + timedelta(days=6),
    )
    lists = due_lists.compute([soon, overdue, later], today=TODAY)
    assert lists.calving == [soon, overdue]


def test_ready_for_insemination_45_days_after_calving():
    ready = make_animal("A", status=ReproductiveStatus.NEWLY_CALVED, calving_date=days_ago(45))
    open_ready = make_animal("B", status=ReproductiveStatus.OPEN, calving_date=days_ago(90))
    too_soon = make_animal("C", status=ReproductiveStatus.NEWLY_CALVED, calving_date=days_ago(44))
    never_calved = make_animal("D", status=ReproductiveStatus.OPEN)
    lists = due_lists.compute([ready, open_ready, too_soon, never_calved], today=TODAY)
    assert lists.ready_for_insemination == [ready, open_ready]
    assert lists.total == 2


def test_animal_can_appear_in_several_lists():
    cow = make_animal(
        status=ReproductiveStatus.PREGNANT,
        insemination_date=days_ago(280),
        expected_calving_date=days_ago(280) + timedelta(days=283),
    )
    lists = due_lists.compute([cow], today=TODAY)
    assert lists.calving == [cow]
    assert lists.dry_off == [cow]
    assert lists.total == 2
