from __future__ import annotations

from enum import Enum


class ReproductiveStatus(str, Enum):
    # Female statuses
    OPEN = "Open"
    INSEMINATED = "Inseminated"
    PREGNANT = "Pregnant"
    DRY = "Dry"
    NEWLY_CALVED = "Newly Calved"
    CHILD = "Child"
    # Male statuses
    BREEDING_BULL = "Breeding Bull"
    OTHER = "Other"
    # Terminal
    SOLD = "Sold"


FEMALE_STATUSES = frozenset(
    {
        ReproductiveStatus.OPEN,
        ReproductiveStatus.INSEMINATED,
        ReproductiveStatus.PREGNANT,
        ReproductiveStatus.DRY,
        ReproductiveStatus.NEWLY_CALVED,
        ReproductiveStatus.CHILD,
    }
)

MALE_STATUSES = frozenset({ReproductiveStatus.BREEDING_BULL, ReproductiveStatus.OTHER})

TERMINAL_STATUSES = frozenset({ReproductiveStatus.SOLD})
