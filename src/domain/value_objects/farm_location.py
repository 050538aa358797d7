from __future__ import annotations

from enum import Enum


class FarmLocation(str, Enum):
    MILKING_FARM = "Milking Farm"
    CATTLE_FARM = "Cattle Farm"

    def other(self) -> FarmLocation:
        if self is FarmLocation.MILKING_FARM:
            return FarmLocation.CATTLE_FARM
        return FarmLocation.MILKING_FARM
