from __future__ import annotations

from enum import Enum


class AnimalCategory(str, Enum):
    MILKING = "Milking"
    CATTLE = "Cattle"
    HEIFER = "Heifer"
    MALE_CALF = "Male Calf"
    FEMALE_CALF = "Female Calf"

    @property
    def is_male(self) -> bool:
        # Cattle is recorded as male stock on these farms
        return self in {AnimalCategory.MALE_CALF, AnimalCategory.CATTLE}

    @property
    def is_calf(self) -> bool:
        return "Calf" in self.value

    @classmethod
    def for_calf(cls, gender: str) -> AnimalCategory:
        if gender.lower() == "male":
            return cls.MALE_CALF
        if gender.lower() == "female":
            return cls.FEMALE_CALF
        raise ValueError(f"Unknown calf gender: {gender}")
