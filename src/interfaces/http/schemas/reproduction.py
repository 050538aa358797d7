from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from src.domain.models.history_event import PregnancyCheckResult
from src.interfaces.http.schemas.animals import AnimalResponse


class InseminationCreate(BaseModel):
    semen_name: str = Field(min_length=1, max_length=255)
    insemination_date: date
    remarks: str | None = None


class PregnancyCheckCreate(BaseModel):
    result: PregnancyCheckResult
    checked_on: date | None = None
    remarks: str | None = None


class DryOffRequest(BaseModel):
    force: bool = False
    remarks: str | None = None


class CalvingCreate(BaseModel):
    calf_tag: str = Field(min_length=1, max_length=128)
    calf_gender: Literal["male", "female"]
    calving_date: date
    remarks: str | None = None


class CalvingResponse(BaseModel):
    mother: AnimalResponse
    calf: AnimalResponse
