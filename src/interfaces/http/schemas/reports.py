from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

from src.domain.value_objects.farm_location import FarmLocation
from src.domain.value_objects.reproductive_status import ReproductiveStatus


class HerdReportRequest(BaseModel):
    farm: FarmLocation | None = None
    status: ReproductiveStatus | None = None
    format: Literal["pdf", "json"] = "pdf"


class ReportResponse(BaseModel):
    title: str
    generated_at: str
    format: str
    content: str | None = None  # base64 for PDF
    data: dict[str, Any] | None = None  # structured data when format=json
    file_name: str | None = None
