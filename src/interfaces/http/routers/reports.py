from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.herd_store import HerdStore
from src.application.use_cases.reports import build_herd_report
from src.config.settings import Settings
from src.infrastructure.reports.pdf_generator import PDFGenerator
from src.interfaces.http.deps import get_app_settings, get_herd_store, get_report_renderer
from src.interfaces.http.schemas.reports import HerdReportRequest, ReportResponse

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("/herd", response_model=ReportResponse)
async def generate_herd_report(
    request: HerdReportRequest,
    store: HerdStore = Depends(get_herd_store),
    renderer: PDFGenerator = Depends(get_report_renderer),
    settings: Settings = Depends(get_app_settings),
) -> ReportResponse:
    """Herd inventory, optionally narrowed to one farm and one status"""
    output = await build_herd_report.execute(
        store,
        build_herd_report.HerdReportInput(
            farm=request.farm, status=request.status, format=request.format
        ),
        renderer=renderer,
        farm_name=settings.farm_name,
        proprietor_name=settings.proprietor_name,
    )
    report = output.report
    return ReportResponse(
        title=report.title,
        generated_at=report.generated_at.isoformat(),
        format=request.format,
        content=output.content,
        data=report.as_dict() if request.format == "json" else None,
        file_name=output.file_name,
    )
