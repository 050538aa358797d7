from __future__ import annotations

from typing import Protocol

from src.application.use_cases.reports.build_herd_report import HerdReport


class HerdReportRenderer(Protocol):
    def render(self, report: HerdReport) -> str:
        """Return the rendered document as a base64 string."""
        ...
