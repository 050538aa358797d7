from __future__ import annotations

import base64
import io
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from src.application.use_cases.reports.build_herd_report import HerdReport, RegistryRow
from src.utils.datetime_tz import format_date

REGISTRY_COLUMNS = [
    "No.",
    "Tag ID",
    "Type/Category",
    "Farm Location",
    "Repro Status",
    "Record Notes",
]
SUMMARY_COLUMNS = [
    "Farm Distribution",
    "Qty",
    "",
    "Category Breakdown",
    "Qty",
    "",
    "Reproductive Status",
    "Qty",
]

NAVY = colors.HexColor("#0f172a")
SLATE = colors.HexColor("#64748b")


class PDFGenerator:
    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles"""
        self.styles.add(
            ParagraphStyle(
                name="FarmTitle",
                parent=self.styles["Heading1"],
                fontSize=20,
                spaceAfter=4,
                textColor=NAVY,
                alignment=1,  # Center
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="FarmSubtitle",
                parent=self.styles["Normal"],
                fontSize=9,
                spaceAfter=14,
                textColor=SLATE,
                alignment=1,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="CustomHeading",
                parent=self.styles["Heading2"],
                fontSize=13,
                spaceAfter=8,
                textColor=NAVY,
            )
        )
        self.styles.add(
            ParagraphStyle(name="Cell", parent=self.styles["Normal"], fontSize=8, leading=10)
        )

    def create_header(self, report: HerdReport) -> list:
        elements = [
            Paragraph(escape(report.farm_name), self.styles["FarmTitle"]),
            Paragraph(
                "Official Animal Inventory Record | Proprietor: " + escape(report.proprietor_name),
                self.styles["FarmSubtitle"],
            ),
            Paragraph(report.title, self.styles["CustomHeading"]),
        ]
        meta = Table(
            [[f"Total Animals: {report.total}", f"Date: {format_date(report.generated_at)}"]],
            colWidths=[3.25 * inch, 3.25 * inch],
        )
        meta.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (1, 0), (1, 0), "RIGHT"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 0),
                ]
            )
        )
        elements.append(meta)
        elements.append(Spacer(1, 12))
        return elements

    def create_summary_section(self, report: HerdReport) -> list:
        """Three side-by-side count columns: farm, category, status."""
        groups = [report.farm_counts, report.category_counts, report.status_counts]
        depth = max((len(g) for g in groups), default=0)
        if depth == 0:
            return []

        data = [SUMMARY_COLUMNS]
        for i in range(depth):
            row: list[str] = []
            for n, group in enumerate(groups):
                label, count = group[i] if i < len(group) else ("", "")
                row.extend([label, str(count)])
                if n < len(groups) - 1:
                    row.append("")
            data.append(row)

        table = Table(
            data,
            colWidths=[1.35 * inch, 0.4 * inch, 0.2 * inch] * 2 + [1.35 * inch, 0.4 * inch],
        )
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f8fafc")),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 9),
                    ("FONTSIZE", (0, 1), (-1, -1), 8),
                    ("ALIGN", (1, 0), (1, -1), "CENTER"),
                    ("ALIGN", (4, 0), (4, -1), "CENTER"),
                    ("ALIGN", (7, 0), (7, -1), "CENTER"),
                    ("FONTNAME", (1, 1), (1, -1), "Helvetica-Bold"),
                    ("FONTNAME", (4, 1), (4, -1), "Helvetica-Bold"),
                    ("FONTNAME", (7, 1), (7, -1), "Helvetica-Bold"),
                ]
            )
        )
        return [table, Spacer(1, 16)]

    def create_registry_section(self, rows: list[RegistryRow]) -> list:
        elements = [Paragraph("Detailed Registry (Filtered List)", self.styles["CustomHeading"])]
        if not rows:
            empty = Paragraph("No animals match the selected filters.", self.styles["Normal"])
            elements.append(empty)
            return elements

        data: list[list] = [REGISTRY_COLUMNS]
        for row in rows:
            cells = row.cells()
            # Notes may be long free text; wrap instead of overflowing
            cells[-1] = Paragraph(escape(cells[-1]), self.styles["Cell"])
            data.append(cells)

        table = Table(
            data,
            colWidths=[0.45 * inch, 0.85 * inch, 1.1 * inch, 1.1 * inch, 1.1 * inch, 1.9 * inch],
            repeatRows=1,
        )
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), NAVY),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 9),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    ("FONTSIZE", (0, 1), (-1, -1), 8),
                    ("ALIGN", (0, 1), (0, -1), "CENTER"),
                    ("ALIGN", (1, 1), (1, -1), "CENTER"),
                    ("FONTNAME", (1, 1), (1, -1), "Helvetica-Bold"),
                    ("ALIGN", (4, 1), (4, -1), "CENTER"),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ]
            )
        )
        elements.append(table)
        return elements

    def generate_pdf(self, elements: list) -> str:
        """Generate PDF and return as base64 string"""
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer, pagesize=A4, rightMargin=42, leftMargin=42, topMargin=42, bottomMargin=30
        )
        doc.build(elements)
        pdf_data = buffer.getvalue()
        buffer.close()
        return base64.b64encode(pdf_data).decode("utf-8")

    def render(self, report: HerdReport) -> str:
        elements = self.create_header(report)
        elements.extend(self.create_summary_section(report))
        elements.extend(self.create_registry_section(report.rows))
        return self.generate_pdf(elements)
