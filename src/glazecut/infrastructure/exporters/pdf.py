"""PDF exporter for printable cutting lists.

Builds the document with reportlab's platypus layer: a header block with
the project identity, one table per profile (layouts in plan order), one
table per glass sheet type, the priced material list and a section for
any profile or sheet list that could not be reconstructed.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, ClassVar
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from glazecut.infrastructure.exporters import rows
from glazecut.infrastructure.exporters.base import BaseExporter, ExporterRegistry

if TYPE_CHECKING:
    from glazecut.application.config import ExportConfiguration
    from glazecut.application.dtos import SolutionOutput

PAGE_SIZES = {"A4": A4, "letter": letter}

COLOR_HEADER = colors.HexColor("#1f4e79")
COLOR_LIGHT_GRAY = colors.HexColor("#f3f4f6")
COLOR_WARNING = colors.HexColor("#b45309")


@ExporterRegistry.register("pdf")
class PdfExporter(BaseExporter):
    """PDF cutting list exporter.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for PDF files.
        page_size: reportlab page size tuple.
        show_date: Whether the issue date is printed.
        company_name: Optional header line above the title.
    """

    format_name: ClassVar[str] = "pdf"
    file_extension: ClassVar[str] = "pdf"
    media_type: ClassVar[str] = "application/pdf"

    def __init__(self, config: ExportConfiguration | None = None) -> None:
        page_size = config.pdf.page_size if config else "A4"
        self.page_size = PAGE_SIZES[page_size]
        self.show_date = config.pdf.show_date if config else True
        self.company_name = config.company_name if config else ""
        self.styles = self._build_styles()

    def _build_styles(self):
        styles = getSampleStyleSheet()
        styles.add(
            ParagraphStyle(
                name="SectionHeader",
                parent=styles["Heading2"],
                textColor=COLOR_HEADER,
                spaceBefore=6,
                spaceAfter=4,
            )
        )
        styles.add(
            ParagraphStyle(
                name="Warning",
                parent=styles["Normal"],
                textColor=COLOR_WARNING,
            )
        )
        return styles

    def render(self, output: SolutionOutput) -> bytes:
        """Render the cutting list as PDF bytes."""
        buf = io.BytesIO()
        doc = SimpleDocTemplate(
            buf,
            pagesize=self.page_size,
            leftMargin=12 * mm,
            rightMargin=12 * mm,
            topMargin=10 * mm,
            bottomMargin=10 * mm,
            title=output.meta.title,
            author=self.company_name or output.meta.company_name,
        )

        story: list = []
        story.extend(self._header(output))

        for report in output.profiles:
            story.append(Paragraph(escape(report.profile_name), self.styles["SectionHeader"]))
            story.append(self._info_table(rows.profile_header_rows(report)))
            story.append(Spacer(1, 2 * mm))
            story.append(self._data_table(rows.CUTTING_HEADERS, rows.cutting_rows(report)))
            story.append(Spacer(1, 5 * mm))

        for report in output.glass:
            story.append(
                Paragraph(f"Glass {escape(report.sheet.label)}", self.styles["SectionHeader"])
            )
            story.append(self._info_table(rows.glass_header_rows(report)))
            story.append(Spacer(1, 2 * mm))
            story.append(self._data_table(rows.GLASS_HEADERS, rows.glass_rows(report)))
            story.append(Spacer(1, 5 * mm))

        if output.materials:
            story.append(Paragraph("Material List", self.styles["SectionHeader"]))
            story.append(
                self._data_table(
                    rows.MATERIAL_HEADERS,
                    rows.material_rows(output),
                    footer=rows.grand_total_row(output),
                )
            )
            story.append(Spacer(1, 5 * mm))

        if output.failures:
            story.append(Paragraph("Skipped Items", self.styles["SectionHeader"]))
            story.append(
                Paragraph(
                    "These items could not be laid out and are not included above.",
                    self.styles["Warning"],
                )
            )
            story.append(self._data_table(rows.FAILURE_HEADERS, rows.failure_rows(output)))

        doc.build(story)
        return buf.getvalue()

    def _header(self, output: SolutionOutput) -> list:
        elements: list = []
        company = self.company_name or output.meta.company_name
        if company:
            elements.append(Paragraph(escape(company), self.styles["Normal"]))
        elements.append(Paragraph("Cutting List", self.styles["Title"]))
        elements.append(
            self._info_table(rows.document_header_rows(output, show_date=self.show_date))
        )
        elements.append(Spacer(1, 6 * mm))
        return elements

    def _info_table(self, pairs: list[tuple[str, str]]) -> Table:
        table = Table([[f"{label}:", value] for label, value in pairs], hAlign="LEFT")
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
                    ("TOPPADDING", (0, 0), (-1, -1), 1),
                ]
            )
        )
        return table

    def _data_table(
        self,
        headers: tuple[str, ...],
        body: list[tuple[rows.Cell, ...]],
        footer: tuple[rows.Cell, ...] | None = None,
    ) -> Table:
        data = [list(headers)]
        data.extend([rows.cell_text(cell) for cell in row] for row in body)
        if footer is not None:
            data.append([rows.cell_text(cell) for cell in footer])

        style = [
            ("BACKGROUND", (0, 0), (-1, 0), COLOR_HEADER),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, COLOR_LIGHT_GRAY]),
        ]
        if footer is not None:
            style.append(("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"))

        table = Table(data, repeatRows=1, hAlign="LEFT")
        table.setStyle(TableStyle(style))
        return table
