"""Excel exporter for cutting lists.

One worksheet holds every profile, stacked top to bottom; glass sheets,
the material list and skipped items get worksheets of their own when
present. Numeric columns are written as numbers so the workbook can be
re-used for further calculation.
"""

from __future__ import annotations

import io
import logging
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from glazecut.infrastructure.exporters import rows
from glazecut.infrastructure.exporters.base import BaseExporter, ExporterRegistry

if TYPE_CHECKING:
    from glazecut.application.config import ExportConfiguration
    from glazecut.application.dtos import SolutionOutput

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill("solid", fgColor="1F4E79")
HEADER_FONT = Font(bold=True, color="FFFFFF")
BOLD = Font(bold=True)
TITLE_FONT = Font(bold=True, size=14)
CENTER = Alignment(horizontal="center", vertical="center")
THIN = Side(style="thin", color="777777")
BORDER = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)


@ExporterRegistry.register("xlsx")
class ExcelExporter(BaseExporter):
    """Excel (xlsx) cutting list exporter.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for Excel workbooks.
    """

    format_name: ClassVar[str] = "xlsx"
    file_extension: ClassVar[str] = "xlsx"
    media_type: ClassVar[str] = (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )

    def __init__(self, config: ExportConfiguration | None = None) -> None:
        self.title_cutting = config.xlsx.sheet_title_cutting if config else "Cutting List"
        self.title_glass = config.xlsx.sheet_title_glass if config else "Glass Cutting"
        self.title_materials = (
            config.xlsx.sheet_title_materials if config else "Material List"
        )
        self.title_skipped = config.xlsx.sheet_title_skipped if config else "Skipped"
        self.show_date = config.pdf.show_date if config else True

    def render(self, output: SolutionOutput) -> bytes:
        """Render the cutting list as xlsx bytes."""
        wb = Workbook()
        ws = wb.active
        ws.title = self.title_cutting
        self._write_cutting_sheet(ws, output)

        if output.glass:
            self._write_glass_sheet(wb.create_sheet(self.title_glass), output)
        if output.materials:
            self._write_material_sheet(wb.create_sheet(self.title_materials), output)
        if output.failures:
            self._write_failure_sheet(wb.create_sheet(self.title_skipped), output)

        buf = io.BytesIO()
        wb.save(buf)
        logger.debug(f"Rendered workbook with sheets {wb.sheetnames}")
        return buf.getvalue()

    def _write_cutting_sheet(self, ws: Worksheet, output: SolutionOutput) -> None:
        row = self._write_document_header(ws, output, "Cutting List")
        for report in output.profiles:
            row = self._write_pairs(ws, row, rows.profile_header_rows(report))
            row = self._write_table(
                ws, row, rows.CUTTING_HEADERS, rows.cutting_rows(report)
            )
            row += 1
        self._set_widths(ws, [10, 12, 48, 10, 14])

    def _write_glass_sheet(self, ws: Worksheet, output: SolutionOutput) -> None:
        row = self._write_document_header(ws, output, "Glass Cutting")
        for report in output.glass:
            row = self._write_pairs(ws, row, rows.glass_header_rows(report))
            row = self._write_table(ws, row, rows.GLASS_HEADERS, rows.glass_rows(report))
            row += 1
        self._set_widths(ws, [10, 16, 16, 10, 14, 14, 12])

    def _write_material_sheet(self, ws: Worksheet, output: SolutionOutput) -> None:
        row = self._write_document_header(ws, output, "Material List")
        row = self._write_table(
            ws,
            row,
            rows.MATERIAL_HEADERS,
            rows.material_rows(output),
            footer=rows.grand_total_row(output),
        )
        for data_row in ws.iter_rows(min_row=1, max_row=row, min_col=5, max_col=6):
            for cell in data_row:
                if isinstance(cell.value, (int, float, Decimal)):
                    cell.number_format = "#,##0.00"
        self._set_widths(ws, [6, 40, 10, 12, 14, 14])

    def _write_failure_sheet(self, ws: Worksheet, output: SolutionOutput) -> None:
        row = self._write_document_header(ws, output, "Skipped Items")
        self._write_table(ws, row, rows.FAILURE_HEADERS, rows.failure_rows(output))
        self._set_widths(ws, [10, 30, 12, 60])

    def _write_document_header(
        self, ws: Worksheet, output: SolutionOutput, title: str
    ) -> int:
        ws.cell(row=1, column=1, value=title).font = TITLE_FONT
        pairs = rows.document_header_rows(output, show_date=self.show_date)
        return self._write_pairs(ws, 2, pairs) + 1

    def _write_pairs(self, ws: Worksheet, row: int, pairs: list[tuple[str, str]]) -> int:
        for label, value in pairs:
            ws.cell(row=row, column=1, value=label).font = BOLD
            ws.cell(row=row, column=2, value=value)
            row += 1
        return row

    def _write_table(
        self,
        ws: Worksheet,
        row: int,
        headers: tuple[str, ...],
        body: list[tuple[rows.Cell, ...]],
        footer: tuple[rows.Cell, ...] | None = None,
    ) -> int:
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = CENTER
            cell.border = BORDER
        row += 1

        for values in body:
            for col, value in enumerate(values, start=1):
                ws.cell(row=row, column=col, value=value).border = BORDER
            row += 1

        if footer is not None:
            for col, value in enumerate(footer, start=1):
                cell = ws.cell(row=row, column=col, value=value if value != "" else None)
                cell.font = BOLD
                cell.border = BORDER
            row += 1

        return row

    def _set_widths(self, ws: Worksheet, widths: list[int]) -> None:
        for col, width in enumerate(widths, start=1):
            ws.column_dimensions[get_column_letter(col)].width = width
