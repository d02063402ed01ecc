"""Plain text summary for clipboard and share targets."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from glazecut.domain.value_objects import plain_number
from glazecut.infrastructure.exporters import rows
from glazecut.infrastructure.exporters.base import BaseExporter, ExporterRegistry

if TYPE_CHECKING:
    from glazecut.application.config import ExportConfiguration
    from glazecut.application.dtos import SolutionOutput


@ExporterRegistry.register("text")
class ShareTextExporter(BaseExporter):
    """Render a short, human-readable text version of the cutting list.

    Example output::

        Cutting List - Villa 12
        Date: 2026-10-19

        Transom (55x55mm) - 6m bars, 6 lengths
          A  4X  1.2m, 1.2m, 1.2m, 1.2m  | off-cut 1.2m
    """

    format_name: ClassVar[str] = "text"
    file_extension: ClassVar[str] = "txt"
    media_type: ClassVar[str] = "text/plain; charset=utf-8"

    def __init__(self, config: ExportConfiguration | None = None) -> None:
        self.show_date = config.pdf.show_date if config else True

    def render(self, output: SolutionOutput) -> bytes:
        return self.export_string(output).encode("utf-8")

    def export_string(self, output: SolutionOutput) -> str:
        lines = [f"Cutting List - {output.meta.project_name}"]
        for label, value in rows.document_header_rows(output, show_date=self.show_date)[1:]:
            lines.append(f"{label}: {value}")

        for report in output.profiles:
            totals = report.totals
            lines.append("")
            lines.append(
                f"{report.profile_name} - {plain_number(totals.stock_length_m)}m bars, "
                f"{rows.quantity_label(totals.total_quantity)}"
            )
            for layout in report.layouts:
                lines.append(
                    f"  {layout.layout_id}  {layout.repetition_label}  "
                    f"{', '.join(layout.cut_labels)}  | off-cut {layout.offcut_label}"
                )

        for report in output.glass:
            lines.append("")
            lines.append(f"Glass {report.sheet.label} - {report.spec.total_sheets} sheet(s)")
            for sheet in report.sheets:
                lines.append(
                    f"  Sheet {sheet.sheet_number}: {sheet.placed_count} x "
                    f"{sheet.cut.label}mm ({sheet.cuts_per_row} x {sheet.cuts_per_column} grid)"
                )
            for cut in report.other_cuts:
                lines.append(f"  Not visualized: {cut.qty} x {cut.label}mm")

        if output.failures:
            lines.append("")
            lines.append("Skipped:")
            for failure in output.failures:
                lines.append(f"  {failure.subject}: {failure.message}")

        lines.append("")
        lines.append(f"Total bars: {output.total_bars}")
        if output.glass:
            lines.append(f"Total sheets: {output.total_sheets}")
        if output.materials:
            lines.append(f"Grand total: {rows.amount_text(output.grand_total)}")
        return "\n".join(lines) + "\n"
