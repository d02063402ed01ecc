"""Table rows shared by the document exporters.

The PDF and Excel exporters both build their tables from these
functions, so layout order, label text and rounding are the same in
every format. Cells are display strings, plain numbers or Decimal money
amounts; ``cell_text`` turns any cell into the text the PDF prints.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Union

from glazecut.domain.value_objects import plain_number

if TYPE_CHECKING:
    from glazecut.application.dtos import (
        GlassReport,
        ItemFailure,
        ProfileReport,
        SolutionOutput,
    )
    from glazecut.domain import Layout, MaterialLine, SheetLayout

Cell = Union[str, int, float, Decimal]

CUTTING_HEADERS: tuple[str, ...] = (
    "Layout",
    "Repetition",
    "Cuts",
    "Off-cut",
    "Off-cut (mm)",
)
GLASS_HEADERS: tuple[str, ...] = (
    "Sheet",
    "Cut",
    "Grid",
    "Placed",
    "Waste W (mm)",
    "Waste H (mm)",
    "Utilization",
)
MATERIAL_HEADERS: tuple[str, ...] = (
    "S/N",
    "Item",
    "Quantity",
    "Unit",
    "Unit Price",
    "Total",
)
FAILURE_HEADERS: tuple[str, ...] = ("Section", "Item", "Error", "Reason")


def cell_text(cell: Cell) -> str:
    """Text for one table cell.

    Money cells are Decimals and print like ``amount_text``; other numbers
    print in full, never in exponent form.
    """
    if isinstance(cell, Decimal):
        return amount_text(cell)
    if isinstance(cell, float):
        return format(Decimal(str(cell)), "f")
    return str(cell)


def amount(value: Decimal) -> Decimal:
    """Round a money amount to two places for display."""
    return value.quantize(Decimal("0.01"))


def amount_text(value: Decimal) -> str:
    return f"{value.quantize(Decimal('0.01')):,}"


def quantity_label(count: int) -> str:
    return f"{count} length" if count == 1 else f"{count} lengths"


def profile_header_rows(report: ProfileReport) -> list[tuple[str, str]]:
    """Label/value pairs printed above a profile's layout table."""
    totals = report.totals
    return [
        ("Profile", report.profile_name),
        ("Material Length", f"{plain_number(totals.stock_length_m)} meters"),
        ("Quantity", quantity_label(totals.total_quantity)),
    ]


def layout_row(layout: Layout) -> tuple[Cell, ...]:
    return (
        layout.layout_id,
        layout.repetition_label,
        ", ".join(layout.cut_labels),
        layout.offcut_label,
        plain_number(layout.offcut_mm),
    )


def cutting_rows(report: ProfileReport) -> list[tuple[Cell, ...]]:
    """One row per layout, in plan order."""
    return [layout_row(layout) for layout in report.layouts]


def glass_header_rows(report: GlassReport) -> list[tuple[str, str]]:
    return [
        ("Sheet Type", report.spec.sheet_type),
        ("Sheet Size", report.sheet.label),
        ("Total Sheets", str(report.spec.total_sheets)),
    ]


def sheet_row(sheet: SheetLayout) -> tuple[Cell, ...]:
    return (
        sheet.sheet_number,
        f"{sheet.cut.label}mm",
        f"{sheet.cuts_per_row} x {sheet.cuts_per_column}",
        sheet.placed_count,
        plain_number(sheet.waste_width_mm),
        plain_number(sheet.waste_height_mm),
        f"{sheet.utilization * 100:.1f}%",
    )


def glass_rows(report: GlassReport) -> list[tuple[Cell, ...]]:
    """One row per sheet, then one row per cut size not laid out on the grid."""
    rows = [sheet_row(sheet) for sheet in report.sheets]
    for cut in report.other_cuts:
        rows.append(("-", f"{cut.label}mm", "not visualized", cut.qty, "", "", ""))
    if report.unplaced_count:
        dominant = report.dominant_cut
        rows.append(
            ("-", f"{dominant.label}mm", "does not fit", report.unplaced_count, "", "", "")
        )
    return rows


def material_row(index: int, line: MaterialLine) -> tuple[Cell, ...]:
    return (
        index,
        line.name,
        line.quantity,
        line.material_type,
        amount(line.unit_price),
        amount(line.total),
    )


def material_rows(output: SolutionOutput) -> list[tuple[Cell, ...]]:
    return [
        material_row(index, line) for index, line in enumerate(output.materials, start=1)
    ]


def grand_total_row(output: SolutionOutput) -> tuple[Cell, ...]:
    return ("", "Grand Total", "", "", "", amount(output.grand_total))


def failure_row(failure: ItemFailure) -> tuple[Cell, ...]:
    return (failure.section, failure.subject, failure.kind, failure.message)


def failure_rows(output: SolutionOutput) -> list[tuple[Cell, ...]]:
    return [failure_row(failure) for failure in output.failures]


def document_header_rows(output: SolutionOutput, show_date: bool = True) -> list[tuple[str, str]]:
    """Project identity lines printed at the top of every document."""
    meta = output.meta
    rows = [("Project", meta.project_name)]
    if meta.customer_name:
        rows.append(("Customer", meta.customer_name))
    if show_date:
        rows.append(("Date", meta.issue_date.isoformat()))
    return rows
