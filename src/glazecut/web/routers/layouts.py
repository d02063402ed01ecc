"""Layout reconstruction endpoints."""

from fastapi import APIRouter

from glazecut.application import GlassReport, ProfileReport, SolutionOutput
from glazecut.domain import MaterialLine, SheetLayout
from glazecut.domain.value_objects import plain_number
from glazecut.infrastructure.layout_diagram_renderer import LayoutDiagramRenderer
from glazecut.web.dependencies import SolvedRequestDep
from glazecut.web.schemas.responses import (
    BarBlockSchema,
    GlassCutSchema,
    GlassSchema,
    ItemFailureSchema,
    LayoutSchema,
    MaterialLineSchema,
    PlacedCutSchema,
    ProfileSchema,
    ProfileTotalsSchema,
    SegmentSchema,
    SheetSchema,
    SolutionSchema,
    WasteStripSchema,
)

router = APIRouter(prefix="/layouts", tags=["layouts"])

_renderer = LayoutDiagramRenderer()


def _profile_schema(report: ProfileReport) -> ProfileSchema:
    totals = report.totals
    return ProfileSchema(
        profile_name=report.profile_name,
        stock_length_mm=plain_number(report.item.stock_length_mm),
        layouts=[
            LayoutSchema(
                layout_id=layout.layout_id,
                key=layout.key,
                repetition=layout.repetition,
                repetition_label=layout.repetition_label,
                segments=[
                    SegmentSchema(length_mm=plain_number(s.length_mm), label=s.label)
                    for s in layout.segments
                ],
                offcut_mm=plain_number(layout.offcut_mm),
                offcut_label=layout.offcut_label,
                blocks=[BarBlockSchema(**block) for block in _renderer.describe_bar(layout)],
            )
            for layout in report.layouts
        ],
        totals=ProfileTotalsSchema(
            stock_length_m=plain_number(totals.stock_length_m),
            total_bars=totals.total_bars,
            total_quantity=totals.total_quantity,
            total_material_mm=plain_number(totals.total_material_mm),
            total_offcut_mm=plain_number(totals.total_offcut_mm),
            waste_percentage=round(totals.waste_percentage, 2),
        ),
    )


def _sheet_schema(sheet: SheetLayout) -> SheetSchema:
    return SheetSchema(
        sheet_number=sheet.sheet_number,
        cut_width_mm=plain_number(sheet.cut.width_mm),
        cut_height_mm=plain_number(sheet.cut.height_mm),
        cuts_per_row=sheet.cuts_per_row,
        cuts_per_column=sheet.cuts_per_column,
        used_width_mm=plain_number(sheet.used_width_mm),
        used_height_mm=plain_number(sheet.used_height_mm),
        waste_width_mm=plain_number(sheet.waste_width_mm),
        waste_height_mm=plain_number(sheet.waste_height_mm),
        placed_count=sheet.placed_count,
        utilization=round(sheet.utilization, 4),
        placements=[
            PlacedCutSchema(
                row=p.row,
                column=p.column,
                x_mm=plain_number(p.x_mm),
                y_mm=plain_number(p.y_mm),
            )
            for p in sheet.placements()
        ],
        strips=[
            WasteStripSchema(
                position=s.position,
                x_mm=plain_number(s.x_mm),
                y_mm=plain_number(s.y_mm),
                width_mm=plain_number(s.width_mm),
                height_mm=plain_number(s.height_mm),
                area_mm2=plain_number(s.area_mm2),
                visible=s.visible,
            )
            for s in sheet.strips
        ],
    )


def _glass_schema(report: GlassReport) -> GlassSchema:
    return GlassSchema(
        sheet_type=report.spec.sheet_type,
        sheet_width_mm=plain_number(report.sheet.width_mm),
        sheet_height_mm=plain_number(report.sheet.height_mm),
        total_sheets=report.spec.total_sheets,
        sheets=[_sheet_schema(sheet) for sheet in report.sheets],
        other_cuts=[
            GlassCutSchema(
                width_mm=plain_number(cut.width_mm),
                height_mm=plain_number(cut.height_mm),
                qty=cut.qty,
            )
            for cut in report.other_cuts
        ],
        unplaced_count=report.unplaced_count,
    )


def _material_schema(line: MaterialLine) -> MaterialLineSchema:
    return MaterialLineSchema(
        key=line.key,
        name=line.name,
        material_type=line.material_type,
        units=line.units,
        quantity=line.quantity,
        waste_factor=plain_number(line.waste_factor),
        unit_price=plain_number(line.unit_price),
        total=plain_number(line.total),
    )


def to_solution_schema(solution: SolutionOutput) -> SolutionSchema:
    """Convert a SolutionOutput into its JSON response model."""
    return SolutionSchema(
        is_valid=solution.is_valid,
        project_name=solution.meta.project_name,
        profiles=[_profile_schema(report) for report in solution.profiles],
        glass=[_glass_schema(report) for report in solution.glass],
        materials=[_material_schema(line) for line in solution.materials],
        failures=[
            ItemFailureSchema(
                section=f.section, kind=f.kind, subject=f.subject, message=f.message
            )
            for f in solution.failures
        ],
        total_bars=solution.total_bars,
        grand_total=plain_number(solution.grand_total),
    )


@router.post("", response_model=SolutionSchema)
async def build_layouts(solved: SolvedRequestDep) -> SolutionSchema:
    """Rebuild bar and sheet layouts from a calculation result.

    Profiles or sheet lists that cannot be reconstructed are reported in
    ``failures``; the others are still returned.

    Args:
        solved: Injected solution built from the request body.

    Returns:
        Layout descriptors for every profile and glass sheet.
    """
    return to_solution_schema(solved.solution)
