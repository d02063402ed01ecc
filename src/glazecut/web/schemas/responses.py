"""Pydantic response schemas for the REST API.

Millimeter values are plain JSON numbers: integers when whole, floats
otherwise.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class SegmentSchema(BaseModel):
    """One cut on a bar."""

    length_mm: float = Field(..., description="Cut length in millimeters")
    label: str = Field(..., description='Meter label, e.g. "1.2m"')


class BarBlockSchema(BaseModel):
    """A drawn block of a bar, cuts first and the off-cut last."""

    kind: Literal["cut", "offcut"]
    x_mm: float = Field(..., description="Offset from the left end of the bar")
    length_mm: float
    label: str


class LayoutSchema(BaseModel):
    """One bar pattern."""

    layout_id: str = Field(..., description="Display letter (A, B, C, ...)")
    key: str = Field(..., description="Stable identifier independent of plan order")
    repetition: int = Field(..., description="Bars cut with this pattern")
    repetition_label: str
    segments: list[SegmentSchema]
    offcut_mm: float
    offcut_label: str
    blocks: list[BarBlockSchema]


class ProfileTotalsSchema(BaseModel):
    stock_length_m: float
    total_bars: int
    total_quantity: int
    total_material_mm: float
    total_offcut_mm: float
    waste_percentage: float


class ProfileSchema(BaseModel):
    """Reconstructed layouts of one profile."""

    profile_name: str
    stock_length_mm: float
    layouts: list[LayoutSchema]
    totals: ProfileTotalsSchema


class WasteStripSchema(BaseModel):
    position: Literal["bottom", "right"]
    x_mm: float
    y_mm: float
    width_mm: float
    height_mm: float
    area_mm2: float
    visible: bool


class PlacedCutSchema(BaseModel):
    row: int
    column: int
    x_mm: float
    y_mm: float


class SheetSchema(BaseModel):
    """Grid placement on one glass sheet."""

    sheet_number: int
    cut_width_mm: float
    cut_height_mm: float
    cuts_per_row: int
    cuts_per_column: int
    used_width_mm: float
    used_height_mm: float
    waste_width_mm: float
    waste_height_mm: float
    placed_count: int
    utilization: float
    placements: list[PlacedCutSchema]
    strips: list[WasteStripSchema]


class GlassCutSchema(BaseModel):
    width_mm: float
    height_mm: float
    qty: int


class GlassSchema(BaseModel):
    """All sheets of one glass sheet type."""

    sheet_type: str
    sheet_width_mm: float
    sheet_height_mm: float
    total_sheets: int
    sheets: list[SheetSchema]
    other_cuts: list[GlassCutSchema] = Field(
        default_factory=list, description="Cut sizes not laid out on the grid"
    )
    unplaced_count: int = Field(default=0, description="Dominant cuts that did not fit")


class MaterialLineSchema(BaseModel):
    key: str
    name: str
    material_type: str
    units: int
    quantity: int
    waste_factor: float
    unit_price: float
    total: float


class ItemFailureSchema(BaseModel):
    section: Literal["profile", "glass"]
    kind: str
    subject: str
    message: str


class SolutionSchema(BaseModel):
    """Response for layout reconstruction."""

    is_valid: bool = Field(..., description="True when no item was skipped")
    project_name: str
    profiles: list[ProfileSchema] = Field(default_factory=list)
    glass: list[GlassSchema] = Field(default_factory=list)
    materials: list[MaterialLineSchema] = Field(default_factory=list)
    failures: list[ItemFailureSchema] = Field(default_factory=list)
    total_bars: int = 0
    grand_total: float = 0.0


class ExportFormatsSchema(BaseModel):
    """Response for export format listing."""

    formats: list[str] = Field(..., description="Available export formats")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: Any = Field(default=None, description="Additional error details")
