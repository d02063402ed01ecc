"""Pydantic schemas for the REST API."""

from glazecut.web.schemas.requests import SolutionRequest
from glazecut.web.schemas.responses import (
    BarBlockSchema,
    ErrorResponseSchema,
    ExportFormatsSchema,
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

__all__ = [
    # Requests
    "SolutionRequest",
    # Responses
    "BarBlockSchema",
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "GlassCutSchema",
    "GlassSchema",
    "ItemFailureSchema",
    "LayoutSchema",
    "MaterialLineSchema",
    "PlacedCutSchema",
    "ProfileSchema",
    "ProfileTotalsSchema",
    "SegmentSchema",
    "SheetSchema",
    "SolutionSchema",
    "WasteStripSchema",
]
