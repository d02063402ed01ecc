"""Domain layer: plan decoding and layout reconstruction."""

from .errors import DecodeError, IntegrityError, LayoutError
from .layout_reconstructor import LayoutReconstructor, layout_letter
from .material_list import MaterialListPricer, material_key
from .plan_codec import DecodedEntry, PlanCodec, parse_cut_length
from .profile_aggregator import ProfileAggregator
from .sheet_reconstructor import SheetLayoutReconstructor, parse_sheet_type
from .value_objects import (
    CutCount,
    CuttingItem,
    GlassCut,
    GlassSheetSpec,
    Layout,
    MaterialLine,
    PlacedCut,
    ProfileTotals,
    Segment,
    SheetDimensions,
    SheetLayout,
    WasteStrip,
)

__all__ = [
    # Errors
    "DecodeError",
    "IntegrityError",
    "LayoutError",
    # Services
    "DecodedEntry",
    "LayoutReconstructor",
    "MaterialListPricer",
    "PlanCodec",
    "ProfileAggregator",
    "SheetLayoutReconstructor",
    "layout_letter",
    "material_key",
    "parse_cut_length",
    "parse_sheet_type",
    # Value objects
    "CutCount",
    "CuttingItem",
    "GlassCut",
    "GlassSheetSpec",
    "Layout",
    "MaterialLine",
    "PlacedCut",
    "ProfileTotals",
    "Segment",
    "SheetDimensions",
    "SheetLayout",
    "WasteStrip",
]
