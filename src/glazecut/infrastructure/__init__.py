"""Infrastructure layer - document exporters and diagram rendering."""

from .exporters import (
    ExcelExporter,
    ExporterRegistry,
    ExportIOError,
    ExportManager,
    PdfExporter,
    ShareTextExporter,
    SvgExporter,
)
from .layout_diagram_renderer import LayoutDiagramRenderer

__all__ = [
    "ExcelExporter",
    "ExporterRegistry",
    "ExportIOError",
    "ExportManager",
    "LayoutDiagramRenderer",
    "PdfExporter",
    "ShareTextExporter",
    "SvgExporter",
]
