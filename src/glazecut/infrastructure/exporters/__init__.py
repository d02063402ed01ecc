"""Exporter framework for cutting list outputs.

This package provides a unified exporter framework with:
- Exporter Protocol: Defines the interface for all exporters
- ExporterRegistry: Central registry for format discovery
- ExportManager: Coordinates multi-format export operations

Registered exporters:
- pdf: Printable cutting list (reportlab)
- xlsx: Excel workbook with cutting, glass and material sheets (openpyxl)
- svg: Bar and sheet layout diagrams
- text: Plain text summary for sharing

Usage:
    from glazecut.infrastructure.exporters import ExportManager, ExporterRegistry

    # List available formats
    formats = ExporterRegistry.available_formats()

    # Render one format in memory
    pdf_bytes = ExporterRegistry.create("pdf", config).render(solution)

    # Export to multiple formats
    manager = ExportManager(output_dir=Path("./output"), config=config)
    results = manager.export_all(["pdf", "xlsx"], solution)
"""

from glazecut.infrastructure.exporters.base import (
    BaseExporter,
    Exporter,
    ExporterRegistry,
    ExportIOError,
    ExportManager,
    write_artifact,
)

# Import exporters to trigger registration
from glazecut.infrastructure.exporters.excel import ExcelExporter
from glazecut.infrastructure.exporters.pdf import PdfExporter
from glazecut.infrastructure.exporters.share import ShareTextExporter
from glazecut.infrastructure.exporters.svg import SvgExporter

__all__ = [
    # Framework
    "BaseExporter",
    "Exporter",
    "ExporterRegistry",
    "ExportIOError",
    "ExportManager",
    "write_artifact",
    # Registered exporters
    "ExcelExporter",
    "PdfExporter",
    "ShareTextExporter",
    "SvgExporter",
]
