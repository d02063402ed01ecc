"""SVG exporter for bar and sheet layout diagrams.

This module wraps LayoutDiagramRenderer to write every profile's bar
patterns and every glass sheet into one SVG document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from glazecut.infrastructure.exporters.base import BaseExporter, ExporterRegistry
from glazecut.infrastructure.layout_diagram_renderer import LayoutDiagramRenderer

if TYPE_CHECKING:
    from glazecut.application.config import ExportConfiguration
    from glazecut.application.dtos import SolutionOutput


@ExporterRegistry.register("svg")
class SvgExporter(BaseExporter):
    """SVG exporter for layout diagrams.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"
    media_type: ClassVar[str] = "image/svg+xml"

    def __init__(self, config: ExportConfiguration | None = None) -> None:
        self.renderer = LayoutDiagramRenderer(
            scale=config.svg.scale if config else 0.1,
            show_labels=config.svg.show_labels if config else True,
        )

    def render(self, output: SolutionOutput) -> bytes:
        return self.export_string(output).encode("utf-8")

    def export_string(self, output: SolutionOutput) -> str:
        return self.renderer.render_combined_svg(output)
