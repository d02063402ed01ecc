"""SVG rendering of reconstructed bar and sheet layouts.

Bars are drawn as a row of cut blocks, left to right in decode order,
with the off-cut hatched at the right end. Glass sheets are drawn as the
grid of placed cuts with the bottom and right waste strips shaded.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from glazecut.domain.value_objects import plain_number

if TYPE_CHECKING:
    from glazecut.application.dtos import SolutionOutput
    from glazecut.domain import Layout, SheetLayout

HATCH_DEFS = (
    "  <defs>\n"
    '    <pattern id="offcut-hatch" width="6" height="6" '
    'patternUnits="userSpaceOnUse" patternTransform="rotate(45)">\n'
    '      <line x1="0" y1="0" x2="0" y2="6" stroke="#999999" stroke-width="2"/>\n'
    "    </pattern>\n"
    "  </defs>"
)


class LayoutDiagramRenderer:
    """Renders bar and sheet layouts in SVG format.

    Attributes:
        scale: Pixels per millimeter (default 0.1).
        bar_height: Height of a drawn bar in pixels.
        cut_fill: Fill color for cut blocks.
        cut_stroke: Stroke color for outlines.
        waste_fill: Fill color for glass waste strips.
        text_color: Color for labels.
        show_labels: Whether to draw cut labels inside blocks.
    """

    header_height = 24
    spacing = 16

    def __init__(
        self,
        scale: float = 0.1,
        bar_height: float = 30.0,
        cut_fill: str = "#ADD8E6",  # Light blue
        cut_stroke: str = "#000000",  # Black
        waste_fill: str = "#D3D3D3",  # Light gray
        text_color: str = "#000000",  # Black
        show_labels: bool = True,
    ) -> None:
        self.scale = scale
        self.bar_height = bar_height
        self.cut_fill = cut_fill
        self.cut_stroke = cut_stroke
        self.waste_fill = waste_fill
        self.text_color = text_color
        self.show_labels = show_labels

    def _px(self, value_mm) -> float:
        return round(float(value_mm) * self.scale, 2)

    def _text(self, x: float, y: float, text: str, size: float = 12, anchor: str = "start") -> str:
        return (
            f'<text x="{x}" y="{y}" text-anchor="{anchor}" '
            f'font-family="Arial, sans-serif" font-size="{size}" '
            f'fill="{self.text_color}">{escape(text)}</text>'
        )

    def bar_height_px(self) -> float:
        return self.header_height + self.bar_height

    def sheet_height_px(self, sheet: SheetLayout) -> float:
        return self.header_height + self._px(sheet.sheet.height_mm)

    def render_bar(self, layout: Layout, y_offset: float = 0.0) -> str:
        """Render one bar pattern as SVG elements.

        Args:
            layout: The bar pattern.
            y_offset: Vertical position of the header line in pixels.

        Returns:
            SVG elements (without the enclosing ``<svg>`` tag).
        """
        top = y_offset + self.header_height
        header = (
            f"{layout.layout_id}  {layout.repetition_label}  "
            f"off-cut {layout.offcut_label}"
        )
        parts = [
            f"  <!-- Layout {layout.layout_id} -->",
            "  " + self._text(0, y_offset + self.header_height - 8, header),
        ]

        x = 0.0
        for segment in layout.segments:
            w = self._px(segment.length_mm)
            parts.append(
                f'  <rect x="{x}" y="{top}" width="{w}" height="{self.bar_height}" '
                f'fill="{self.cut_fill}" stroke="{self.cut_stroke}"/>'
            )
            font_size = min(12, w / 4)
            if self.show_labels and font_size >= 6:
                parts.append(
                    "  "
                    + self._text(
                        x + w / 2,
                        top + self.bar_height / 2 + font_size / 3,
                        segment.label,
                        size=font_size,
                        anchor="middle",
                    )
                )
            x = round(x + w, 2)

        # Off-cut is always the right-most block
        if layout.offcut_mm > 0:
            parts.append(
                f'  <rect x="{x}" y="{top}" width="{self._px(layout.offcut_mm)}" '
                f'height="{self.bar_height}" fill="url(#offcut-hatch)" '
                f'stroke="{self.cut_stroke}" stroke-dasharray="4,2"/>'
            )
        return "\n".join(parts)

    def render_sheet(self, sheet: SheetLayout, total_sheets: int = 1, y_offset: float = 0.0) -> str:
        """Render one glass sheet as SVG elements."""
        top = y_offset + self.header_height
        header = (
            f"Sheet {sheet.sheet_number} of {total_sheets} - {sheet.sheet.label} - "
            f"{sheet.placed_count} x {sheet.cut.label}mm - "
            f"{sheet.utilization * 100:.1f}% used"
        )
        parts = [
            f"  <!-- Sheet {sheet.sheet_number} -->",
            "  " + self._text(0, y_offset + self.header_height - 8, header),
            f'  <rect x="0" y="{top}" width="{self._px(sheet.sheet.width_mm)}" '
            f'height="{self._px(sheet.sheet.height_mm)}" fill="white" '
            f'stroke="{self.cut_stroke}" stroke-width="2"/>',
        ]

        # Waste strips first so cuts render on top
        for strip in sheet.strips:
            if not strip.visible or strip.is_empty:
                continue
            parts.append(
                f'  <rect x="{self._px(strip.x_mm)}" y="{round(top + self._px(strip.y_mm), 2)}" '
                f'width="{self._px(strip.width_mm)}" height="{self._px(strip.height_mm)}" '
                f'fill="{self.waste_fill}" stroke="none"/>'
            )

        for placed in sheet.placements():
            x = self._px(placed.x_mm)
            y = round(top + self._px(placed.y_mm), 2)
            w = self._px(placed.width_mm)
            h = self._px(placed.height_mm)
            parts.append(
                f'  <rect x="{x}" y="{y}" width="{w}" height="{h}" '
                f'fill="{self.cut_fill}" stroke="{self.cut_stroke}"/>'
            )
            font_size = min(12, min(w, h) / 6)
            if self.show_labels and font_size >= 6:
                parts.append(
                    "  "
                    + self._text(
                        x + w / 2, y + h / 2, sheet.cut.label, size=font_size, anchor="middle"
                    )
                )
        return "\n".join(parts)

    def render_combined_svg(self, output: SolutionOutput) -> str:
        """Generate a single SVG with every bar pattern and sheet stacked vertically.

        Returns:
            SVG document as a string.
        """
        if not output.profiles and not output.glass:
            return (
                '<svg width="200" height="50" xmlns="http://www.w3.org/2000/svg">'
                '<text x="10" y="30">No layouts to display</text></svg>'
            )

        body: list[str] = []
        y = 0.0
        width = 0.0

        for report in output.profiles:
            body.append("  " + self._text(0, y + 16, report.profile_name, size=14))
            y += self.header_height
            width = max(width, self._px(report.item.stock_length_mm))
            for layout in report.layouts:
                body.append(self.render_bar(layout, y))
                y += self.bar_height_px() + self.spacing / 2
            y += self.spacing

        for report in output.glass:
            width = max(width, self._px(report.sheet.width_mm))
            for sheet in report.sheets:
                body.append(self.render_sheet(sheet, len(report.sheets), y))
                y += self.sheet_height_px(sheet) + self.spacing

        # Leave room for the header text of narrow diagrams
        width = max(width, 360.0)
        parts = [
            f'<svg width="{width}" height="{y}" xmlns="http://www.w3.org/2000/svg">',
            HATCH_DEFS,
            f'  <rect x="0" y="0" width="{width}" height="{y}" fill="white"/>',
            *body,
            "</svg>",
        ]
        return "\n".join(parts)

    def describe_bar(self, layout: Layout) -> list[dict]:
        """Return the drawn blocks of a bar as plain dictionaries.

        Offsets and lengths are in millimeters; the off-cut is last.
        """
        blocks: list[dict] = []
        x = Decimal(0)
        for segment in layout.segments:
            blocks.append(
                {
                    "kind": "cut",
                    "x_mm": plain_number(x),
                    "length_mm": plain_number(segment.length_mm),
                    "label": segment.label,
                }
            )
            x += segment.length_mm
        blocks.append(
            {
                "kind": "offcut",
                "x_mm": plain_number(x),
                "length_mm": plain_number(layout.offcut_mm),
                "label": layout.offcut_label,
            }
        )
        return blocks
