"""Grid reconstruction of glass sheet cutting layouts.

The calculation service only reports the sheet type, the number of
sheets and the list of cut rectangles. The view of each sheet is rebuilt
here as a simple grid of the dominant (first) cut, with the leftover
region split into a bottom strip and a right strip:

    +-----------+----+
    | cut | cut |    |
    +-----+-----+ R  |
    | cut | cut |    |
    +-----+-----+    |
    |  bottom   |    |
    +-----------+----+

Mixed-size sheets are not packed; that is the calculation service's job.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Sequence

from glazecut.domain.errors import DecodeError, IntegrityError
from glazecut.domain.value_objects import (
    GlassCut,
    GlassSheetSpec,
    SheetDimensions,
    SheetLayout,
    WasteStrip,
)

logger = logging.getLogger(__name__)

SHEET_TYPE_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?)\s*[x×]\s*(\d+(?:\.\d+)?)\s*mm", re.IGNORECASE
)

# Leftover strips narrower than this are not worth drawing.
DEFAULT_MIN_VISIBLE_OFFCUT_MM = Decimal(50)


def parse_sheet_type(sheet_type: str) -> SheetDimensions:
    """Parse a sheet type such as "3310x2140mm".

    Raises:
        DecodeError: If the string has no ``<w>x<h>mm`` dimension or a
            dimension is zero.
    """
    match = SHEET_TYPE_PATTERN.search(sheet_type)
    if match is None:
        raise DecodeError(
            f"Sheet type has no WxH dimension in mm: {sheet_type!r}", subject=sheet_type
        )
    width, height = Decimal(match.group(1)), Decimal(match.group(2))
    if width <= 0 or height <= 0:
        raise DecodeError(
            f"Sheet type has a zero dimension: {sheet_type!r}", subject=sheet_type
        )
    return SheetDimensions(width_mm=width, height_mm=height)


class SheetLayoutReconstructor:
    """Compute the grid placement and waste strips for glass sheets.

    Attributes:
        min_visible_offcut_mm: Strips thinner than this are reported with
            ``visible=False``. Their dimensions are still exact.
    """

    def __init__(
        self, min_visible_offcut_mm: Decimal = DEFAULT_MIN_VISIBLE_OFFCUT_MM
    ) -> None:
        self.min_visible_offcut_mm = Decimal(min_visible_offcut_mm)

    def reconstruct_sheet(
        self,
        spec: GlassSheetSpec,
        cut: GlassCut,
        sheet_index: int,
        remaining_qty: int | None = None,
    ) -> SheetLayout:
        """Reconstruct one sheet.

        Args:
            spec: Sheet type and count.
            cut: The dominant cut rectangle.
            sheet_index: Zero-based position of the sheet.
            remaining_qty: Pieces still to place; defaults to ``cut.qty``.

        Returns:
            The sheet's grid layout. ``placed_count`` never exceeds the
            remaining ordered quantity.

        Raises:
            DecodeError: If the sheet type cannot be parsed.
            IntegrityError: If the cut does not fit on the sheet at all.
        """
        sheet = parse_sheet_type(spec.sheet_type)
        cuts_per_row = int(sheet.width_mm // cut.width_mm)
        cuts_per_column = int(sheet.height_mm // cut.height_mm)
        if cuts_per_row == 0 or cuts_per_column == 0:
            raise IntegrityError(
                f"Cut {cut.label}mm does not fit on a {sheet.label} sheet",
                subject=spec.sheet_type,
            )

        used_width = cut.width_mm * cuts_per_row
        used_height = cut.height_mm * cuts_per_column
        waste_width = sheet.width_mm - used_width
        waste_height = sheet.height_mm - used_height
        if waste_width < 0 or waste_height < 0:
            raise IntegrityError(
                f"Negative waste on a {sheet.label} sheet", subject=spec.sheet_type
            )

        wanted = cut.qty if remaining_qty is None else max(remaining_qty, 0)
        placed = min(wanted, cuts_per_row * cuts_per_column)

        strips = (
            WasteStrip(
                position="bottom",
                x_mm=Decimal(0),
                y_mm=used_height,
                width_mm=used_width,
                height_mm=waste_height,
                visible=waste_height >= self.min_visible_offcut_mm,
            ),
            WasteStrip(
                position="right",
                x_mm=used_width,
                y_mm=Decimal(0),
                width_mm=waste_width,
                height_mm=sheet.height_mm,
                visible=waste_width >= self.min_visible_offcut_mm,
            ),
        )

        return SheetLayout(
            sheet_number=sheet_index + 1,
            sheet=sheet,
            cut=cut,
            cuts_per_row=cuts_per_row,
            cuts_per_column=cuts_per_column,
            used_width_mm=used_width,
            used_height_mm=used_height,
            waste_width_mm=waste_width,
            waste_height_mm=waste_height,
            placed_count=placed,
            strips=strips,
        )

    def reconstruct_all(
        self, spec: GlassSheetSpec, cuts: Sequence[GlassCut]
    ) -> list[SheetLayout]:
        """Reconstruct every sheet using the first cut as the dominant one.

        Pieces are handed out sheet by sheet, so the running total of
        placed pieces never exceeds the ordered quantity. Sheets after the
        order is filled hold zero pieces. This intentionally differs from
        showing ``min(capacity, qty)`` on every sheet, which would count
        the same pieces more than once.
        """
        if not cuts or spec.total_sheets == 0:
            return []

        dominant = cuts[0]
        if len(cuts) > 1:
            logger.debug(
                f"{spec.sheet_type}: {len(cuts) - 1} additional cut size(s) "
                "are not visualized"
            )

        layouts: list[SheetLayout] = []
        remaining = dominant.qty
        for index in range(spec.total_sheets):
            layout = self.reconstruct_sheet(spec, dominant, index, remaining)
            remaining -= layout.placed_count
            layouts.append(layout)

        if remaining > 0:
            logger.warning(
                f"{spec.sheet_type}: {remaining} piece(s) of {dominant.label}mm do not fit "
                f"on {spec.total_sheets} sheet(s) of capacity {layouts[0].capacity}"
            )
        return layouts

