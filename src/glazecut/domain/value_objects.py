"""Value objects for reconstructed cutting layouts.

All lengths are millimeters held as ``Decimal`` so off-cut and waste
arithmetic is exact. Every dataclass is frozen; instances are derived
from one calculation result and discarded after rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterator, Literal, Mapping, Sequence

from glazecut.domain.errors import IntegrityError

MM_PER_M = Decimal(1000)
_ONE_DECIMAL = Decimal("0.1")


def to_decimal(value: Any) -> Decimal:
    """Convert a JSON number (or numeric string) to an exact Decimal."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def mm_to_m(length_mm: Decimal) -> Decimal:
    """Convert millimeters to meters without rounding."""
    return length_mm / MM_PER_M


def round_m(length_mm: Decimal) -> Decimal:
    """Convert millimeters to meters rounded half-up to one decimal place."""
    return mm_to_m(length_mm).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


def meters_label(length_mm: Decimal) -> str:
    """Format a length as a meter label, e.g. 1200 -> "1.2m"."""
    return f"{round_m(length_mm)}m"


def plain_number(value: Decimal) -> int | float:
    """Return an int for integral values, otherwise a float."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


@dataclass(frozen=True)
class CutCount:
    """One cut length and how many times it occurs in a bar pattern.

    This is the typed form of a single ``{cut_key: [markers...]}`` pair.
    """

    length_mm: Decimal
    count: int

    def __post_init__(self) -> None:
        if self.length_mm <= 0:
            raise ValueError("Cut length must be positive")
        if self.count < 1:
            raise ValueError("Cut count must be at least 1")


@dataclass(frozen=True)
class Segment:
    """One physical piece to be cut from a bar."""

    length_mm: Decimal
    label: str

    @classmethod
    def of_length(cls, length_mm: Decimal) -> Segment:
        return cls(length_mm=length_mm, label=meters_label(length_mm))

    @property
    def length_m(self) -> Decimal:
        return mm_to_m(self.length_mm)


@dataclass(frozen=True)
class CuttingItem:
    """All bar patterns planned for one profile type.

    Attributes:
        profile_name: Display name of the aluminum profile.
        stock_length_mm: Length of one purchasable stock bar.
        plan: Bar patterns in the compact wire shape, in plan order.
    """

    profile_name: str
    stock_length_mm: Decimal
    plan: tuple[Mapping[str, Sequence[Any]], ...] = ()

    def __post_init__(self) -> None:
        if self.stock_length_mm <= 0:
            raise IntegrityError(
                f"Stock length must be positive, got {self.stock_length_mm}",
                subject=self.profile_name,
            )

    @property
    def stock_length_m(self) -> Decimal:
        return mm_to_m(self.stock_length_mm)


@dataclass(frozen=True)
class Layout:
    """One reconstructed bar pattern.

    Segments are in decode order and are always drawn left to right, with
    the off-cut last.

    Attributes:
        layout_id: Display letter (A, B, C, ...) from the position in the plan.
        segments: Individual cuts, one per physical piece.
        repetition: Number of bars cut with this exact pattern.
        offcut_mm: Stock length minus the sum of segment lengths.
        stock_length_mm: Stock bar length the pattern is cut from.
        key: Stable identifier that does not depend on plan position.
    """

    layout_id: str
    segments: tuple[Segment, ...]
    repetition: int
    offcut_mm: Decimal
    stock_length_mm: Decimal
    key: str = ""

    def __post_init__(self) -> None:
        if self.repetition < 1:
            raise ValueError("Repetition must be at least 1")

    @property
    def used_mm(self) -> Decimal:
        return sum((s.length_mm for s in self.segments), Decimal(0))

    @property
    def offcut_m(self) -> Decimal:
        return round_m(self.offcut_mm)

    @property
    def offcut_label(self) -> str:
        return meters_label(self.offcut_mm)

    @property
    def offcut_ratio(self) -> float:
        """Fraction of the bar left as off-cut (0.0 to 1.0)."""
        return float(self.offcut_mm / self.stock_length_mm)

    @property
    def cut_labels(self) -> tuple[str, ...]:
        return tuple(s.label for s in self.segments)

    @property
    def repetition_label(self) -> str:
        return f"{self.repetition}X"


@dataclass(frozen=True)
class ProfileTotals:
    """Per-profile totals shown in summaries and document headers.

    ``total_quantity`` is the same number as ``total_bars``: one stock bar
    is purchased per repetition.
    """

    profile_name: str
    stock_length_m: Decimal
    total_bars: int
    total_quantity: int
    total_material_mm: Decimal = Decimal(0)
    total_offcut_mm: Decimal = Decimal(0)

    @property
    def waste_percentage(self) -> float:
        if self.total_material_mm == 0:
            return 0.0
        return float(self.total_offcut_mm / self.total_material_mm * 100)


@dataclass(frozen=True)
class SheetDimensions:
    """Width and height of a glass sheet in millimeters."""

    width_mm: Decimal
    height_mm: Decimal

    @property
    def area_mm2(self) -> Decimal:
        return self.width_mm * self.height_mm

    @property
    def label(self) -> str:
        return f"{plain_number(self.width_mm)}x{plain_number(self.height_mm)}mm"


@dataclass(frozen=True)
class GlassSheetSpec:
    """Sheet type as returned by the calculation service, e.g. "3310x2140mm"."""

    sheet_type: str
    total_sheets: int

    def __post_init__(self) -> None:
        if self.total_sheets < 0:
            raise ValueError("Total sheets cannot be negative")


@dataclass(frozen=True)
class GlassCut:
    """A rectangular glass piece and the ordered quantity."""

    width_mm: Decimal
    height_mm: Decimal
    qty: int

    def __post_init__(self) -> None:
        if self.width_mm <= 0 or self.height_mm <= 0:
            raise IntegrityError(
                "Glass cut dimensions must be positive",
                subject=f"{self.width_mm}x{self.height_mm}",
            )
        if self.qty < 0:
            raise ValueError("Glass cut quantity cannot be negative")

    @property
    def label(self) -> str:
        return f"{plain_number(self.width_mm)}x{plain_number(self.height_mm)}"


@dataclass(frozen=True)
class WasteStrip:
    """Rectangular leftover region on a sheet.

    Coordinates have their origin at the top-left corner of the sheet.
    """

    position: Literal["bottom", "right"]
    x_mm: Decimal
    y_mm: Decimal
    width_mm: Decimal
    height_mm: Decimal
    visible: bool = True

    @property
    def area_mm2(self) -> Decimal:
        return self.width_mm * self.height_mm

    @property
    def is_empty(self) -> bool:
        return self.area_mm2 == 0


@dataclass(frozen=True)
class PlacedCut:
    """Grid cell occupied by one cut on a sheet."""

    row: int
    column: int
    x_mm: Decimal
    y_mm: Decimal
    width_mm: Decimal
    height_mm: Decimal


@dataclass(frozen=True)
class SheetLayout:
    """Grid placement of the dominant cut on one glass sheet.

    Attributes:
        sheet_number: One-based sheet number.
        sheet: Sheet dimensions.
        cut: The cut rectangle placed in the grid.
        cuts_per_row: Cuts that fit across the sheet width.
        cuts_per_column: Cuts that fit down the sheet height.
        used_width_mm: Width covered by the grid.
        used_height_mm: Height covered by the grid.
        waste_width_mm: Sheet width minus used width.
        waste_height_mm: Sheet height minus used height.
        placed_count: Cuts shown on this sheet, never more than were ordered.
        strips: Bottom and right waste strips, in that order.
    """

    sheet_number: int
    sheet: SheetDimensions
    cut: GlassCut
    cuts_per_row: int
    cuts_per_column: int
    used_width_mm: Decimal
    used_height_mm: Decimal
    waste_width_mm: Decimal
    waste_height_mm: Decimal
    placed_count: int
    strips: tuple[WasteStrip, ...] = field(default_factory=tuple)

    @property
    def capacity(self) -> int:
        return self.cuts_per_row * self.cuts_per_column

    @property
    def utilization(self) -> float:
        """Fraction of the sheet area covered by placed cuts."""
        used = self.cut.width_mm * self.cut.height_mm * self.placed_count
        return float(used / self.sheet.area_mm2)

    @property
    def bottom_strip(self) -> WasteStrip | None:
        return next((s for s in self.strips if s.position == "bottom"), None)

    @property
    def right_strip(self) -> WasteStrip | None:
        return next((s for s in self.strips if s.position == "right"), None)

    def placements(self) -> Iterator[PlacedCut]:
        """Yield the occupied grid cells row by row, left to right."""
        for index in range(self.placed_count):
            row, column = divmod(index, self.cuts_per_row)
            yield PlacedCut(
                row=row,
                column=column,
                x_mm=self.cut.width_mm * column,
                y_mm=self.cut.height_mm * row,
                width_mm=self.cut.width_mm,
                height_mm=self.cut.height_mm,
            )


@dataclass(frozen=True)
class MaterialLine:
    """A priced line of the material list.

    Attributes:
        key: Stable identifier derived from the item name and type.
        name: Item description, e.g. "Transom (55x55mm)".
        material_type: Unit family reported by the calculation service.
        units: Quantity reported by the calculation service.
        quantity: Quantity after the waste factor is applied.
        waste_factor: Extra percentage added to cover breakage and overage.
        unit_price: Price per unit; 0 when no price was entered.
    """

    key: str
    name: str
    material_type: str
    units: int
    quantity: int
    waste_factor: Decimal = Decimal(0)
    unit_price: Decimal = Decimal(0)

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity
