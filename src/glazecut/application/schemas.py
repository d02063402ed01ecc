"""Pydantic models for the calculation service payload.

These models validate the shape of a ``CalculationResult``. Domain rules
that can fail for a single profile or sheet (plan keys without a length,
cuts longer than the bar, non-positive stock or glass dimensions) are
left to the domain layer so one bad item does not reject the whole
payload.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from glazecut.domain.value_objects import CuttingItem, GlassCut, GlassSheetSpec


class CuttingListItemSchema(BaseModel):
    """One profile of the cutting list.

    Attributes:
        profile_name: Profile display name, e.g. "Transom (55x55mm)".
        stock_length: Stock bar length in millimeters (e.g. 5850 or 6000).
        plan: Bar patterns; each maps a cut key to an array of markers.
    """

    model_config = ConfigDict(extra="ignore")

    profile_name: str = Field(..., min_length=1)
    stock_length: Decimal = Field(..., description="Stock bar length in mm")
    plan: list[dict[str, Any]] = Field(default_factory=list)

    def to_domain(self) -> CuttingItem:
        return CuttingItem(
            profile_name=self.profile_name,
            stock_length_mm=self.stock_length,
            plan=tuple(self.plan),
        )


class GlassCutSchema(BaseModel):
    """One cut rectangle of the glass list (millimeters)."""

    model_config = ConfigDict(extra="ignore")

    w: Decimal
    h: Decimal
    qty: int = Field(default=1, ge=0)

    def to_domain(self) -> GlassCut:
        return GlassCut(width_mm=self.w, height_mm=self.h, qty=self.qty)


class GlassListSchema(BaseModel):
    """Glass sheets of one type and the cuts planned on them."""

    model_config = ConfigDict(extra="ignore")

    sheet_type: str = Field(..., min_length=1, description='e.g. "3310x2140mm"')
    total_sheets: int = Field(default=0, ge=0)
    cuts: list[GlassCutSchema] = Field(default_factory=list)

    def to_spec(self) -> GlassSheetSpec:
        return GlassSheetSpec(sheet_type=self.sheet_type, total_sheets=self.total_sheets)

    def to_cuts(self) -> list[GlassCut]:
        return [cut.to_domain() for cut in self.cuts]


class MaterialListItemSchema(BaseModel):
    """One material list line as reported by the calculation service."""

    model_config = ConfigDict(extra="ignore")

    item: str = Field(..., min_length=1)
    units: int = Field(default=0, ge=0)
    type: str = "Profile"


class RubberTotalSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    total_meters: Decimal = Field(default=Decimal(0), ge=0)


class AccessoryTotalSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    qty: int = Field(default=0, ge=0)


class CalculationResultSchema(BaseModel):
    """Complete calculation result for one project.

    Field names follow the calculation service (camelCase aliases);
    snake_case names are accepted as well.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    material_list: list[MaterialListItemSchema] = Field(
        default_factory=list, alias="materialList"
    )
    cutting_list: list[CuttingListItemSchema] = Field(
        default_factory=list, alias="cuttingList"
    )
    glass_list: list[GlassListSchema] = Field(default_factory=list, alias="glassList")
    rubber_totals: list[RubberTotalSchema] = Field(
        default_factory=list, alias="rubberTotals"
    )
    accessory_totals: list[AccessoryTotalSchema] = Field(
        default_factory=list, alias="accessoryTotals"
    )

    @field_validator("glass_list", mode="before")
    @classmethod
    def wrap_single_glass_list(cls, value: Any) -> Any:
        """The service returns one glass list object; accept a list too."""
        if value is None:
            return []
        if isinstance(value, dict):
            return [value]
        return value
