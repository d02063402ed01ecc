"""Export settings schema.

Settings are optional; every field has a default so an empty JSON object
(or no settings file at all) yields a usable configuration.
"""

from decimal import Decimal
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

# Version 1.0: Initial export settings
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class PdfOutputConfigSchema(BaseModel):
    """PDF export configuration.

    Attributes:
        page_size: Paper size of the generated document.
        show_date: Whether the issue date is printed in the header.
    """

    model_config = ConfigDict(extra="forbid")

    page_size: Literal["A4", "letter"] = "A4"
    show_date: bool = True


class XlsxOutputConfigSchema(BaseModel):
    """Excel export configuration: worksheet titles."""

    model_config = ConfigDict(extra="forbid")

    sheet_title_cutting: str = Field(default="Cutting List", min_length=1, max_length=31)
    sheet_title_glass: str = Field(default="Glass Cutting", min_length=1, max_length=31)
    sheet_title_materials: str = Field(
        default="Material List", min_length=1, max_length=31
    )
    sheet_title_skipped: str = Field(default="Skipped", min_length=1, max_length=31)

    @field_validator(
        "sheet_title_cutting",
        "sheet_title_glass",
        "sheet_title_materials",
        "sheet_title_skipped",
    )
    @classmethod
    def validate_sheet_title(cls, v: str) -> str:
        """Excel rejects these characters in worksheet titles."""
        if any(ch in v for ch in "[]:*?/\\"):
            raise ValueError("Worksheet title cannot contain any of []:*?/\\")
        return v

    @model_validator(mode="after")
    def validate_distinct_titles(self) -> "XlsxOutputConfigSchema":
        """Excel compares worksheet titles case-insensitively."""
        titles = [
            self.sheet_title_cutting,
            self.sheet_title_glass,
            self.sheet_title_materials,
            self.sheet_title_skipped,
        ]
        if len({title.casefold() for title in titles}) != len(titles):
            raise ValueError(f"Worksheet titles must be distinct, got {titles}")
        return self


class SvgOutputConfigSchema(BaseModel):
    """SVG diagram configuration.

    Attributes:
        scale: Pixels per millimeter.
        show_labels: Whether cut labels are drawn inside each block.
    """

    model_config = ConfigDict(extra="forbid")

    scale: float = Field(default=0.1, gt=0, description="Pixels per mm")
    show_labels: bool = True


class GlassConfigSchema(BaseModel):
    """Glass sheet reconstruction settings."""

    model_config = ConfigDict(extra="forbid")

    min_visible_offcut_mm: Decimal = Field(
        default=Decimal(50),
        ge=0,
        description="Waste strips thinner than this are not drawn",
    )


class ExportConfiguration(BaseModel):
    """Root export settings.

    Example:
        >>> config = ExportConfiguration(company_name="Clearview Glazing")
        >>> config.pdf.page_size
        'A4'
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    company_name: str = ""
    pdf: PdfOutputConfigSchema = Field(default_factory=PdfOutputConfigSchema)
    xlsx: XlsxOutputConfigSchema = Field(default_factory=XlsxOutputConfigSchema)
    svg: SvgOutputConfigSchema = Field(default_factory=SvgOutputConfigSchema)
    glass: GlassConfigSchema = Field(default_factory=GlassConfigSchema)
    export_timeout_seconds: float = Field(
        default=30.0, gt=0, le=600, description="Web export timeout in seconds"
    )

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )


class PriceListSchema(BaseModel):
    """User-entered prices and waste factors for the material list.

    Keys are either the material's stable key or its item name.

    Example:
        {"prices": {"Transom (55x55mm)": 18500}, "waste_factors": {"Glass": 15}}
    """

    model_config = ConfigDict(extra="forbid")

    prices: dict[str, Decimal] = Field(default_factory=dict)
    waste_factors: dict[str, Decimal] = Field(default_factory=dict)

    @field_validator("prices", "waste_factors")
    @classmethod
    def validate_non_negative(cls, v: dict[str, Decimal]) -> dict[str, Decimal]:
        negative = sorted(k for k, amount in v.items() if amount < 0)
        if negative:
            raise ValueError(f"Values must be non-negative: {', '.join(negative)}")
        return v
