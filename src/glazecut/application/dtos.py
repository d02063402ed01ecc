"""Data Transfer Objects for the application layer."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

from glazecut.domain import (
    CuttingItem,
    GlassCut,
    GlassSheetSpec,
    Layout,
    MaterialLine,
    MaterialListPricer,
    ProfileTotals,
    SheetDimensions,
    SheetLayout,
)

# Characters that break file names or a quoted Content-Disposition value.
_UNSAFE_FILENAME_CHARS = re.compile(r'["\\/\x00-\x1f]')


@dataclass
class ExportMeta:
    """Document identity printed in every export header.

    Attributes:
        project_name: Project the cutting list belongs to.
        customer_name: Optional customer shown under the project.
        issue_date: Date printed on the document.
        company_name: Optional company name for the header line.
    """

    project_name: str = "Untitled"
    customer_name: str = ""
    issue_date: datetime.date = field(default_factory=datetime.date.today)
    company_name: str = ""

    @property
    def filename_stem(self) -> str:
        """Return the download file name without extension.

        Examples:
            >>> ExportMeta(project_name="Villa 12 Block B").filename_stem
            'Cutting-List-Villa-12-Block-B'
        """
        name = _UNSAFE_FILENAME_CHARS.sub("", self.project_name)
        slug = "-".join(name.split()) or "Untitled"
        return f"Cutting-List-{slug}"

    @property
    def title(self) -> str:
        return f"Cutting List for {self.project_name}"


@dataclass
class ProfileReport:
    """Reconstructed layouts and totals for one profile."""

    item: CuttingItem
    layouts: list[Layout]
    totals: ProfileTotals

    @property
    def profile_name(self) -> str:
        return self.item.profile_name


@dataclass
class GlassReport:
    """Reconstructed sheets for one glass sheet type.

    Only the first cut is laid out on the sheets; the others are listed
    by the exporters as not visualized.
    """

    spec: GlassSheetSpec
    sheet: SheetDimensions
    cuts: list[GlassCut]
    sheets: list[SheetLayout]

    @property
    def dominant_cut(self) -> GlassCut | None:
        return self.cuts[0] if self.cuts else None

    @property
    def other_cuts(self) -> list[GlassCut]:
        return self.cuts[1:]

    @property
    def total_placed(self) -> int:
        return sum(sheet.placed_count for sheet in self.sheets)

    @property
    def unplaced_count(self) -> int:
        dominant = self.dominant_cut
        if dominant is None:
            return 0
        return max(dominant.qty - self.total_placed, 0)


@dataclass
class ItemFailure:
    """A profile or glass list that could not be reconstructed.

    Attributes:
        section: Which part of the result the item belongs to.
        kind: Error kind ("decode" or "integrity").
        subject: Profile name or sheet type.
        message: Human-readable reason.
    """

    section: Literal["profile", "glass"]
    kind: str
    subject: str
    message: str


@dataclass
class SolutionOutput:
    """Everything the exporters render for one calculation result."""

    meta: ExportMeta
    profiles: list[ProfileReport] = field(default_factory=list)
    glass: list[GlassReport] = field(default_factory=list)
    materials: list[MaterialLine] = field(default_factory=list)
    failures: list[ItemFailure] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if every profile and glass list was reconstructed."""
        return len(self.failures) == 0

    @property
    def total_bars(self) -> int:
        return sum(report.totals.total_bars for report in self.profiles)

    @property
    def total_sheets(self) -> int:
        return sum(len(report.sheets) for report in self.glass)

    @property
    def grand_total(self) -> Decimal:
        return MaterialListPricer.grand_total(self.materials)
