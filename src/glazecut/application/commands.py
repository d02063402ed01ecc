"""Application commands (use cases) for cutting list reconstruction."""

from __future__ import annotations

import logging
from decimal import Decimal

from glazecut.domain import (
    LayoutError,
    LayoutReconstructor,
    MaterialLine,
    MaterialListPricer,
    ProfileAggregator,
    SheetLayoutReconstructor,
    parse_sheet_type,
)

from .config.schema import ExportConfiguration, PriceListSchema
from .dtos import (
    ExportMeta,
    GlassReport,
    ItemFailure,
    ProfileReport,
    SolutionOutput,
)
from .schemas import CalculationResultSchema, CuttingListItemSchema, GlassListSchema

logger = logging.getLogger(__name__)


class BuildSolutionCommand:
    """Command to reconstruct every layout of a calculation result.

    Each profile and each glass list is reconstructed on its own. A
    ``LayoutError`` for one item is recorded as an ``ItemFailure`` and the
    remaining items are still built.
    """

    def __init__(
        self,
        layout_reconstructor: LayoutReconstructor | None = None,
        profile_aggregator: ProfileAggregator | None = None,
        sheet_reconstructor: SheetLayoutReconstructor | None = None,
        pricer: MaterialListPricer | None = None,
    ) -> None:
        self.layout_reconstructor = layout_reconstructor or LayoutReconstructor()
        self.profile_aggregator = profile_aggregator or ProfileAggregator()
        self.sheet_reconstructor = sheet_reconstructor or SheetLayoutReconstructor()
        self.pricer = pricer or MaterialListPricer()

    @classmethod
    def from_config(
        cls,
        config: ExportConfiguration,
        price_list: PriceListSchema | None = None,
    ) -> BuildSolutionCommand:
        """Create a command wired with the given settings and prices."""
        prices = price_list or PriceListSchema()
        return cls(
            sheet_reconstructor=SheetLayoutReconstructor(
                min_visible_offcut_mm=config.glass.min_visible_offcut_mm
            ),
            pricer=MaterialListPricer(prices.prices, prices.waste_factors),
        )

    def execute(
        self, result: CalculationResultSchema, meta: ExportMeta | None = None
    ) -> SolutionOutput:
        """Execute the reconstruction.

        Args:
            result: Validated calculation service payload.
            meta: Document identity; defaults to an untitled project.

        Returns:
            SolutionOutput with profile reports, glass reports, priced
            materials and any per-item failures.
        """
        output = SolutionOutput(meta=meta or ExportMeta())

        for item in result.cutting_list:
            report = self._build_profile(item, output.failures)
            if report is not None:
                output.profiles.append(report)

        for glass_list in result.glass_list:
            glass = self._build_glass(glass_list, output.failures)
            if glass is not None:
                output.glass.append(glass)

        output.materials = self._build_materials(result)

        logger.info(
            f"Built {len(output.profiles)} profile(s), {len(output.glass)} glass "
            f"list(s), {len(output.failures)} failure(s) for {output.meta.project_name!r}"
        )
        return output

    def _build_profile(
        self, item: CuttingListItemSchema, failures: list[ItemFailure]
    ) -> ProfileReport | None:
        try:
            cutting_item = item.to_domain()
            layouts = self.layout_reconstructor.reconstruct(cutting_item)
        except LayoutError as e:
            logger.warning(f"Skipping profile {item.profile_name!r}: {e.message}")
            failures.append(
                ItemFailure(
                    section="profile",
                    kind=e.kind,
                    subject=item.profile_name,
                    message=e.message,
                )
            )
            return None

        totals = self.profile_aggregator.aggregate(cutting_item, layouts)
        return ProfileReport(item=cutting_item, layouts=layouts, totals=totals)

    def _build_glass(
        self, glass_list: GlassListSchema, failures: list[ItemFailure]
    ) -> GlassReport | None:
        spec = glass_list.to_spec()
        try:
            cuts = glass_list.to_cuts()
            sheet = parse_sheet_type(spec.sheet_type)
            sheets = self.sheet_reconstructor.reconstruct_all(spec, cuts)
        except LayoutError as e:
            logger.warning(f"Skipping glass sheet {spec.sheet_type!r}: {e.message}")
            failures.append(
                ItemFailure(
                    section="glass",
                    kind=e.kind,
                    subject=spec.sheet_type,
                    message=e.message,
                )
            )
            return None

        return GlassReport(spec=spec, sheet=sheet, cuts=cuts, sheets=sheets)

    def _build_materials(self, result: CalculationResultSchema) -> list[MaterialLine]:
        lines = [
            self.pricer.price(entry.item, entry.units, entry.type)
            for entry in result.material_list
        ]
        lines.extend(
            self.pricer.price(accessory.name, accessory.qty, "Accessory")
            for accessory in result.accessory_totals
        )
        # Rubber is bought as one roll per gasket type; the length goes in the name.
        lines.extend(
            self.pricer.price(
                f"{rubber.name} ({rubber.total_meters.quantize(Decimal('0.01'))}m)",
                1,
                "Rubber",
            )
            for rubber in result.rubber_totals
        )
        return lines
