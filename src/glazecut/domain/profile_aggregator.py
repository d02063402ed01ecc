"""Per-profile totals over reconstructed layouts."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from glazecut.domain.value_objects import CuttingItem, Layout, ProfileTotals


class ProfileAggregator:
    """Combine all layouts of one profile into ``ProfileTotals``."""

    def aggregate(self, item: CuttingItem, layouts: Sequence[Layout]) -> ProfileTotals:
        """Sum bars, material length and off-cut over a profile's layouts.

        Args:
            item: The profile the layouts were reconstructed from.
            layouts: Output of ``LayoutReconstructor.reconstruct(item)``.

        Returns:
            Totals for the profile. ``total_quantity`` equals ``total_bars``.
        """
        total_bars = sum(layout.repetition for layout in layouts)
        total_offcut = sum(
            (layout.offcut_mm * layout.repetition for layout in layouts), Decimal(0)
        )
        return ProfileTotals(
            profile_name=item.profile_name,
            stock_length_m=item.stock_length_m,
            total_bars=total_bars,
            total_quantity=total_bars,
            total_material_mm=item.stock_length_mm * total_bars,
            total_offcut_mm=total_offcut,
        )
