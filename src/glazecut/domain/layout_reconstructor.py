"""Reconstruct ordered bar layouts from a profile's cutting plan."""

from __future__ import annotations

import logging
import uuid
from collections import Counter
from decimal import Decimal
from string import ascii_uppercase

from glazecut.domain.errors import IntegrityError
from glazecut.domain.plan_codec import PlanCodec
from glazecut.domain.value_objects import CutCount, CuttingItem, Layout, plain_number

logger = logging.getLogger(__name__)

LAYOUT_KEY_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "glazecut:layout")


def layout_letter(index: int) -> str:
    """Return the display letter for a zero-based plan position.

    Positions past Z continue spreadsheet-style: AA, AB, ...

    Examples:
        >>> layout_letter(0), layout_letter(25), layout_letter(26)
        ('A', 'Z', 'AA')
    """
    if index < 0:
        raise ValueError("Layout index must be non-negative")
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = ascii_uppercase[remainder] + letters
    return letters


def layout_key(profile_name: str, counts: tuple[CutCount, ...], occurrence: int) -> str:
    """Derive a stable layout identifier from the pattern's content.

    Identical patterns of the same profile are told apart by their
    occurrence number, so the key survives re-ordering of unrelated
    patterns.
    """
    pattern = ",".join(f"{plain_number(c.length_mm)}x{c.count}" for c in counts)
    return str(uuid.uuid5(LAYOUT_KEY_NAMESPACE, f"{profile_name}|{pattern}|{occurrence}"))


class LayoutReconstructor:
    """Turn a ``CuttingItem`` into one ``Layout`` per plan entry.

    Layouts keep plan order and segments keep decode order. The letters
    assigned here are the ones every view and export shows, so the result
    must never be re-sorted.
    """

    def __init__(self, codec: PlanCodec | None = None) -> None:
        self.codec = codec or PlanCodec()

    def reconstruct(self, item: CuttingItem) -> list[Layout]:
        """Reconstruct all layouts of a profile.

        Args:
            item: The profile's stock length and plan entries.

        Returns:
            Layouts in plan order, lettered A, B, C, ...

        Raises:
            DecodeError: If any plan entry cannot be decoded.
            IntegrityError: If any pattern's cuts exceed the stock length.
        """
        layouts: list[Layout] = []
        seen: Counter[tuple[CutCount, ...]] = Counter()

        for index, entry in enumerate(item.plan):
            letter = layout_letter(index)
            decoded = self.codec.decode(entry)
            total_used = sum((s.length_mm for s in decoded.segments), Decimal(0))
            offcut = item.stock_length_mm - total_used
            if offcut < 0:
                raise IntegrityError(
                    f"Layout {letter} uses {plain_number(total_used)}mm but the stock "
                    f"bar is only {plain_number(item.stock_length_mm)}mm "
                    f"(off-cut {plain_number(offcut)}mm)",
                    subject=item.profile_name,
                )

            occurrence = seen[decoded.counts]
            seen[decoded.counts] += 1

            layouts.append(
                Layout(
                    layout_id=letter,
                    segments=decoded.segments,
                    repetition=decoded.repetition,
                    offcut_mm=offcut,
                    stock_length_mm=item.stock_length_mm,
                    key=layout_key(item.profile_name, decoded.counts, occurrence),
                )
            )

        logger.debug(f"Reconstructed {len(layouts)} layout(s) for {item.profile_name!r}")
        return layouts
