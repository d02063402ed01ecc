"""Codec for the compact cutting-plan encoding.

The calculation service returns each bar pattern as a mapping from a
self-describing key to an array of identical markers, for example::

    {"cut_1200mm": ["cut_1200mm", "cut_1200mm", "cut_1200mm"]}

The embedded length is the cut length and the array size is the number of
times that cut appears in the pattern. This module is the only place that
understands that shape; everything downstream works with ``CutCount`` and
``Segment``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Sequence

from glazecut.domain.errors import DecodeError
from glazecut.domain.value_objects import CutCount, Segment, plain_number

logger = logging.getLogger(__name__)

CUT_LENGTH_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*mm", re.IGNORECASE)


@dataclass(frozen=True)
class DecodedEntry:
    """Result of decoding one plan entry.

    Attributes:
        counts: Typed (length, count) pairs in key order.
        segments: One segment per physical cut, in key order.
        repetition: Largest count observed across the entry's keys.
    """

    counts: tuple[CutCount, ...]
    segments: tuple[Segment, ...]
    repetition: int


def parse_cut_length(key: str) -> Decimal:
    """Extract the length in millimeters embedded in a plan key.

    Args:
        key: Plan key such as "cut_1200mm" or "length 5850mm".

    Returns:
        The first embedded length as a Decimal.

    Raises:
        DecodeError: If the key has no ``<number>mm`` substring or the
            number is zero.
    """
    match = CUT_LENGTH_PATTERN.search(key)
    if match is None:
        raise DecodeError(f"Plan key has no embedded length in mm: {key!r}", subject=key)
    length = Decimal(match.group(1))
    if length <= 0:
        raise DecodeError(f"Plan key embeds a non-positive length: {key!r}", subject=key)
    return length


class PlanCodec:
    """Translate between plan entries and typed cut counts."""

    key_template = "cut_{length}mm"

    def parse_entry(self, entry: Mapping[str, Sequence[Any]]) -> tuple[CutCount, ...]:
        """Parse one plan entry into typed cut counts.

        Raises:
            DecodeError: If the entry is empty, a key has no embedded
                length, or a marker collection is empty or not a sequence.
        """
        if not entry:
            raise DecodeError("Plan entry has no cut keys")

        counts: list[CutCount] = []
        for key, markers in entry.items():
            length = parse_cut_length(key)
            if isinstance(markers, (str, bytes)) or not isinstance(markers, Sequence):
                raise DecodeError(
                    f"Markers for {key!r} must be an array, got {type(markers).__name__}",
                    subject=key,
                )
            if len(markers) == 0:
                raise DecodeError(f"Plan key {key!r} has no markers", subject=key)
            counts.append(CutCount(length_mm=length, count=len(markers)))
        return tuple(counts)

    def decode(self, entry: Mapping[str, Sequence[Any]]) -> DecodedEntry:
        """Decode a plan entry into segments and a repetition count.

        Each count is expanded into that many ``Segment`` instances so
        every physical cut can be drawn as its own block.
        """
        counts = self.parse_entry(entry)
        segments: list[Segment] = []
        for cut in counts:
            segment = Segment.of_length(cut.length_mm)
            segments.extend([segment] * cut.count)
        repetition = max(cut.count for cut in counts)
        logger.debug(
            f"Decoded {len(counts)} key(s) into {len(segments)} segment(s), "
            f"repetition {repetition}"
        )
        return DecodedEntry(
            counts=counts,
            segments=tuple(segments),
            repetition=repetition,
        )

    def encode(self, counts: Sequence[CutCount]) -> dict[str, list[str]]:
        """Rebuild the compact plan entry for a sequence of cut counts.

        Counts with the same length are merged, because a mapping cannot
        hold the same key twice.
        """
        entry: dict[str, list[str]] = {}
        for cut in counts:
            key = self.key_template.format(length=plain_number(cut.length_mm))
            entry.setdefault(key, []).extend([key] * cut.count)
        return entry
