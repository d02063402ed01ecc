"""Tests for LayoutReconstructor and ProfileAggregator."""

from __future__ import annotations

from decimal import Decimal

import pytest

from glazecut.domain import (
    CuttingItem,
    DecodeError,
    IntegrityError,
    LayoutReconstructor,
    ProfileAggregator,
    layout_letter,
)


def make_item(stock: int | str, *plan: dict, name: str = "Transom (55x55mm)") -> CuttingItem:
    return CuttingItem(profile_name=name, stock_length_mm=Decimal(stock), plan=tuple(plan))


def markers(key: str, count: int) -> dict[str, list[str]]:
    return {key: [key] * count}


class TestLayoutLetter:
    """Tests for positional layout letters."""

    def test_first_letters(self) -> None:
        assert [layout_letter(i) for i in range(4)] == ["A", "B", "C", "D"]

    def test_continues_after_z(self) -> None:
        assert layout_letter(25) == "Z"
        assert layout_letter(26) == "AA"
        assert layout_letter(27) == "AB"

    def test_negative_index_raises(self) -> None:
        with pytest.raises(ValueError):
            layout_letter(-1)


class TestLayoutReconstructor:
    """Tests for LayoutReconstructor.reconstruct."""

    def setup_method(self) -> None:
        self.reconstructor = LayoutReconstructor()

    def test_single_pattern_offcut(self) -> None:
        """6000mm bar cut into four 1200mm pieces leaves 1200mm."""
        layouts = self.reconstructor.reconstruct(make_item(6000, markers("cut_1200mm", 4)))

        assert len(layouts) == 1
        layout = layouts[0]
        assert layout.layout_id == "A"
        assert layout.used_mm == Decimal(4800)
        assert layout.offcut_mm == Decimal(1200)
        assert layout.repetition == 4
        assert layout.offcut_label == "1.2m"
        assert layout.repetition_label == "4X"

    def test_layouts_are_lettered_in_plan_order(self) -> None:
        """Two patterns become A (rep 3) and B (rep 5)."""
        item = make_item(6000, markers("cut_1500mm", 3), markers("cut_1000mm", 5))
        layouts = self.reconstructor.reconstruct(item)

        assert [(l.layout_id, l.repetition) for l in layouts] == [("A", 3), ("B", 5)]

    def test_offcut_is_exact_for_decimal_lengths(self) -> None:
        """Off-cut arithmetic does not drift with fractional millimeters."""
        item = make_item("5850", {"cut_1949.9mm": ["x"] * 3})
        layout = self.reconstructor.reconstruct(item)[0]

        assert layout.offcut_mm == Decimal("0.3")
        assert layout.offcut_label == "0.0m"

    def test_offcut_identity_holds(self) -> None:
        item = make_item(
            6000,
            {"cut_2500mm": ["x", "x"], "cut_900mm": ["y"]},
            markers("cut_1750mm", 3),
        )
        for layout in self.reconstructor.reconstruct(item):
            total = sum((s.length_mm for s in layout.segments), Decimal(0))
            assert layout.offcut_mm == item.stock_length_mm - total
            assert layout.offcut_mm >= 0

    def test_zero_offcut_is_allowed(self) -> None:
        layout = self.reconstructor.reconstruct(make_item(5850, markers("cut_2925mm", 2)))[0]
        assert layout.offcut_mm == 0
        assert layout.offcut_label == "0.0m"

    def test_cuts_longer_than_stock_raise(self) -> None:
        """Negative off-cut is reported instead of clamped."""
        item = make_item(6000, markers("cut_1200mm", 4), markers("cut_2500mm", 3))

        with pytest.raises(IntegrityError) as exc_info:
            self.reconstructor.reconstruct(item)

        error = exc_info.value
        assert error.subject == "Transom (55x55mm)"
        assert "Layout B" in error.message
        assert "7500mm" in error.message

    def test_key_without_length_raises_decode_error(self) -> None:
        item = make_item(6000, markers("cut_1200mm", 2), markers("transom", 2))
        with pytest.raises(DecodeError):
            self.reconstructor.reconstruct(item)

    def test_reconstruct_is_deterministic(self) -> None:
        """Same input gives the same ids, keys and segment order."""
        item = make_item(
            6000,
            {"cut_2500mm": ["x", "x"], "cut_900mm": ["y"]},
            markers("cut_1200mm", 4),
        )
        assert self.reconstructor.reconstruct(item) == self.reconstructor.reconstruct(item)

    def test_segments_keep_decode_order(self) -> None:
        item = make_item(6000, {"cut_900mm": ["y"], "cut_2500mm": ["x", "x"]})
        layout = self.reconstructor.reconstruct(item)[0]
        assert layout.cut_labels == ("0.9m", "2.5m", "2.5m")

    def test_empty_plan_gives_no_layouts(self) -> None:
        assert self.reconstructor.reconstruct(make_item(6000)) == []


class TestStableLayoutKeys:
    """Tests for the stable layout key."""

    def setup_method(self) -> None:
        self.reconstructor = LayoutReconstructor()

    def test_key_does_not_depend_on_plan_position(self) -> None:
        first = markers("cut_1200mm", 4)
        second = markers("cut_1500mm", 3)
        forward = self.reconstructor.reconstruct(make_item(6000, first, second))
        backward = self.reconstructor.reconstruct(make_item(6000, second, first))

        assert forward[0].key == backward[1].key
        assert forward[1].key == backward[0].key
        assert forward[0].layout_id != backward[1].layout_id

    def test_identical_patterns_get_distinct_keys(self) -> None:
        pattern = markers("cut_1200mm", 4)
        layouts = self.reconstructor.reconstruct(make_item(6000, pattern, pattern))
        assert layouts[0].key != layouts[1].key

    def test_key_depends_on_profile(self) -> None:
        pattern = markers("cut_1200mm", 4)
        a = self.reconstructor.reconstruct(make_item(6000, pattern, name="Transom"))
        b = self.reconstructor.reconstruct(make_item(6000, pattern, name="Mullion"))
        assert a[0].key != b[0].key


class TestProfileAggregator:
    """Tests for ProfileAggregator.aggregate."""

    def test_total_bars_is_sum_of_repetitions(self) -> None:
        item = make_item(6000, markers("cut_1500mm", 3), markers("cut_1000mm", 5))
        layouts = LayoutReconstructor().reconstruct(item)

        totals = ProfileAggregator().aggregate(item, layouts)

        assert totals.total_bars == 8
        assert totals.total_quantity == totals.total_bars
        assert totals.stock_length_m == Decimal(6)
        assert totals.profile_name == "Transom (55x55mm)"

    def test_material_and_offcut_totals(self) -> None:
        item = make_item(6000, markers("cut_1200mm", 4), markers("cut_2500mm", 2))
        layouts = LayoutReconstructor().reconstruct(item)

        totals = ProfileAggregator().aggregate(item, layouts)

        # A: 4 bars x 1200 off-cut, B: 2 bars x 1000 off-cut
        assert totals.total_material_mm == Decimal(36000)
        assert totals.total_offcut_mm == Decimal(6800)
        assert totals.waste_percentage == pytest.approx(6800 / 36000 * 100)

    def test_no_layouts(self) -> None:
        item = make_item(6000)
        totals = ProfileAggregator().aggregate(item, [])
        assert totals.total_bars == 0
        assert totals.waste_percentage == 0.0
