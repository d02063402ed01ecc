"""Material list pricing.

Prices and waste factors are looked up by a stable key derived from the
item's name and type, so entered values stay attached to the right item
when the list is filtered or re-ordered.
"""

from __future__ import annotations

import math
import uuid
from decimal import Decimal
from typing import Mapping

from glazecut.domain.value_objects import MaterialLine, to_decimal

MATERIAL_KEY_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "glazecut:material")


def material_key(name: str, material_type: str) -> str:
    """Return the stable identifier of a material list item."""
    return str(uuid.uuid5(MATERIAL_KEY_NAMESPACE, f"{material_type}|{name}"))


def apply_waste_factor(units: int, waste_factor: Decimal) -> int:
    """Round ``units * (1 + waste_factor / 100)`` up to a whole unit."""
    if waste_factor <= 0:
        return units
    return math.ceil(units * (1 + waste_factor / 100))


class MaterialListPricer:
    """Build priced ``MaterialLine`` items.

    Args:
        prices: Unit price per item, keyed by stable key or item name.
        waste_factors: Waste percentage per item, keyed the same way.
    """

    def __init__(
        self,
        prices: Mapping[str, float | Decimal] | None = None,
        waste_factors: Mapping[str, float | Decimal] | None = None,
    ) -> None:
        self.prices = dict(prices or {})
        self.waste_factors = dict(waste_factors or {})

    def _lookup(self, table: dict, key: str, name: str) -> Decimal:
        if key in table:
            return to_decimal(table[key])
        if name in table:
            return to_decimal(table[name])
        return Decimal(0)

    def price(self, name: str, units: int, material_type: str) -> MaterialLine:
        key = material_key(name, material_type)
        waste = self._lookup(self.waste_factors, key, name)
        return MaterialLine(
            key=key,
            name=name,
            material_type=material_type,
            units=units,
            quantity=apply_waste_factor(units, waste),
            waste_factor=waste,
            unit_price=self._lookup(self.prices, key, name),
        )

    @staticmethod
    def grand_total(lines: list[MaterialLine]) -> Decimal:
        return sum((line.total for line in lines), Decimal(0))
