# SPDX-License-Identifier: MIT

from enum import StrEnum


class QuantityKind(StrEnum):
    PROTEIN = "protein"
    WATER = "water"

    @property
    def unit(self) -> str:
        return QUANTITY_UNITS[self]


# New kinds need an entry here as well
QUANTITY_UNITS: dict[QuantityKind, str] = {
    QuantityKind.PROTEIN: "g",
    QuantityKind.WATER: "ml",
}
