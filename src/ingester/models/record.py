"""Product Record: the typed entity every catalog line decodes into."""

from __future__ import annotations

from decimal import Decimal
from enum import IntFlag, StrEnum

from pydantic import BaseModel


class Unit(StrEnum):
    EACH = "Each"
    POUND = "Pound"


class Flags(IntFlag):
    """Boolean product characteristics read from the Y/N flags field."""

    NONE = 0
    PER_WEIGHT = 1
    TAXABLE = 2

    @property
    def per_weight(self) -> bool:
        return Flags.PER_WEIGHT in self

    @property
    def taxable(self) -> bool:
        return Flags.TAXABLE in self


class Record(BaseModel):
    """Single decoded product line."""

    id: int
    description: str = ""

    # --- Pricing ---
    price: Decimal = Decimal("0")
    display_price: str = "$0.00"
    promo_price: Decimal = Decimal("0")
    promo_display_price: str = "$0.00"

    # --- Characteristics ---
    unit: Unit = Unit.EACH
    size: str = ""
    tax_rate: Decimal = Decimal("0")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return (
            f"{self.id} {self.description:>60} {self.display_price:>10} "
            f"{self.promo_display_price:>10} {self.unit.value:>7} {self.size} "
            f"{self.tax_rate:>8.4f}"
        )
