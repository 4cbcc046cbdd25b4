"""RecordDecoder: turns one fixed-width catalog line into a Record.

Pricing rules:
    * A singular (unit) price of zero means "use the split price": the split
      price is divided by its "for X" count and rounded half-to-even to four
      places.
    * A singular promo price of zero falls back to the split promo price, but
      only when that split promo price is strictly positive. Otherwise there is
      no promotion and the promo price is zero.
    * Non-zero singular prices are taken verbatim.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from typing import Callable, TypeVar

from ingester.core.exceptions import (
    BadParameterError,
    ConversionError,
    DecodeError,
    ZeroDivisorError,
)
from ingester.decoding.converter import FieldConverter
from ingester.models.layout import REFERENCE_LAYOUT, RecordLayout
from ingester.models.record import Record, Unit

T = TypeVar("T")

TAX_RATE = Decimal("0.07775")
ZERO = Decimal("0")
SPLIT_PRICE_QUANTUM = Decimal("0.0001")
DISPLAY_QUANTUM = Decimal("0.01")


def display_price(value: Decimal) -> str:
    """Format a price for display, e.g. ``$6.50``."""
    return f"${value.quantize(DISPLAY_QUANTUM, rounding=ROUND_HALF_UP)}"


class RecordDecoder:
    """Decodes lines of a single record layout version."""

    def __init__(
        self,
        converter: FieldConverter,
        layout: RecordLayout = REFERENCE_LAYOUT,
        tax_rate: Decimal = TAX_RATE,
    ) -> None:
        if converter is None:
            raise BadParameterError("A field converter is required")
        self._convert = converter
        self._layout = layout
        self._tax_rate = tax_rate

    @classmethod
    def from_layout(
        cls, layout: RecordLayout = REFERENCE_LAYOUT, tax_rate: Decimal = TAX_RATE
    ) -> RecordDecoder:
        converter = FieldConverter(layout.number_width, layout.currency_width, layout.flags_width)
        return cls(converter, layout, tax_rate)

    @property
    def layout(self) -> RecordLayout:
        return self._layout

    def decode(self, row: int, line: bytes | None) -> Record:
        """Decode one line, raising DecodeError at the first failing field."""
        if line is None:
            raise DecodeError(row, 0, b"", "Error parsing record", BadParameterError("No record"))
        if len(line) != self._layout.record_length:
            cause = BadParameterError(
                f"Invalid parameter: record is {len(line)} bytes, "
                f"expected {self._layout.record_length}"
            )
            raise DecodeError(row, 0, line, "Error parsing record", cause) from cause

        convert = self._convert
        product_id = self._field(row, line, "id", convert.to_number, "Error parsing ID")
        description = convert.to_string(self._layout.field("description").slice(line))

        price = self._field(row, line, "price", convert.to_currency, "Error parsing price")
        if price == ZERO:
            split_price = self._field(
                row, line, "split_price", convert.to_currency, "Error parsing split price"
            )
            price = self._divide(row, line, split_price, "for_x", "Error parsing for X")

        promo_price = self._field(
            row, line, "promo_price", convert.to_currency, "Error parsing promotional price"
        )
        if promo_price == ZERO:
            split_promo_price = self._field(
                row, line, "split_promo_price", convert.to_currency,
                "Error parsing split promo price",
            )
            if split_promo_price > ZERO:
                promo_price = self._divide(
                    row, line, split_promo_price, "promo_for_x", "Error parsing promo for X"
                )
            else:
                promo_price = ZERO

        flags = self._field(row, line, "flags", convert.to_flags, "Error parsing flags")
        size = convert.to_string(self._layout.field("size").slice(line))

        return Record(
            id=product_id,
            description=description,
            price=price,
            display_price=display_price(price),
            promo_price=promo_price,
            promo_display_price=display_price(promo_price),
            unit=Unit.POUND if flags.per_weight else Unit.EACH,
            size=size,
            tax_rate=self._tax_rate if flags.taxable else ZERO,
        )

    def _field(
        self, row: int, line: bytes, name: str, convert: Callable[[bytes], T], message: str
    ) -> T:
        spec = self._layout.field(name)
        text = spec.slice(line)
        try:
            return convert(text)
        except ConversionError as exc:
            raise DecodeError(row, spec.offset, text, message, exc) from exc

    def _divide(self, row: int, line: bytes, amount: Decimal, divisor_field: str, message: str) -> Decimal:
        spec = self._layout.field(divisor_field)
        count = self._field(row, line, divisor_field, self._convert.to_number, message)
        if count == 0:
            cause = ZeroDivisorError(f"Zero divisor: cannot split {amount} by 0")
            raise DecodeError(row, spec.offset, spec.slice(line), message, cause) from cause
        return (amount / Decimal(count)).quantize(SPLIT_PRICE_QUANTUM, rounding=ROUND_HALF_EVEN)
