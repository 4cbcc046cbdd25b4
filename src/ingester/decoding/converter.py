"""FieldConverter: interprets fixed-width byte spans as typed values."""

from __future__ import annotations

import re
from decimal import Decimal

from ingester.core.exceptions import BadFieldLengthError, BadFormatError, BadParameterError
from ingester.models.record import Flags

_SIGNED_DIGITS = re.compile(rb"-?[0-9]+")

# Flag field positions that carry meaning; every other position is reserved.
PER_WEIGHT_POSITION = 2
TAXABLE_POSITION = 4


class FieldConverter:
    """Format conversions for fixed-length text fields.

    Only the expected width of each field category is held, so one converter
    serves any layout sharing those widths.
    """

    def __init__(self, number_width: int, currency_width: int, flags_width: int) -> None:
        if number_width < 1 or currency_width < 1 or flags_width < 1:
            raise BadParameterError(
                f"Field widths must be positive, got number={number_width} "
                f"currency={currency_width} flags={flags_width}"
            )
        self._number_width = number_width
        self._currency_width = currency_width
        self._flags_width = flags_width

    @property
    def number_width(self) -> int:
        return self._number_width

    @property
    def currency_width(self) -> int:
        return self._currency_width

    @property
    def flags_width(self) -> int:
        return self._flags_width

    def to_number(self, text: bytes) -> int:
        """Parse a zero-padded, optionally negative integer."""
        return _parse_signed(text, self._number_width)

    def to_string(self, text: bytes) -> str:
        return text.decode("utf-8", errors="replace").strip()

    def to_currency(self, text: bytes) -> Decimal:
        """Parse a count of minor units (cents) into a major-unit Decimal."""
        return Decimal(_parse_signed(text, self._currency_width)).scaleb(-2)

    def to_flags(self, text: bytes) -> Flags:
        if len(text) != self._flags_width:
            raise BadFieldLengthError()

        flags = Flags.NONE
        for position, char in enumerate(text):
            if char not in b"YN":
                raise BadFormatError(f"Bad format: flag {position} is {chr(char)!r}")
            if char != ord("Y"):
                continue
            if position == PER_WEIGHT_POSITION:
                flags |= Flags.PER_WEIGHT
            elif position == TAXABLE_POSITION:
                flags |= Flags.TAXABLE
        return flags


def _parse_signed(text: bytes, width: int) -> int:
    if len(text) != width:
        raise BadFieldLengthError()
    if _SIGNED_DIGITS.fullmatch(text) is None:
        raise BadFormatError()
    return int(text)
