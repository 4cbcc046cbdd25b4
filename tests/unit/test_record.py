"""Tests for the Record model and Flags."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from ingester.models.record import Flags, Record, Unit


def test_default_flags_are_none():
    f = Flags(0)
    assert f == Flags.NONE
    assert not f.per_weight
    assert not f.taxable


def test_per_weight_flag():
    assert Flags.PER_WEIGHT.per_weight
    assert not Flags.PER_WEIGHT.taxable


def test_combined_flags():
    f = Flags.PER_WEIGHT | Flags.TAXABLE
    assert f.per_weight
    assert f.taxable


def test_record_is_frozen():
    record = Record(id=1, price=Decimal("1.00"))
    with pytest.raises(ValidationError):
        record.price = Decimal("2.00")  # type: ignore[misc]


def test_record_str_is_fixed_width_report_line():
    record = Record(
        id=14963801,
        description="Generic Soda 12-pack",
        price=Decimal("6.5000"),
        display_price="$6.50",
        promo_price=Decimal("5.49"),
        promo_display_price="$5.49",
        unit=Unit.EACH,
        size="12x12oz",
        tax_rate=Decimal("0.07775"),
    )
    line = str(record)
    assert line.startswith("14963801 " + " " * 40 + "Generic Soda 12-pack ")
    assert "     $6.50      $5.49    Each 12x12oz " in line
    assert line.endswith("  0.0778")
