"""Fixed-width record layout: field offsets and widths for one format version."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from ingester.core.exceptions import LayoutError

# Field names the record decoder reads, grouped by conversion.
NUMBER_FIELDS = ("id", "for_x", "promo_for_x")
CURRENCY_FIELDS = ("price", "promo_price", "split_price", "split_promo_price")
STRING_FIELDS = ("description", "size")
FLAGS_FIELDS = ("flags",)
REQUIRED_FIELDS = NUMBER_FIELDS + CURRENCY_FIELDS + STRING_FIELDS + FLAGS_FIELDS


class FieldSpec(BaseModel):
    """Location of a single field within a record."""

    name: str
    offset: int = Field(ge=0)
    width: int = Field(ge=1)

    model_config = {"frozen": True}

    @property
    def end(self) -> int:
        return self.offset + self.width

    def slice(self, line: bytes) -> bytes:
        return line[self.offset:self.end]


class RecordLayout(BaseModel):
    """Complete layout of a fixed-width product record."""

    version: int = 1
    record_length: int = Field(ge=1)
    number_width: int = Field(ge=1)
    currency_width: int = Field(ge=1)
    flags_width: int = Field(ge=1)
    fields: list[FieldSpec]

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_fields(self) -> RecordLayout:
        names = [f.name for f in self.fields]
        missing = [n for n in REQUIRED_FIELDS if n not in names]
        if missing:
            raise ValueError(f"layout is missing fields: {', '.join(missing)}")
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"layout defines fields more than once: {', '.join(duplicates)}")

        expected = {n: self.number_width for n in NUMBER_FIELDS}
        expected.update({n: self.currency_width for n in CURRENCY_FIELDS})
        expected.update({n: self.flags_width for n in FLAGS_FIELDS})
        for spec in self.fields:
            if spec.end > self.record_length:
                raise ValueError(
                    f"field {spec.name!r} ends at {spec.end}, past record length {self.record_length}"
                )
            if spec.name in expected and spec.width != expected[spec.name]:
                raise ValueError(
                    f"field {spec.name!r} is {spec.width} wide, expected {expected[spec.name]}"
                )
        return self

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise LayoutError(f"Unknown field {name!r}")

    @classmethod
    def from_json(cls, text: str | bytes) -> RecordLayout:
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise LayoutError(f"Invalid record layout: {exc}") from exc

    @classmethod
    def from_json_file(cls, path: str | Path) -> RecordLayout:
        try:
            text = Path(path).read_bytes()
        except OSError as exc:
            raise LayoutError(f"Cannot read record layout {str(path)!r}: {exc}") from exc
        return cls.from_json(text)


REFERENCE_LAYOUT = RecordLayout(
    version=1,
    record_length=142,
    number_width=8,
    currency_width=8,
    flags_width=9,
    fields=[
        FieldSpec(name="id", offset=0, width=8),
        FieldSpec(name="description", offset=9, width=59),
        FieldSpec(name="price", offset=69, width=8),
        FieldSpec(name="promo_price", offset=78, width=8),
        FieldSpec(name="split_price", offset=87, width=8),
        FieldSpec(name="split_promo_price", offset=96, width=8),
        FieldSpec(name="for_x", offset=105, width=8),
        FieldSpec(name="promo_for_x", offset=114, width=8),
        FieldSpec(name="flags", offset=123, width=9),
        FieldSpec(name="size", offset=133, width=9),
    ],
)


def load_layout(path: str | Path | None) -> RecordLayout:
    """Load a layout from JSON, or fall back to the reference layout."""
    if path is None:
        return REFERENCE_LAYOUT
    return RecordLayout.from_json_file(path)
