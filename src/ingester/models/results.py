"""Tagged per-line decode result for the single-stream pipeline variant."""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from ingester.core.exceptions import DecodeError
from ingester.models.record import Record


class DecodeResult(BaseModel):
    """Outcome of decoding one line: exactly one of record or error is set."""

    row: int
    record: Record | None = None
    error: DecodeError | None = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @model_validator(mode="after")
    def _one_outcome(self) -> DecodeResult:
        if (self.record is None) == (self.error is None):
            raise ValueError("exactly one of record or error must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.record is not None
