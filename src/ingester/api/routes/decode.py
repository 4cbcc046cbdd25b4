"""Decode endpoints: run raw catalog text through the streaming pipeline."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from ingester.core.exceptions import DecodeError
from ingester.decoding.pipeline import StreamingPipeline
from ingester.models.layout import RecordLayout
from ingester.models.record import Record
from ingester.sources.lines import split_lines

router = APIRouter(tags=["decode"])


class LineError(BaseModel):
    """A rejected catalog line, as reported to API clients."""

    line: int
    column: int
    field: str
    message: str
    kind: str
    detail: str

    @classmethod
    def from_error(cls, error: DecodeError) -> LineError:
        return cls(
            line=error.line,
            column=error.column,
            field=error.field.decode("ascii", errors="replace"),
            message=error.message,
            kind=error.kind.value,
            detail=str(error.cause),
        )


class DecodeReport(BaseModel):
    records: list[Record] = Field(default_factory=list)
    errors: list[LineError] = Field(default_factory=list)
    record_count: int = 0
    error_count: int = 0


@router.get("/layout")
async def get_layout(request: Request) -> RecordLayout:
    """Return the record layout the decoder is configured with."""
    return request.app.state.decoder.layout


@router.post("/decode")
async def decode_catalog(request: Request) -> DecodeReport:
    """Decode a newline-separated catalog body, reporting records and errors in line order."""
    body = await request.body()
    pipeline = StreamingPipeline(split_lines(body), request.app.state.decoder)

    report = DecodeReport()
    async for result in pipeline.results():
        if result.ok:
            report.records.append(result.record)
        else:
            report.errors.append(LineError.from_error(result.error))
    report.record_count = len(report.records)
    report.error_count = len(report.errors)
    return report
