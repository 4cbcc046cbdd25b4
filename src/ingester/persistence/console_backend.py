"""Console record store: prints each product as a report line."""

from __future__ import annotations

import sys
from typing import TextIO

from ingester.models.record import Record


class ConsoleRecordStore:
    """IRecordStore that writes ``str(record)`` to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def insert(self, record: Record) -> None:
        print(record, file=self._stream or sys.stdout)
