"""In-memory backends for unit tests: list- and dict-backed fakes."""

from __future__ import annotations

from ingester.core.exceptions import FileStoreError, RecordStoreError
from ingester.models.record import Record


class MemoryRecordStore:
    """List-backed IRecordStore for unit tests."""

    def __init__(self, reject_ids: set[int] | None = None) -> None:
        self.records: list[Record] = []
        self._reject_ids = reject_ids or set()

    def insert(self, record: Record) -> None:
        if record.id in self._reject_ids:
            raise RecordStoreError(f"Insert rejected for product {record.id}")
        self.records.append(record)


class MemoryFileStore:
    """Dict-backed IFileStore for unit tests."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self._files = dict(files or {})

    def read(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError as exc:
            raise FileStoreError(f"No such file {path!r}") from exc
