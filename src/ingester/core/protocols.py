"""Protocol interfaces for the ingester's collaborators.

The decoding core only depends on these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ingester.models.record import Record


# ---------------------------------------------------------------------------
# Destination: Record Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IRecordStore(Protocol):
    """Destination for decoded product records.

    Raises RecordStoreError when the record cannot be stored.
    """

    def insert(self, record: Record) -> None: ...


# ---------------------------------------------------------------------------
# Source: File Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """Source of raw catalog files, addressed by key.

    Raises FileStoreError when the file cannot be read.
    """

    def read(self, path: str) -> bytes: ...
