"""Shared test doubles: re-export memory backends and catalog line builders."""

from __future__ import annotations

from ingester.persistence.memory_backend import MemoryFileStore, MemoryRecordStore
from tests.fakes.catalog import APPLES, KIMCHI_RICE, MARLBORO, SODA_SPLIT, make_line

__all__ = [
    "APPLES",
    "KIMCHI_RICE",
    "MARLBORO",
    "SODA_SPLIT",
    "MemoryFileStore",
    "MemoryRecordStore",
    "make_line",
]
