"""Tests for the in-memory and console record stores and the store factory."""

from __future__ import annotations

import io

import pytest

from ingester.core.config import AppSettings
from ingester.core.exceptions import FileStoreError, RecordStoreError
from ingester.core.protocols import IFileStore, IRecordStore
from ingester.decoding.decoder import RecordDecoder
from ingester.persistence import create_record_store
from ingester.persistence.console_backend import ConsoleRecordStore
from ingester.persistence.dynamodb_backend import DynamoDBRecordStore
from tests.fakes import KIMCHI_RICE, MemoryFileStore, MemoryRecordStore


@pytest.fixture
def record():
    return RecordDecoder.from_layout().decode(0, KIMCHI_RICE)


def test_memory_store_keeps_records(record):
    store = MemoryRecordStore()
    store.insert(record)
    assert store.records == [record]


def test_memory_store_rejects_configured_ids(record):
    store = MemoryRecordStore(reject_ids={80000001})
    with pytest.raises(RecordStoreError):
        store.insert(record)
    assert store.records == []


def test_console_store_prints_report_line(record):
    out = io.StringIO()
    ConsoleRecordStore(out).insert(record)
    assert out.getvalue() == f"{record}\n"


def test_memory_file_store_reads_seeded_files():
    store = MemoryFileStore({"catalog.txt": KIMCHI_RICE})
    assert store.read("catalog.txt") == KIMCHI_RICE


def test_memory_file_store_missing_raises():
    with pytest.raises(FileStoreError):
        MemoryFileStore().read("missing.txt")


def test_backends_satisfy_protocols():
    assert isinstance(MemoryRecordStore(), IRecordStore)
    assert isinstance(ConsoleRecordStore(), IRecordStore)
    assert isinstance(MemoryFileStore(), IFileStore)


@pytest.mark.parametrize(
    ("store", "expected"),
    [("console", ConsoleRecordStore), ("memory", MemoryRecordStore), ("dynamodb", DynamoDBRecordStore)],
)
def test_create_record_store(store, expected):
    settings = AppSettings(store=store)
    assert isinstance(create_record_store(settings), expected)
