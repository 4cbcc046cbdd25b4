"""Pluggable record stores and file stores behind Protocol interfaces."""

from __future__ import annotations

from ingester.core.config import AppSettings
from ingester.core.protocols import IFileStore, IRecordStore
from ingester.persistence.console_backend import ConsoleRecordStore
from ingester.persistence.dynamodb_backend import DynamoDBRecordStore
from ingester.persistence.memory_backend import MemoryRecordStore
from ingester.persistence.s3_backend import S3FileStore


def create_record_store(settings: AppSettings | None = None) -> IRecordStore:
    """Create the destination store selected by ``settings.store``."""
    if settings is None:
        settings = AppSettings()

    if settings.store == "dynamodb":
        return DynamoDBRecordStore(
            table_name=settings.dynamodb.table_name,
            table_suffix=settings.dynamodb.table_suffix,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
        )
    if settings.store == "memory":
        return MemoryRecordStore()
    return ConsoleRecordStore()


def create_file_store(settings: AppSettings | None = None, bucket: str | None = None) -> IFileStore:
    """Create an S3 file store, optionally for a bucket other than the configured one."""
    if settings is None:
        settings = AppSettings()

    return S3FileStore(
        bucket=bucket or settings.s3.bucket,
        region=settings.s3.region,
        endpoint_url=settings.s3.endpoint_url,
    )
