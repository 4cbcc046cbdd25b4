"""DynamoDB backend implementing IRecordStore."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import ClientError

from ingester.core.exceptions import RecordStoreError
from ingester.models.record import Record


def _to_item(record: Record) -> dict[str, Any]:
    """Convert a Record to a DynamoDB item; Decimals are stored natively."""
    item = record.model_dump()
    item["unit"] = record.unit.value
    return item


class DynamoDBRecordStore:
    """Production IRecordStore backed by a DynamoDB products table keyed by ``id``."""

    def __init__(self, table_name: str = "ingester-products", table_suffix: str = "",
                 region: str = "us-east-1", endpoint_url: str | None = None) -> None:
        self._table_name = f"{table_name}{table_suffix}"
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)
        self._table = self._ddb.Table(self._table_name)

    @property
    def table_name(self) -> str:
        return self._table_name

    def insert(self, record: Record) -> None:
        try:
            self._table.put_item(Item=_to_item(record))
        except ClientError as exc:
            raise RecordStoreError(
                f"DynamoDB put failed for product {record.id} in {self._table_name!r}: {exc}"
            ) from exc

    def get(self, product_id: int) -> Record | None:
        """Read a stored product back, or None if absent."""
        try:
            resp = self._table.get_item(Key={"id": product_id})
        except ClientError as exc:
            raise RecordStoreError(
                f"DynamoDB get failed for product {product_id} in {self._table_name!r}: {exc}"
            ) from exc
        item = resp.get("Item")
        if item is None:
            return None
        item["id"] = int(item["id"])
        return Record.model_validate(item)
