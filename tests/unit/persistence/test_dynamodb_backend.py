"""Unit tests for DynamoDBRecordStore using moto."""

from __future__ import annotations

from decimal import Decimal

import boto3
import pytest
from moto import mock_aws

from ingester.core.exceptions import RecordStoreError
from ingester.decoding.decoder import RecordDecoder
from ingester.models.record import Unit
from ingester.persistence.dynamodb_backend import DynamoDBRecordStore
from tests.fakes import APPLES, SODA_SPLIT

TABLE_SUFFIX = "-test"
REGION = "us-east-1"


# ---------- fixtures ----------

@pytest.fixture
def aws():
    with mock_aws():
        client = boto3.client("dynamodb", region_name=REGION)
        client.create_table(
            TableName=f"ingester-products{TABLE_SUFFIX}",
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "N"}],
            BillingMode="PAY_PER_REQUEST",
        )
        yield boto3.resource("dynamodb", region_name=REGION)


@pytest.fixture
def store(aws):
    return DynamoDBRecordStore(table_suffix=TABLE_SUFFIX, region=REGION)


@pytest.fixture
def decoder():
    return RecordDecoder.from_layout()


# ---------- insert ----------

class TestInsert:
    def test_table_name_includes_suffix(self, store):
        assert store.table_name == "ingester-products-test"

    def test_stores_item_keyed_by_id(self, store, aws, decoder):
        store.insert(decoder.decode(0, SODA_SPLIT))
        item = aws.Table("ingester-products-test").get_item(Key={"id": 14963801})["Item"]
        assert item["description"] == "Generic Soda 12-pack"
        assert item["price"] == Decimal("6.5")
        assert item["tax_rate"] == Decimal("0.07775")
        assert item["unit"] == "Each"

    def test_reinsert_overwrites(self, store, aws, decoder):
        record = decoder.decode(0, APPLES)
        store.insert(record)
        store.insert(record)
        assert aws.Table("ingester-products-test").scan()["Count"] == 1

    def test_missing_table_raises(self, aws, decoder):
        store = DynamoDBRecordStore(table_suffix="-missing", region=REGION)
        with pytest.raises(RecordStoreError):
            store.insert(decoder.decode(0, APPLES))


# ---------- get ----------

class TestGet:
    def test_round_trips_record(self, store, decoder):
        record = decoder.decode(0, APPLES)
        store.insert(record)
        stored = store.get(50133333)
        assert stored is not None
        assert stored.unit == Unit.POUND
        assert stored.price == record.price
        assert stored.display_price == "$3.49"

    def test_absent_returns_none(self, store):
        assert store.get(1) is None
