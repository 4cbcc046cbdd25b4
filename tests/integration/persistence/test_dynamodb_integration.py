"""Integration tests for DynamoDBRecordStore against LocalStack."""

from __future__ import annotations

from decimal import Decimal

import pytest

from ingester.decoding.decoder import RecordDecoder
from ingester.persistence.dynamodb_backend import DynamoDBRecordStore
from tests.fakes import MARLBORO, SODA_SPLIT
from tests.integration.conftest import LOCALSTACK_URL, skip_no_localstack


@skip_no_localstack
class TestDynamoDBIntegration:
    @pytest.fixture
    def store(self, products_table):
        return DynamoDBRecordStore(
            table_suffix=products_table,
            region="us-east-1",
            endpoint_url=LOCALSTACK_URL,
        )

    def test_insert_then_get(self, store):
        record = RecordDecoder.from_layout().decode(0, SODA_SPLIT)
        store.insert(record)
        stored = store.get(record.id)
        assert stored is not None
        assert stored.price == Decimal("6.50")
        assert stored.tax_rate == Decimal("0.07775")

    def test_empty_size_is_stored(self, store):
        record = RecordDecoder.from_layout().decode(0, MARLBORO)
        store.insert(record)
        assert store.get(record.id).size == ""
