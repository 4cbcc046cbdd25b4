"""Create the DynamoDB products table the ingester writes to.

Usage:
    python scripts/create_tables.py --endpoint-url http://localhost:4566 --suffix -dev
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

PRODUCTS_TABLE = "ingester-products"


def create_tables(ddb: Any, table_name: str = PRODUCTS_TABLE, suffix: str = "") -> bool:
    """Create the products table keyed by numeric ``id``.

    Returns:
        True if the table was created, False if it already existed.
    """
    client = ddb.meta.client
    full_name = f"{table_name}{suffix}"
    existing = client.list_tables().get("TableNames", [])

    if full_name in existing:
        print(f"  Table {full_name} already exists, skipping")
        return False
    client.create_table(
        TableName=full_name,
        KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "N"}],
        BillingMode="PAY_PER_REQUEST",
    )
    print(f"  Created table {full_name}")
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Create ingester DynamoDB tables")
    parser.add_argument("--endpoint-url", default=None, help="LocalStack endpoint URL")
    parser.add_argument("--region", default="us-east-1")
    parser.add_argument("--suffix", default="", help="Table name suffix (-dev, -uat)")
    parser.add_argument("--table-name", default=PRODUCTS_TABLE)
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url
    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, table_name=args.table_name, suffix=args.suffix)
    print("Done.")


if __name__ == "__main__":
    main()
