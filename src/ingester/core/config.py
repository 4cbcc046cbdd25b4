"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings


class LayoutConfig(BaseSettings):
    """Record layout selection and pricing constants."""

    model_config = {"env_prefix": "INGESTER_LAYOUT_"}

    path: Path | None = None  # JSON layout file; None uses the reference layout
    tax_rate: Decimal = Decimal("0.07775")


class DynamoDBConfig(BaseSettings):
    """DynamoDB product store configuration."""

    model_config = {"env_prefix": "INGESTER_DYNAMO_"}

    table_name: str = "ingester-products"
    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class S3Config(BaseSettings):
    """S3 catalog file storage configuration."""

    model_config = {"env_prefix": "INGESTER_S3_"}

    bucket: str = "ingester-catalog-files"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "INGESTER_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    store: Literal["console", "memory", "dynamodb"] = "console"

    layout: LayoutConfig = LayoutConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    s3: S3Config = S3Config()
