"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from ingester.core.config import AppSettings, LayoutConfig


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.store == "console"
    assert settings.layout.path is None


def test_layout_config_defaults():
    config = LayoutConfig()
    assert config.tax_rate == Decimal("0.07775")


def test_layout_env_override(monkeypatch):
    monkeypatch.setenv("INGESTER_LAYOUT_PATH", "/etc/ingester/v2.json")
    monkeypatch.setenv("INGESTER_LAYOUT_TAX_RATE", "0.0825")
    config = LayoutConfig()
    assert config.path == Path("/etc/ingester/v2.json")
    assert config.tax_rate == Decimal("0.0825")


def test_store_env_override(monkeypatch):
    monkeypatch.setenv("INGESTER_STORE", "dynamodb")
    assert AppSettings().store == "dynamodb"
