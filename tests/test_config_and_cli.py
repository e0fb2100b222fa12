from __future__ import annotations

import json

import pytest

from order_service.cli import main
from order_service.core.config import Settings


def test_production_requires_a_real_database():
    with pytest.raises(ValueError, match="OS_DATABASE_URL"):
        Settings(env="production")

    settings = Settings(env="production", database_url="postgresql+psycopg://orders@db/orders")
    assert settings.bill_policy == "always"


def test_log_level_accepts_plain_env_var(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings().log_level == "debug"


def test_bill_policy_from_env(monkeypatch):
    monkeypatch.setenv("OS_BILL_POLICY", "once")
    assert Settings().bill_policy == "once"


def test_quote_prints_pricing(capsys):
    assert main(["quote", "600:3", "401:2"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["total_weight"] == 5
    assert payload["shipment_amount"] == 25
    assert payload["total_amount"] == "974.70"
    assert payload["discounted"] is True


def test_quote_rejects_bad_items(capsys):
    with pytest.raises(SystemExit):
        main(["quote", "12"])
