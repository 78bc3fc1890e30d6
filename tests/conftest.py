"""Shared fixtures for ZenMoney tests."""

from datetime import date
from decimal import Decimal

import pytest

from zenmoney.config import get_settings
from zenmoney.models.transaction import Transaction, TransactionType


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from real API keys and the user's data directory."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.setenv("ZENMONEY_STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.chdir(tmp_path)  # no stray .env
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_transaction(
    amount="100",
    type=TransactionType.EXPENSE,
    category="food",
    on=None,
    description="Test",
    id=None,
) -> Transaction:
    fields = dict(
        amount=Decimal(str(amount)),
        description=description,
        category=category,
        date=on or date(2024, 5, 1),
        type=type,
    )
    if id is not None:
        fields["id"] = id
    return Transaction(**fields)


@pytest.fixture
def make_tx():
    return make_transaction
