"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

import pytest

from cari_consolidation.infrastructure import settings as settings_module
from cari_consolidation.infrastructure.settings import ConsolidationSettings

_ENV_NAMES = (
    "FISCAL_YEAR",
    "ERP_LINKED_SERVER",
    "AGING_STALE_SECONDS",
    "ERP_ACCOUNTS_STALE_SECONDS",
    "BANK_ACCOUNTS_STALE_SECONDS",
    "BANK_TRANSACTIONS_STALE_SECONDS",
    "FETCH_MAX_WORKERS",
    "EXCLUDED_BANK_ACCOUNT_IDS",
    "CACHE_ENABLED",
)


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return logger


def test_defaults_without_environment(clean_env) -> None:
    settings = ConsolidationSettings.from_env()

    assert settings == ConsolidationSettings()
    assert settings.aging_stale_seconds == 600
    assert settings.bank_transactions_stale_seconds == 120
    assert settings.erp_linked_server == "NETSISSVR"
    assert settings.excluded_bank_acc_ids == ()
    assert settings.cache_enabled is True


def test_from_env_reads_overrides(clean_env, monkeypatch) -> None:
    monkeypatch.setenv("FISCAL_YEAR", "2023")
    monkeypatch.setenv("ERP_LINKED_SERVER", "")
    monkeypatch.setenv("AGING_STALE_SECONDS", "300")
    monkeypatch.setenv("FETCH_MAX_WORKERS", "0")
    monkeypatch.setenv("EXCLUDED_BANK_ACCOUNT_IDS", " 12, 34 ,,")
    monkeypatch.setenv("CACHE_ENABLED", "no")

    settings = ConsolidationSettings.from_env()

    assert settings.fiscal_year == 2023
    assert settings.erp_linked_server == ""
    assert settings.aging_stale_seconds == 300
    assert settings.fetch_max_workers == 1
    assert settings.excluded_bank_acc_ids == ("12", "34")
    assert settings.cache_enabled is False


def test_invalid_integer_falls_back_with_warning(clean_env, monkeypatch):
    monkeypatch.setenv("BANK_TRANSACTIONS_STALE_SECONDS", "two minutes")

    settings = ConsolidationSettings.from_env()

    assert settings.bank_transactions_stale_seconds == 120
    clean_env.warning.assert_called_once()
