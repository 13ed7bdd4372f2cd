"""Tests for the infrastructure.db module."""

import pytest

from cari_consolidation.infrastructure import db as db_module


def test_get_env_var_reads_environment(monkeypatch):
    """_get_env_var should load .env and return the requested value."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("ERP_DB_URL", "mssql+pyodbc://netsis")

    assert db_module._get_env_var("ERP_DB_URL") == "mssql+pyodbc://netsis"


def test_get_env_var_raises_when_missing(monkeypatch):
    """Missing env vars should raise a RuntimeError."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.delenv("BANK_DB_URL", raising=False)

    with pytest.raises(RuntimeError, match="BANK_DB_URL"):
        db_module._get_env_var("BANK_DB_URL")


def test_create_engine_passes_pool_configuration(monkeypatch):
    """_create_engine should configure QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://bank")

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://bank"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 5
    assert captured["kwargs"]["max_overflow"] == 5
    assert captured["kwargs"]["pool_pre_ping"] is True


@pytest.mark.parametrize(
    ("getter", "global_name", "env_name", "url"),
    [
        ("get_erp_engine", "_erp_engine", "ERP_DB_URL", "mssql+pyodbc://erp"),
        ("get_bank_engine", "_bank_engine", "BANK_DB_URL", "postgresql://bank"),
    ],
)
def test_engines_are_memoized(monkeypatch, getter, global_name, env_name, url):
    """Engine getters should create each engine once."""
    monkeypatch.setattr(db_module, global_name, None)
    created = []

    def fake_create_engine(db_url):
        created.append(db_url)
        return f"engine:{db_url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv(env_name, url)

    engine_one = getattr(db_module, getter)()
    engine_two = getattr(db_module, getter)()

    assert engine_one is engine_two
    assert engine_one == f"engine:{url}"
    assert created == [url]


def test_adapter_returns_underlying_engines(monkeypatch):
    """SqlAlchemyDatabaseEngineAdapter should proxy global helpers."""
    monkeypatch.setattr(db_module, "get_erp_engine", lambda: "erp_engine")
    monkeypatch.setattr(db_module, "get_bank_engine", lambda: "bank_engine")

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter()

    assert adapter.get_erp_engine() == "erp_engine"
    assert adapter.get_bank_engine() == "bank_engine"
