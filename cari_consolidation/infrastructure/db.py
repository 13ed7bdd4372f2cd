"""Database infrastructure for the consolidation engine.

This module exposes helpers to create and reuse SQLAlchemy engines
connected to the ERP SQL server (which hosts one database per company and
fiscal year) and to the bank-feed database.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from cari_consolidation.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a pooled SQLAlchemy engine with health checks enabled."""
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
    )


_erp_engine: Optional[Engine] = None
_bank_engine: Optional[Engine] = None


def get_erp_engine() -> Engine:
    """Get a singleton engine for the ERP SQL server."""
    global _erp_engine
    if _erp_engine is None:
        _erp_engine = _create_engine(_get_env_var("ERP_DB_URL"))
    return _erp_engine


def get_bank_engine() -> Engine:
    """Get a singleton engine for the bank transaction database."""
    global _bank_engine
    if _bank_engine is None:
        _bank_engine = _create_engine(_get_env_var("BANK_DB_URL"))
    return _bank_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by SQLAlchemy engines."""

    def get_erp_engine(self) -> Engine:
        return get_erp_engine()

    def get_bank_engine(self) -> Engine:
        return get_bank_engine()


__all__ = [
    "get_erp_engine",
    "get_bank_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
