"""Database ports for the consolidation engine.

This module defines the application-layer protocol for reaching the ERP
SQL server and the bank-feed database. Infrastructure implementations are
expected to provide concrete adapters that satisfy it.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing database engines for the ERP and the bank feed."""

    def get_erp_engine(self) -> Engine:
        """Get the engine for the ERP SQL server.

        Returns:
            Engine: SQLAlchemy engine able to reach every company database.
        """

    def get_bank_engine(self) -> Engine:
        """Get the engine for the bank transaction database.

        Returns:
            Engine: SQLAlchemy engine connected to the bank feed store.
        """


__all__ = ["DatabaseEnginePort"]
