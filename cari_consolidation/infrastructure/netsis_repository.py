"""Netsis ERP adapter reading cari data per company and fiscal year.

Each company keeps one database per fiscal year named ``<PREFIX><YEAR>``
on a linked SQL server, the prefix usually being the company id, so database names are built from validated
identifiers rather than bound parameters.
"""

from collections.abc import Sequence
import re

from sqlalchemy import text

from cari_consolidation.application.ports.database import DatabaseEnginePort
from cari_consolidation.application.ports.erp_source import (
    ErpRecordSourcePort,
)
from cari_consolidation.domain.constants import DEFAULT_COMPANIES
from cari_consolidation.domain.models import AgingRecord, Company, ErpAccount

_IDENTIFIER = re.compile(r"^[A-Za-z0-9_]+$")


def _checked_identifier(value: str, label: str) -> str:
    if not _IDENTIFIER.match(value):
        raise ValueError(f"Unsafe SQL identifier for {label}: {value!r}")
    return value


class NetsisErpRecordSource(ErpRecordSourcePort):
    """Repository backed by the Netsis SQL server."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        linked_server: str = "NETSISSVR",
        companies: Sequence[Company] = DEFAULT_COMPANIES,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ERP engine.
            linked_server: Linked-server prefix; empty when the engine
                connects to the ERP server directly.
            companies: Registry mapping company ids to database prefixes.
        """
        self._db_port = db_port
        self._linked_server = (
            _checked_identifier(linked_server, "linked server")
            if linked_server
            else ""
        )
        self._databases = {
            company.company_id: company.erp_database for company in companies
        }

    def company_database(self, fiscal_year: int, company_id: str) -> str:
        """Return the qualified ``dbo`` schema of one company's ledger."""
        year = _checked_identifier(str(int(fiscal_year)), "fiscal year")
        company = _checked_identifier(
            self._databases.get(company_id, company_id),
            "company",
        )
        database = f"{company}{year}.dbo"
        if self._linked_server:
            return f"{self._linked_server}.{database}"
        return database

    def fetch_aging_records(
        self,
        fiscal_year: int,
        company_id: str,
    ) -> list[AgingRecord]:
        statement = (
            f"EXECUTE {self.company_database(fiscal_year, company_id)}"
            ".SP_CARI_BORC_YAS"
        )
        engine = self._db_port.get_erp_engine()
        with engine.connect() as conn:
            rows = conn.exec_driver_sql(statement).mappings().all()
        return [AgingRecord.from_row(row) for row in rows]

    def fetch_accounts(
        self,
        fiscal_year: int,
        company_id: str,
    ) -> list[ErpAccount]:
        query = text(
            f"""
            SELECT CARI_KOD AS ID, dbo.trk(CARI_ISIM) AS name
            FROM {self.company_database(fiscal_year, company_id)}.TBLCASABIT
            """
        )
        engine = self._db_port.get_erp_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
        return [
            ErpAccount(code=row["ID"].strip(), name=row["name"])
            for row in rows
            if row["ID"]
        ]


__all__ = ["NetsisErpRecordSource"]
