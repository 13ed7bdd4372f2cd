"""Port for per-company ERP reads."""

from typing import Protocol

from cari_consolidation.domain.models import AgingRecord, ErpAccount


class ErpRecordSourcePort(Protocol):
    """Port exposing one company's cari data for a fiscal year."""

    def fetch_aging_records(
        self,
        fiscal_year: int,
        company_id: str,
    ) -> list[AgingRecord]:
        """Return the cari aging report of one company."""

    def fetch_accounts(
        self,
        fiscal_year: int,
        company_id: str,
    ) -> list[ErpAccount]:
        """Return cari account codes and names of one company."""


__all__ = ["ErpRecordSourcePort"]
