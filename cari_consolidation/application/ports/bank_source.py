"""Port for the bank transaction feed."""

from typing import Protocol

from cari_consolidation.domain.models import (
    BankAccount,
    BankTransaction,
    ErpStatus,
    TransactionFilter,
)


class BankTransactionSourcePort(Protocol):
    """Port exposing bank transactions, bank accounts and status updates."""

    def fetch_transactions(
        self,
        transaction_filter: TransactionFilter | None = None,
    ) -> list[BankTransaction]:
        """Return transactions matching the server-side filter."""

    def fetch_bank_accounts(self) -> list[BankAccount]:
        """Return bank account reference data."""

    def update_transaction_status(
        self,
        transaction_id: str,
        status: ErpStatus,
    ) -> None:
        """Persist a new reconciliation status; raise on rejection."""


__all__ = ["BankTransactionSourcePort"]
