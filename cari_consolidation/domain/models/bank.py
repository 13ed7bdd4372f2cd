"""Domain models for bank feeds and cash-flow summaries."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from cari_consolidation.utils.date_utils import parse_datetime
from cari_consolidation.utils.decimal_utils import coerce_decimal


class ErpStatus(str, Enum):
    """Reconciliation status of a bank transaction against the ERP."""

    WAITING = "waiting"
    SUCCESS = "success"
    ERROR = "error"
    MANUAL = "manual"

    @classmethod
    def parse(cls, value) -> "ErpStatus":
        """Read a stored status; a missing value means ``waiting``.

        Raises:
            ValueError: If the value is not a known status.
        """
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            return cls.WAITING
        return cls(str(value).strip().lower())


@dataclass(frozen=True)
class BankTransaction:
    """Bank feed transaction.

    Only ``status`` changes after ingestion; everything else is a snapshot
    of the feed.
    """

    transaction_id: str
    bank_acc_id: str
    amount: Decimal
    balance: Decimal
    counterparty_name: str
    description: str
    business_date: datetime
    create_date: datetime
    status: ErpStatus = ErpStatus.WAITING
    counterparty_iban: str | None = None
    bank_acc_name: str | None = None
    bank_name: str | None = None
    erp_account_code: str | None = None
    erp_gl_account_code: str | None = None
    erp_message: str | None = None

    @property
    def is_inflow(self) -> bool:
        return self.amount > 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "BankTransaction":
        """Build a transaction from a ``bank_transactions`` row mapping."""
        return cls(
            transaction_id=str(row["id"]),
            bank_acc_id=str(row["bank_acc_id"]),
            amount=coerce_decimal(row.get("amount")),
            balance=coerce_decimal(row.get("balance")),
            counterparty_name=row.get("name") or "",
            description=row.get("description") or "",
            business_date=parse_datetime(row.get("business_date")),
            create_date=parse_datetime(row.get("create_date")),
            status=ErpStatus.parse(row.get("erp_status")),
            counterparty_iban=row.get("opponent_iban"),
            bank_acc_name=row.get("bank_acc_name"),
            bank_name=row.get("bank_name"),
            erp_account_code=row.get("erp_account_code"),
            erp_gl_account_code=row.get("erp_gl_account_code"),
            erp_message=row.get("erp_message"),
        )


@dataclass(frozen=True)
class BankAccount:
    """Bank account reference data mapped to an ERP company."""

    bank_acc_id: str
    bank_acc_name: str
    erp_company_id: str | None = None
    erp_ledger_code: str | None = None


@dataclass(frozen=True)
class BankSummary:
    """Inflow, outflow and net balance of one bank account (or all)."""

    bank_acc_id: str
    bank_acc_name: str
    inflow: Decimal
    outflow: Decimal
    balance: Decimal

    @property
    def net(self) -> Decimal:
        """Return inflow minus outflow."""
        return self.inflow - self.outflow


@dataclass(frozen=True)
class BankSummaryReport:
    """Per-bank summaries plus a grand total."""

    banks: list[BankSummary]
    total: BankSummary
    transaction_count: int

    @property
    def has_data(self) -> bool:
        return self.transaction_count > 0


__all__ = [
    "ErpStatus",
    "BankTransaction",
    "BankAccount",
    "BankSummary",
    "BankSummaryReport",
]
