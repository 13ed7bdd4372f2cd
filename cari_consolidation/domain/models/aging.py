"""Domain models for cari aging data and merged balances."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from cari_consolidation.utils.decimal_utils import coerce_decimal, coerce_int


@dataclass(frozen=True)
class AgingRecord:
    """One company's aging row for a single cari account.

    Attributes:
        account_code: Cari account code, the cross-company join key.
        account_title: Account title as spelled in this company's ledger.
        balance: Signed balance; positive is a receivable, negative a
            payable.
        total_overdue: Amount past its due date.
        not_yet_due: Amount not yet due.
        days_overdue: Days the oldest open item is overdue.
        overdue_threshold_days: Payment term in days for the account.
    """

    account_code: str | None
    account_title: str | None
    balance: Decimal
    total_overdue: Decimal = Decimal("0")
    not_yet_due: Decimal = Decimal("0")
    days_overdue: int = 0
    overdue_threshold_days: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AgingRecord":
        """Build a record from an SP_CARI_BORC_YAS result row."""
        code = row.get("CariKodu")
        return cls(
            account_code=code.strip() if isinstance(code, str) else code,
            account_title=row.get("CariUnvan"),
            balance=coerce_decimal(row.get("CariBakiye")),
            total_overdue=coerce_decimal(row.get("ToplamGecikme")),
            not_yet_due=coerce_decimal(row.get("VadesiGelmemis")),
            days_overdue=coerce_int(row.get("GECIKMEGUN")),
            overdue_threshold_days=coerce_int(row.get("CariVade")),
        )


@dataclass(frozen=True)
class ErpAccount:
    """Cari account code and name from a company's account list."""

    code: str
    name: str | None


@dataclass(frozen=True)
class Customer:
    """Customer from the external customer system."""

    customer_id: str
    name: str
    erp_id: str | None = None


@dataclass(frozen=True)
class OverdueDetails:
    """Overdue breakdown merged across companies."""

    not_yet_due: Decimal = Decimal("0")
    days_overdue: int = 0
    overdue_threshold_days: int = 0


@dataclass(frozen=True)
class MergedBalance:
    """Single view of one cari account across all companies.

    ``total_balance`` always equals the sum of ``company_balances``.
    """

    account_code: str
    erp_name: str | None
    customer_name: str | None
    company_balances: dict[str, Decimal]
    total_balance: Decimal
    overdue_balance: Decimal
    overdue_details: OverdueDetails = field(default_factory=OverdueDetails)

    @property
    def display_name(self) -> str:
        """Return the best available name for the account."""
        return self.erp_name or self.customer_name or self.account_code

    def nonzero_company_balances(self) -> dict[str, Decimal]:
        """Return contributions that should be shown in a detail view."""
        return {
            company_id: amount
            for company_id, amount in self.company_balances.items()
            if amount != 0
        }


@dataclass(frozen=True)
class CompanyTotals:
    """Sum of aging balances per company and across all companies."""

    by_company: dict[str, Decimal]
    grand_total: Decimal


__all__ = [
    "AgingRecord",
    "ErpAccount",
    "Customer",
    "OverdueDetails",
    "MergedBalance",
    "CompanyTotals",
]
