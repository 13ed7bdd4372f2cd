"""Cross-company merge of cari aging balances."""

from collections.abc import Mapping, Sequence
from decimal import Decimal

from cari_consolidation.domain.models import (
    AgingRecord,
    CompanyTotals,
    MergedBalance,
    OverdueDetails,
)


class _MergeEntry:
    """Mutable accumulator for one account code during a merge pass."""

    __slots__ = (
        "account_code",
        "erp_name",
        "customer_name",
        "company_balances",
        "total_balance",
        "overdue_balance",
        "not_yet_due",
        "days_overdue",
        "overdue_threshold_days",
    )

    def __init__(self, account_code: str) -> None:
        self.account_code = account_code
        self.erp_name: str | None = None
        self.customer_name: str | None = None
        self.company_balances: dict[str, Decimal] = {}
        self.total_balance = Decimal("0")
        self.overdue_balance = Decimal("0")
        self.not_yet_due = Decimal("0")
        self.days_overdue = 0
        self.overdue_threshold_days = 0

    def add(
        self,
        company_id: str,
        record: AgingRecord,
        erp_name: str | None,
        customer_name: str | None,
    ) -> None:
        previous = self.company_balances.get(company_id, Decimal("0"))
        self.company_balances[company_id] = previous + record.balance
        self.total_balance += record.balance
        self.overdue_balance += record.total_overdue
        if not self.erp_name and erp_name:
            self.erp_name = erp_name
        if not self.customer_name and customer_name:
            self.customer_name = customer_name
        self.not_yet_due += record.not_yet_due
        self.days_overdue = max(self.days_overdue, record.days_overdue)
        self.overdue_threshold_days = max(
            self.overdue_threshold_days,
            record.overdue_threshold_days,
        )

    def freeze(self) -> MergedBalance:
        return MergedBalance(
            account_code=self.account_code,
            erp_name=self.erp_name,
            customer_name=self.customer_name,
            company_balances=dict(self.company_balances),
            total_balance=self.total_balance,
            overdue_balance=self.overdue_balance,
            overdue_details=OverdueDetails(
                not_yet_due=self.not_yet_due,
                days_overdue=self.days_overdue,
                overdue_threshold_days=self.overdue_threshold_days,
            ),
        )


def merge_company_balances(
    records_by_company: Mapping[str, Sequence[AgingRecord]],
    erp_names: Mapping[str, str] | None = None,
    customer_names: Mapping[str, str] | None = None,
) -> list[MergedBalance]:
    """Fold per-company aging records into one balance per account code.

    The merge is rebuilt from scratch on every call, so callers re-run it
    whenever any company's records change, including while other
    companies are still loading (their lists are simply empty).

    Args:
        records_by_company: Aging records keyed by company identifier.
        erp_names: Account code to ERP name map.
        customer_names: Account code to customer-system name map.

    Returns:
        list[MergedBalance]: Balances sorted by descending absolute total,
        ties kept in first-seen order.
    """
    erp_names = erp_names or {}
    customer_names = customer_names or {}
    entries: dict[str, _MergeEntry] = {}

    for company_id, records in records_by_company.items():
        for record in records:
            code = record.account_code
            if not code:
                continue
            entry = entries.get(code)
            if entry is None:
                entry = entries[code] = _MergeEntry(code)
            entry.add(
                company_id,
                record,
                erp_name=erp_names.get(code) or record.account_title,
                customer_name=customer_names.get(code),
            )

    merged = [entry.freeze() for entry in entries.values()]
    return sorted(
        merged,
        key=lambda balance: abs(balance.total_balance),
        reverse=True,
    )


def compute_company_totals(
    records_by_company: Mapping[str, Sequence[AgingRecord]],
) -> CompanyTotals:
    """Sum joinable aging balances per company and overall."""
    by_company: dict[str, Decimal] = {}
    grand_total = Decimal("0")
    for company_id, records in records_by_company.items():
        total = sum(
            (record.balance for record in records if record.account_code),
            Decimal("0"),
        )
        by_company[company_id] = total
        grand_total += total
    return CompanyTotals(by_company=by_company, grand_total=grand_total)


__all__ = ["merge_company_balances", "compute_company_totals"]
