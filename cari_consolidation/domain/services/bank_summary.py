"""Inflow/outflow aggregation over bank transactions."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from cari_consolidation.domain.models import (
    BankAccount,
    BankSummary,
    BankSummaryReport,
    BankTransaction,
)

TOTAL_BUCKET_ID = "*"
TOTAL_BUCKET_NAME = "Toplam"


class _Bucket:
    __slots__ = ("bank_acc_id", "bank_acc_name", "inflow", "outflow", "balance")

    def __init__(self, bank_acc_id: str, bank_acc_name: str) -> None:
        self.bank_acc_id = bank_acc_id
        self.bank_acc_name = bank_acc_name
        self.inflow = Decimal("0")
        self.outflow = Decimal("0")
        self.balance = Decimal("0")

    def add(self, amount: Decimal) -> None:
        if amount > 0:
            self.inflow += amount
        else:
            self.outflow += abs(amount)
        self.balance += amount

    def freeze(self) -> BankSummary:
        return BankSummary(
            bank_acc_id=self.bank_acc_id,
            bank_acc_name=self.bank_acc_name,
            inflow=self.inflow,
            outflow=self.outflow,
            balance=self.balance,
        )


def summarize_bank_transactions(
    transactions: Sequence[BankTransaction],
    bank_accounts: Sequence[BankAccount] = (),
) -> BankSummaryReport:
    """Compute per-bank and grand totals in a single pass.

    Args:
        transactions: Transactions currently in scope (already filtered).
        bank_accounts: Reference list used to resolve bank account names.

    Returns:
        BankSummaryReport: Buckets in first-seen order and a grand total.
        An empty input yields zero totals and ``has_data`` False.
    """
    names = {
        account.bank_acc_id: account.bank_acc_name for account in bank_accounts
    }
    buckets: dict[str, _Bucket] = {}
    total = _Bucket(TOTAL_BUCKET_ID, TOTAL_BUCKET_NAME)

    for transaction in transactions:
        bucket = buckets.get(transaction.bank_acc_id)
        if bucket is None:
            name = (
                names.get(transaction.bank_acc_id)
                or transaction.bank_acc_name
                or transaction.bank_acc_id
            )
            bucket = buckets[transaction.bank_acc_id] = _Bucket(
                transaction.bank_acc_id,
                name,
            )
        bucket.add(transaction.amount)
        total.add(transaction.amount)

    return BankSummaryReport(
        banks=[bucket.freeze() for bucket in buckets.values()],
        total=total.freeze(),
        transaction_count=len(transactions),
    )


def exclude_bank_accounts(
    transactions: Iterable[BankTransaction],
    excluded_ids: Iterable[str] = (),
) -> list[BankTransaction]:
    """Drop transactions that belong to hidden bank accounts."""
    excluded = {str(bank_acc_id) for bank_acc_id in excluded_ids}
    if not excluded:
        return list(transactions)
    return [
        transaction
        for transaction in transactions
        if str(transaction.bank_acc_id) not in excluded
    ]


__all__ = [
    "TOTAL_BUCKET_ID",
    "summarize_bank_transactions",
    "exclude_bank_accounts",
]
