"""Order-preserving filters over merged balances and bank transactions.

Every selector is an independent predicate; an unset selector imposes no
constraint, so filters compose in any order with the same result.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from cari_consolidation.domain.models import (
    BalanceFilter,
    BalanceSign,
    BankTransaction,
    MergedBalance,
    TransactionFilter,
    TransactionType,
)

T = TypeVar("T")


def _normalize_query(text: str | None) -> str:
    return (text or "").strip().lower()


def _matches_any(query: str, fields: Iterable[str | None]) -> bool:
    return any(query in field.lower() for field in fields if field)


def _apply(items: Sequence[T], predicates: list[Callable[[T], bool]]) -> list[T]:
    return [item for item in items if all(check(item) for check in predicates)]


def balance_predicates(
    balance_filter: BalanceFilter,
) -> list[Callable[[MergedBalance], bool]]:
    """Return one predicate per active balance selector."""
    predicates: list[Callable[[MergedBalance], bool]] = []

    query = _normalize_query(balance_filter.search_text)
    if query:
        predicates.append(
            lambda item: _matches_any(
                query,
                (item.account_code, item.erp_name, item.customer_name),
            )
        )

    company_id = balance_filter.company_id
    if company_id:
        # zero and missing contributions are both treated as absent
        predicates.append(
            lambda item: bool(item.company_balances.get(company_id))
        )

    sign = BalanceSign(balance_filter.balance_sign)
    if sign is BalanceSign.POSITIVE:
        predicates.append(lambda item: item.total_balance > 0)
    elif sign is BalanceSign.NEGATIVE:
        predicates.append(lambda item: item.total_balance < 0)
    elif sign is BalanceSign.OVERDUE:
        predicates.append(lambda item: item.overdue_balance > 0)
    return predicates


def filter_balances(
    balances: Sequence[MergedBalance],
    balance_filter: BalanceFilter | None = None,
) -> list[MergedBalance]:
    """Apply a BalanceFilter to merged balances, keeping input order."""
    if balance_filter is None:
        return list(balances)
    return _apply(balances, balance_predicates(balance_filter))


def transaction_predicates(
    transaction_filter: TransactionFilter,
) -> list[Callable[[BankTransaction], bool]]:
    """Return one predicate per active transaction selector."""
    predicates: list[Callable[[BankTransaction], bool]] = []

    query = _normalize_query(transaction_filter.search_text)
    if query:
        predicates.append(
            lambda item: _matches_any(
                query,
                (
                    item.counterparty_name,
                    item.description,
                    item.bank_acc_name,
                    item.bank_name,
                ),
            )
        )

    if transaction_filter.status is not None:
        status = transaction_filter.status
        predicates.append(lambda item: item.status == status)

    if transaction_filter.bank_acc_id:
        bank_acc_id = transaction_filter.bank_acc_id
        predicates.append(lambda item: item.bank_acc_id == bank_acc_id)

    direction = TransactionType(transaction_filter.transaction_type)
    if direction is TransactionType.INFLOW:
        predicates.append(lambda item: item.amount > 0)
    elif direction is TransactionType.OUTFLOW:
        predicates.append(lambda item: item.amount < 0)

    date_range = transaction_filter.date_range
    if date_range is not None and not date_range.is_open:
        predicates.append(lambda item: date_range.contains(item.business_date))
    return predicates


def filter_transactions(
    transactions: Sequence[BankTransaction],
    transaction_filter: TransactionFilter | None = None,
) -> list[BankTransaction]:
    """Apply a TransactionFilter to bank transactions, keeping input order."""
    if transaction_filter is None:
        return list(transactions)
    return _apply(transactions, transaction_predicates(transaction_filter))


__all__ = [
    "balance_predicates",
    "filter_balances",
    "transaction_predicates",
    "filter_transactions",
]
