"""In-memory cache of bank transactions shown to the operator."""

from collections.abc import Iterable
from dataclasses import replace
import threading

from cari_consolidation.domain.errors import UnknownTransactionError
from cari_consolidation.domain.models import BankTransaction, ErpStatus


class TransactionStore:
    """Thread-safe map of transaction id to the latest known transaction.

    Updates to one id never touch another; concurrent updates to the same
    id are last-write-wins.
    """

    def __init__(self, transactions: Iterable[BankTransaction] = ()) -> None:
        self._lock = threading.Lock()
        self._items: dict[str, BankTransaction] = {}
        self.load(transactions)

    def load(self, transactions: Iterable[BankTransaction]) -> None:
        """Insert or replace transactions, e.g. after a list fetch."""
        with self._lock:
            for transaction in transactions:
                self._items[transaction.transaction_id] = transaction

    def get(self, transaction_id: str) -> BankTransaction:
        with self._lock:
            try:
                return self._items[transaction_id]
            except KeyError:
                raise UnknownTransactionError(transaction_id) from None

    def set_status(
        self,
        transaction_id: str,
        status: ErpStatus,
    ) -> BankTransaction:
        """Replace the status of one transaction.

        Returns:
            BankTransaction: The transaction as it was before the change.
        """
        with self._lock:
            try:
                previous = self._items[transaction_id]
            except KeyError:
                raise UnknownTransactionError(transaction_id) from None
            self._items[transaction_id] = replace(previous, status=status)
            return previous

    def snapshot(self) -> list[BankTransaction]:
        with self._lock:
            return list(self._items.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


__all__ = ["TransactionStore"]
