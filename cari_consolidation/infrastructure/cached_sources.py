"""TTL caches in front of the ERP, bank and customer sources.

Each kind of data has its own time to live. Failed loads are never
cached. Loads run outside the cache lock so concurrent fetches for
different companies do not serialize.
"""

from collections.abc import Callable, Hashable
import threading
import time
from typing import Any

from cari_consolidation.application.ports.bank_source import (
    BankTransactionSourcePort,
)
from cari_consolidation.application.ports.customer_directory import (
    CustomerDirectoryPort,
)
from cari_consolidation.application.ports.erp_source import (
    ErpRecordSourcePort,
)
from cari_consolidation.domain.models import (
    AgingRecord,
    BankAccount,
    BankTransaction,
    Customer,
    ErpAccount,
    ErpStatus,
    TransactionFilter,
)


class TtlCache:
    """Small thread-safe cache whose entries expire after ``ttl_seconds``.

    Expired entries are dropped whenever a new value is stored.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[Hashable, tuple[float, Any]] = {}

    def get_or_load(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        if self._ttl > 0:
            with self._lock:
                entry = self._entries.get(key)
            if entry is not None and entry[0] > self._clock():
                return entry[1]
        value = loader()
        if self._ttl > 0:
            with self._lock:
                now = self._clock()
                self._entries = {
                    cached_key: entry
                    for cached_key, entry in self._entries.items()
                    if entry[0] > now
                }
                self._entries[key] = (now + self._ttl, value)
        return value

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def invalidate(self) -> None:
        with self._lock:
            self._entries.clear()


class CachedErpRecordSource(ErpRecordSourcePort):
    """ERP source caching aging reports and account lists per company."""

    def __init__(
        self,
        source: ErpRecordSourcePort,
        aging_ttl_seconds: float = 600,
        accounts_ttl_seconds: float = 900,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._aging = TtlCache(aging_ttl_seconds, clock)
        self._accounts = TtlCache(accounts_ttl_seconds, clock)

    def fetch_aging_records(
        self,
        fiscal_year: int,
        company_id: str,
    ) -> list[AgingRecord]:
        return list(
            self._aging.get_or_load(
                (fiscal_year, company_id),
                lambda: self._source.fetch_aging_records(fiscal_year, company_id),
            )
        )

    def fetch_accounts(
        self,
        fiscal_year: int,
        company_id: str,
    ) -> list[ErpAccount]:
        return list(
            self._accounts.get_or_load(
                (fiscal_year, company_id),
                lambda: self._source.fetch_accounts(fiscal_year, company_id),
            )
        )

    def invalidate(self) -> None:
        self._aging.invalidate()
        self._accounts.invalidate()


class CachedBankTransactionSource(BankTransactionSourcePort):
    """Bank source caching transaction lists per filter and bank accounts."""

    def __init__(
        self,
        source: BankTransactionSourcePort,
        transactions_ttl_seconds: float = 120,
        accounts_ttl_seconds: float = 900,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._transactions = TtlCache(transactions_ttl_seconds, clock)
        self._accounts = TtlCache(accounts_ttl_seconds, clock)

    def fetch_transactions(
        self,
        transaction_filter: TransactionFilter | None = None,
    ) -> list[BankTransaction]:
        return list(
            self._transactions.get_or_load(
                transaction_filter,
                lambda: self._source.fetch_transactions(transaction_filter),
            )
        )

    def fetch_bank_accounts(self) -> list[BankAccount]:
        return list(
            self._accounts.get_or_load(
                "bank_accounts",
                self._source.fetch_bank_accounts,
            )
        )

    def update_transaction_status(
        self,
        transaction_id: str,
        status: ErpStatus,
    ) -> None:
        self._source.update_transaction_status(transaction_id, status)
        self._transactions.invalidate()

    def invalidate(self) -> None:
        self._transactions.invalidate()
        self._accounts.invalidate()


class CachedCustomerDirectory(CustomerDirectoryPort):
    """Customer directory cached as a whole."""

    def __init__(
        self,
        source: CustomerDirectoryPort,
        ttl_seconds: float = 900,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._cache = TtlCache(ttl_seconds, clock)

    def fetch_customers(self) -> list[Customer]:
        return list(
            self._cache.get_or_load("customers", self._source.fetch_customers)
        )

    def invalidate(self) -> None:
        self._cache.invalidate()


__all__ = [
    "TtlCache",
    "CachedErpRecordSource",
    "CachedBankTransactionSource",
    "CachedCustomerDirectory",
]
