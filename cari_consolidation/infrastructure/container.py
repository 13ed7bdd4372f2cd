"""Composition root for wiring infrastructure adapters."""

from cari_consolidation.application.ports.bank_source import (
    BankTransactionSourcePort,
)
from cari_consolidation.application.ports.customer_directory import (
    CustomerDirectoryPort,
)
from cari_consolidation.application.ports.database import DatabaseEnginePort
from cari_consolidation.application.ports.erp_source import (
    ErpRecordSourcePort,
)
from cari_consolidation.application.use_cases.get_bank_transactions import (
    GetBankTransactionsUseCase,
)
from cari_consolidation.application.use_cases.get_consolidated_balances import (
    GetConsolidatedBalancesUseCase,
)
from cari_consolidation.application.use_cases.transaction_store import (
    TransactionStore,
)
from cari_consolidation.application.use_cases.update_transaction_status import (
    UpdateTransactionStatusUseCase,
)
from cari_consolidation.infrastructure.bank_repository import (
    SqlAlchemyBankTransactionSource,
)
from cari_consolidation.infrastructure.cached_sources import (
    CachedBankTransactionSource,
    CachedCustomerDirectory,
    CachedErpRecordSource,
)
from cari_consolidation.infrastructure.customer_repository import (
    SqlAlchemyCustomerDirectory,
)
from cari_consolidation.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from cari_consolidation.infrastructure.logging.logger import get_app_logger
from cari_consolidation.infrastructure.netsis_repository import (
    NetsisErpRecordSource,
)
from cari_consolidation.infrastructure.settings import ConsolidationSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_erp_source(
    db_port: DatabaseEnginePort | None = None,
    settings: ConsolidationSettings | None = None,
) -> ErpRecordSourcePort:
    """Return the ERP source, cached unless caching is disabled."""
    settings = settings or ConsolidationSettings.from_env()
    source = NetsisErpRecordSource(
        db_port or build_database_adapter(),
        linked_server=settings.erp_linked_server,
    )
    if not settings.cache_enabled:
        return source
    return CachedErpRecordSource(
        source,
        aging_ttl_seconds=settings.aging_stale_seconds,
        accounts_ttl_seconds=settings.erp_accounts_stale_seconds,
    )


def build_bank_source(
    db_port: DatabaseEnginePort | None = None,
    settings: ConsolidationSettings | None = None,
) -> BankTransactionSourcePort:
    """Return the bank transaction source, cached unless disabled."""
    settings = settings or ConsolidationSettings.from_env()
    source = SqlAlchemyBankTransactionSource(db_port or build_database_adapter())
    if not settings.cache_enabled:
        return source
    return CachedBankTransactionSource(
        source,
        transactions_ttl_seconds=settings.bank_transactions_stale_seconds,
        accounts_ttl_seconds=settings.bank_accounts_stale_seconds,
    )


def build_customer_directory(
    db_port: DatabaseEnginePort | None = None,
    settings: ConsolidationSettings | None = None,
) -> CustomerDirectoryPort:
    """Return the customer directory, cached unless disabled."""
    settings = settings or ConsolidationSettings.from_env()
    source = SqlAlchemyCustomerDirectory(db_port or build_database_adapter())
    if not settings.cache_enabled:
        return source
    return CachedCustomerDirectory(
        source,
        ttl_seconds=settings.erp_accounts_stale_seconds,
    )


def build_consolidated_balances_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: ConsolidationSettings | None = None,
) -> GetConsolidatedBalancesUseCase:
    """Wire the consolidated balances use case."""
    settings = settings or ConsolidationSettings.from_env()
    resolved_db = db_port or build_database_adapter()
    return GetConsolidatedBalancesUseCase(
        erp_source=build_erp_source(resolved_db, settings),
        customer_directory=build_customer_directory(resolved_db, settings),
        fiscal_year=settings.fiscal_year,
        max_workers=settings.fetch_max_workers,
        logger=get_app_logger(),
    )


def build_bank_use_cases(
    db_port: DatabaseEnginePort | None = None,
    settings: ConsolidationSettings | None = None,
) -> tuple[GetBankTransactionsUseCase, UpdateTransactionStatusUseCase]:
    """Wire the bank listing and status use cases around one shared store."""
    settings = settings or ConsolidationSettings.from_env()
    bank_source = build_bank_source(db_port, settings)
    store = TransactionStore()
    listing = GetBankTransactionsUseCase(
        bank_source,
        excluded_bank_acc_ids=settings.excluded_bank_acc_ids,
        store=store,
    )
    status = UpdateTransactionStatusUseCase(bank_source, store)
    return listing, status


__all__ = [
    "build_database_adapter",
    "build_erp_source",
    "build_bank_source",
    "build_customer_directory",
    "build_consolidated_balances_use_case",
    "build_bank_use_cases",
]
