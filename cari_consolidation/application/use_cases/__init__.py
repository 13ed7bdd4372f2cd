"""Application use cases package."""

from .get_bank_transactions import (
    BankTransactionsView,
    GetBankTransactionsUseCase,
)
from .get_consolidated_balances import (
    ConsolidatedBalancesView,
    GetConsolidatedBalancesUseCase,
    SourceFetchResult,
)
from .transaction_store import TransactionStore
from .update_transaction_status import UpdateTransactionStatusUseCase

__all__ = [
    "BankTransactionsView",
    "GetBankTransactionsUseCase",
    "ConsolidatedBalancesView",
    "GetConsolidatedBalancesUseCase",
    "SourceFetchResult",
    "TransactionStore",
    "UpdateTransactionStatusUseCase",
]
