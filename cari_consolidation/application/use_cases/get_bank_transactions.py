"""Use case to list bank transactions with their cash-flow summary."""

from collections.abc import Iterable
from dataclasses import dataclass

from cari_consolidation.application.ports.bank_source import (
    BankTransactionSourcePort,
)
from cari_consolidation.application.use_cases.transaction_store import (
    TransactionStore,
)
from cari_consolidation.domain.models import (
    BankAccount,
    BankSummaryReport,
    BankTransaction,
    TransactionFilter,
)
from cari_consolidation.domain.services import (
    exclude_bank_accounts,
    filter_transactions,
    summarize_bank_transactions,
)
from cari_consolidation.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class BankTransactionsView:
    """Transactions in scope, reference accounts and their summary."""

    transactions: list[BankTransaction]
    bank_accounts: list[BankAccount]
    report: BankSummaryReport
    error: str | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None


class GetBankTransactionsUseCase:
    """Fetch, filter and summarize bank transactions."""

    def __init__(
        self,
        bank_source: BankTransactionSourcePort,
        excluded_bank_acc_ids: Iterable[str] = (),
        store: TransactionStore | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            bank_source: Port providing transactions and bank accounts.
            excluded_bank_acc_ids: Bank accounts hidden from the view.
            store: Optional store refreshed with the fetched transactions
                so that status changes can find them.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._bank_source = bank_source
        self._excluded = tuple(excluded_bank_acc_ids)
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        transaction_filter: TransactionFilter | None = None,
    ) -> BankTransactionsView:
        """Return the filtered transactions and their bank summary.

        The filter is forwarded to the source and applied again locally so
        that a source ignoring some selectors still yields a correct view.
        """
        error = None
        try:
            transactions = self._bank_source.fetch_transactions(
                transaction_filter
            )
        except Exception as exc:
            self._logger.warning(f"Bank transaction fetch failed: {exc}")
            transactions = []
            error = str(exc)

        try:
            bank_accounts = self._bank_source.fetch_bank_accounts()
        except Exception as exc:
            self._logger.warning(f"Bank account fetch failed: {exc}")
            bank_accounts = []

        in_scope = filter_transactions(transactions, transaction_filter)
        in_scope = exclude_bank_accounts(in_scope, self._excluded)
        if self._store is not None:
            self._store.load(in_scope)

        report = summarize_bank_transactions(in_scope, bank_accounts)
        self._logger.info(
            f"Bank summary over {report.transaction_count} transactions: "
            f"in={report.total.inflow}, out={report.total.outflow}, "
            f"balance={report.total.balance}"
        )
        return BankTransactionsView(
            transactions=in_scope,
            bank_accounts=list(bank_accounts),
            report=report,
            error=error,
        )


__all__ = ["GetBankTransactionsUseCase", "BankTransactionsView"]
