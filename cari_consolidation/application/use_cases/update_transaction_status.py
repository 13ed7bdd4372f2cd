"""Use case to change the reconciliation status of a bank transaction."""

from concurrent.futures import Future, ThreadPoolExecutor

from cari_consolidation.application.ports.bank_source import (
    BankTransactionSourcePort,
)
from cari_consolidation.application.use_cases.transaction_store import (
    TransactionStore,
)
from cari_consolidation.domain.errors import (
    IllegalStatusTransitionError,
    StatusMutationError,
)
from cari_consolidation.domain.models import BankTransaction, ErpStatus
from cari_consolidation.domain.services import ensure_transition
from cari_consolidation.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


class UpdateTransactionStatusUseCase:
    """Apply a status change optimistically and roll back on failure."""

    def __init__(
        self,
        bank_source: BankTransactionSourcePort,
        store: TransactionStore,
        logger=None,
        usage_logger=None,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            bank_source: Port persisting status changes.
            store: Cache of the transactions currently shown.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording operator actions.
            executor: Executor used by ``submit``; created on first use.
        """
        self._bank_source = bank_source
        self._store = store
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._executor = executor

    def execute(
        self,
        transaction_id: str,
        status: ErpStatus | str,
    ) -> BankTransaction:
        """Change the status of one transaction.

        Args:
            transaction_id: Identifier of the bank transaction.
            status: Requested reconciliation status.

        Returns:
            BankTransaction: The transaction carrying the new status.

        Raises:
            UnknownTransactionError: If the store does not hold the id.
            IllegalStatusTransitionError: If the change is not allowed;
                the backend is not contacted.
            StatusMutationError: If the backend rejected the change; the
                previous status is restored.
        """
        target = ErpStatus(status)
        current = self._store.get(transaction_id)
        try:
            ensure_transition(transaction_id, current.status, target)
        except IllegalStatusTransitionError as exc:
            self._logger.warning(str(exc))
            raise

        previous = self._store.set_status(transaction_id, target)
        try:
            self._bank_source.update_transaction_status(transaction_id, target)
        except Exception as exc:
            self._store.set_status(transaction_id, previous.status)
            self._logger.error(
                f"Rolled back transaction {transaction_id} to "
                f"{previous.status.value}: {exc}"
            )
            raise StatusMutationError(transaction_id, target, str(exc)) from exc

        self._usage_logger.info(
            f"Transaction {transaction_id} status "
            f"{previous.status.value} -> {target.value}"
        )
        return self._store.get(transaction_id)

    def submit(
        self,
        transaction_id: str,
        status: ErpStatus | str,
    ) -> Future:
        """Run ``execute`` in the background and return its future."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=4)
        return self._executor.submit(self.execute, transaction_id, status)

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None


__all__ = ["UpdateTransactionStatusUseCase"]
