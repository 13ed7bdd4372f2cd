"""Domain errors for reconciliation status changes."""


def _label(status) -> str:
    return getattr(status, "value", status)


class IllegalStatusTransitionError(ValueError):
    """Raised when a status change is rejected before reaching the backend.

    Attributes:
        transaction_id: Identifier of the bank transaction.
        current: Status the transaction currently holds.
        target: Status that was requested.
    """

    def __init__(self, transaction_id: str, current, target) -> None:
        self.transaction_id = transaction_id
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot change status of transaction {transaction_id} "
            f"from {_label(current)} to {_label(target)}"
        )


class StatusMutationError(RuntimeError):
    """Raised when the bank backend rejects a status update."""

    def __init__(self, transaction_id: str, target, reason: str) -> None:
        self.transaction_id = transaction_id
        self.target = target
        super().__init__(
            f"Status update to {_label(target)} failed for transaction "
            f"{transaction_id}: {reason}"
        )


class UnknownTransactionError(KeyError):
    """Raised when a status change targets a transaction not in the store."""


__all__ = [
    "IllegalStatusTransitionError",
    "StatusMutationError",
    "UnknownTransactionError",
]
