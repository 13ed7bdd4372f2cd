"""Lifecycle rules for bank transaction reconciliation status."""

from cari_consolidation.domain.errors import IllegalStatusTransitionError
from cari_consolidation.domain.models import ErpStatus

# success is terminal: the transaction is already posted to the ledger.
ALLOWED_TRANSITIONS: dict[ErpStatus, frozenset[ErpStatus]] = {
    ErpStatus.WAITING: frozenset(
        {
            ErpStatus.WAITING,
            ErpStatus.MANUAL,
            ErpStatus.SUCCESS,
            ErpStatus.ERROR,
        }
    ),
    ErpStatus.ERROR: frozenset({ErpStatus.WAITING, ErpStatus.MANUAL}),
    ErpStatus.MANUAL: frozenset({ErpStatus.WAITING, ErpStatus.MANUAL}),
    ErpStatus.SUCCESS: frozenset(),
}


def can_transition(current: ErpStatus, target: ErpStatus) -> bool:
    """Return True when ``current -> target`` is an allowed change."""
    return ErpStatus(target) in ALLOWED_TRANSITIONS[ErpStatus(current)]


def ensure_transition(
    transaction_id: str,
    current: ErpStatus,
    target: ErpStatus,
) -> None:
    """Raise IllegalStatusTransitionError for a forbidden change."""
    if not can_transition(current, target):
        raise IllegalStatusTransitionError(transaction_id, current, target)


__all__ = ["ALLOWED_TRANSITIONS", "can_transition", "ensure_transition"]
